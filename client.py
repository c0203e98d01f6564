"""
Small HTTP client for the Finboard API, used for smoke checks from the shell.

  python client.py check                       # row count for every read endpoint
  python client.py show chart/data             # print one resource as a table
  python client.py --base-url http://host:3000/api check
"""

import argparse
import os
import sys

import requests

DEFAULT_BASE_URL = os.environ.get("FINBOARD_API", "http://localhost:3000/api")
READ_ENDPOINTS = ["data", "chart/data", "bar/data", "task/data", "timestamps/data"]
TIMEOUT = 10


class ApiError(Exception):
    """Non-2xx response or a {success: false} envelope."""


def _url(base_url: str, endpoint: str) -> str:
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


def _unwrap(resp) -> dict:
    try:
        payload = resp.json()
    except ValueError:
        payload = {}
    if not resp.ok:
        raise ApiError(payload.get("error") or f"HTTP {resp.status_code}")
    if not payload.get("success"):
        raise ApiError(payload.get("error") or "API returned success: false")
    return payload


def fetch_records(base_url: str, endpoint: str, session=None) -> list:
    """GET one resource and return its records."""
    http = session or requests
    resp = http.get(_url(base_url, endpoint), timeout=TIMEOUT)
    return _unwrap(resp).get("data", [])


def save_records(base_url: str, endpoint: str, records: list, session=None) -> dict:
    """POST records as {"data": [...]} and return the response envelope."""
    http = session or requests
    resp = http.post(_url(base_url, endpoint), json={"data": records}, timeout=TIMEOUT)
    return _unwrap(resp)


def check_endpoints(base_url: str, endpoints=None, session=None) -> dict:
    """Row count per endpoint, or the error message when it fails."""
    results = {}
    for ep in endpoints or READ_ENDPOINTS:
        try:
            results[ep] = len(fetch_records(base_url, ep, session=session))
        except (ApiError, requests.RequestException) as e:
            results[ep] = f"error: {e}"
    return results


def format_table(records: list) -> str:
    if not records:
        return "(no rows)"
    headers = list(records[0].keys())
    widths = [max(len(h), *(len(str(r.get(h, ""))) for r in records)) for h in headers]
    lines = ["  ".join(h.ljust(w) for h, w in zip(headers, widths))]
    for r in records:
        lines.append("  ".join(str(r.get(h, "")).ljust(w) for h, w in zip(headers, widths)))
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Finboard API client")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base, e.g. http://localhost:3000/api")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("check", help="Fetch every read endpoint and report row counts")
    show = sub.add_parser("show", help="Print one resource")
    show.add_argument("endpoint", help="e.g. data, chart/data, bar/data")
    args = parser.parse_args(argv)

    if args.command == "check":
        failed = False
        for ep, result in check_endpoints(args.base_url).items():
            print(f"  {ep}: {result if isinstance(result, str) else f'{result} rows'}")
            failed = failed or isinstance(result, str)
        return 1 if failed else 0

    try:
        records = fetch_records(args.base_url, args.endpoint)
    except (ApiError, requests.RequestException) as e:
        print(f"Error fetching {args.endpoint}: {e}")
        return 1
    print(format_table(records))
    return 0


if __name__ == "__main__":
    sys.exit(main())
