"""Flask route handlers for the Finboard CSV API (Blueprint)."""

import json
from pathlib import Path
from flask import Blueprint, request

from csv_store import read_records, write_records, append_records
from mirror import NullMirror, publish_in_background

bp = Blueprint("main", __name__)

# Module-level references, set by init_routes()
STATIC_DIR = None
RESOURCES = []
MIRROR = NullMirror()
_routes = {}  # (method, path) -> handler

STATIC_FILES = {
    "/": "index.html",
    "/index.html": "index.html",
    "/style.css": "style.css",
    "/main.js": "main.js",
}

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS, PUT, DELETE",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class ParseError(ValueError):
    """Request body is not valid JSON."""


class ValidationError(ValueError):
    """Request body is JSON but not the expected shape."""


def init_routes(config):
    """Inject dependencies from main(). Call before registering blueprint."""
    global STATIC_DIR, RESOURCES, MIRROR
    STATIC_DIR = Path(config["STATIC_DIR"])
    RESOURCES = list(config["RESOURCES"])
    MIRROR = config.get("MIRROR") or NullMirror()
    _routes.clear()
    for res in RESOURCES:
        _routes[("GET", res["read_path"])] = _make_read_handler(res)
        _routes[("POST", res["save_path"])] = _make_save_handler(res)
    _routes[("GET", "/api/resources")] = api_resources
    savings = get_resource("savings")
    if savings is not None:
        _routes[("GET", "/api/chart/summary")] = lambda: api_savings_summary(savings)


def get_resource(name):
    for res in RESOURCES:
        if res["name"] == name:
            return res
    return None


def route_table():
    """Sorted list of "METHOD path" strings currently wired."""
    return sorted(f"{m} {p}" for m, p in _routes)


# ── Response helpers ──

def send_json(payload, status=200):
    from flask import jsonify
    return jsonify(payload), status


def send_error(status, message):
    print(f"[Router] Error response {status}: {message}")
    return send_json({"success": False, "error": message}, status)


# ── CORS ──

@bp.before_app_request
def short_circuit_options():
    print(f"[Router] {request.method} {request.path}")
    if request.method == "OPTIONS":
        return "", 200


@bp.after_app_request
def add_cors_headers(resp):
    for k, v in CORS_HEADERS.items():
        resp.headers[k] = v
    return resp


# ── Resource handlers ──

def parse_request_body():
    """Parse the body as JSON. Empty body is an empty object."""
    raw = request.get_data(as_text=True)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        raise ParseError("Invalid JSON")


def validate_records(body):
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list):
        raise ValidationError("Data must be an array")
    if any(not isinstance(row, dict) for row in data):
        raise ValidationError("Each record must be an object")
    return data


def _make_read_handler(res):
    def handler():
        try:
            data = read_records(res["path"])
        except (OSError, UnicodeDecodeError) as e:
            return send_error(500, f"Failed to read {res['name']} CSV: {e}")
        print(f"[Router] Sending {len(data)} rows of {res['name']}")
        return send_json({"success": True, "data": data})
    return handler


def _make_save_handler(res):
    def handler():
        try:
            data = validate_records(parse_request_body())
        except ValueError as e:
            return send_error(400, str(e))
        try:
            if res["mode"] == "append":
                append_records(res["path"], data)
            else:
                write_records(res["path"], data)
        except (OSError, UnicodeDecodeError) as e:
            return send_error(500, f"Failed to save data: {e}")
        publish_in_background(MIRROR, res["path"], f"Update {res['path'].name} via server")
        return send_json({"success": True, "message": "Data saved successfully"})
    return handler


def api_resources():
    """List the resource bindings."""
    from resources import describe_resources
    try:
        return send_json({"success": True, "data": describe_resources(RESOURCES)})
    except (OSError, UnicodeDecodeError) as e:
        return send_error(500, f"Failed to inspect resources: {e}")


def api_savings_summary(res):
    """Monthly and cumulative savings totals for the chart page."""
    from savings import summarize_savings
    try:
        records = read_records(res["path"])
    except (OSError, UnicodeDecodeError) as e:
        return send_error(500, f"Failed to read savings CSV: {e}")
    return send_json({"success": True, "data": summarize_savings(records)})


# ── Static files ──

def serve_static(path):
    from flask import send_from_directory
    filename = STATIC_FILES.get(path)
    if filename is None:
        return send_error(404, "Not found")
    if not (STATIC_DIR / filename).is_file():
        return send_error(404, f"{filename} not found")
    return send_from_directory(STATIC_DIR, filename)


# ── Dispatch ──

@bp.route("/", defaults={"path": ""}, methods=["GET", "POST"])
@bp.route("/<path:path>", methods=["GET", "POST"])
def dispatch(path):
    method = "GET" if request.method == "HEAD" else request.method
    handler = _routes.get((method, request.path))
    if handler is not None:
        return handler()
    if method == "GET":
        return serve_static(request.path)
    return send_error(404, "Not found")


@bp.app_errorhandler(404)
@bp.app_errorhandler(405)
def not_found(e):
    return send_error(404, "Not found")
