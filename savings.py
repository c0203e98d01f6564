"""
Savings ledger for the savings chart page.
Rows look like Month,Year,Reason,Value (e.g. Jan,2024,Salary,1000). Entries are
grouped by "<Mon> <Year>" and totalled per month and cumulatively.
"""

from typing import Optional

import pandas as pd

MONTH_ORDER = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}


def _safe_number(raw) -> float:
    if raw is None:
        return 0.0
    s = str(raw).strip()
    if not s:
        return 0.0
    try:
        return float(s)
    except ValueError:
        return 0.0


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _month_sort_key(key: str):
    month, _, year = key.partition(" ")
    try:
        year_num = int(year)
    except ValueError:
        year_num = 0
    return (year_num, MONTH_ORDER.get(month, 13), key)


class SavingsLedger:
    """Monthly savings entries plus the month currently being edited."""

    def __init__(self):
        self._monthly = {}
        self._editing = None

    @classmethod
    def from_records(cls, records: list[dict]) -> "SavingsLedger":
        ledger = cls()
        for item in records:
            month = (item.get("Month") or "").strip()
            year = (item.get("Year") or "").strip()
            value = item.get("Value", item.get("Value\r", 0))
            ledger._monthly.setdefault(f"{month} {year}", []).append({
                "reason": item.get("Reason", ""),
                "value": _safe_number(value),
            })
        return ledger

    # ── Reading ──

    def months(self) -> list[str]:
        return sorted(self._monthly, key=_month_sort_key)

    def entries(self, month: str) -> list[dict]:
        return [dict(e) for e in self._monthly.get(month, [])]

    def totals_frame(self) -> pd.DataFrame:
        """One row per month in chronological order: month, monthly, cumulative."""
        rows = [
            {"month": m, "value": e["value"]}
            for m in self.months()
            for e in self._monthly[m]
        ]
        months = self.months()
        if not months:
            return pd.DataFrame({"month": [], "monthly": [], "cumulative": []})
        df = pd.DataFrame(rows, columns=["month", "value"])
        monthly = df.groupby("month", sort=False)["value"].sum().reindex(months, fill_value=0.0)
        return pd.DataFrame({
            "month": months,
            "monthly": monthly.to_numpy(dtype=float),
            "cumulative": monthly.cumsum().to_numpy(dtype=float),
        })

    def month_total(self, month: str) -> float:
        return float(sum(e["value"] for e in self._monthly.get(month, [])))

    def cumulative_totals(self) -> list[float]:
        return [float(v) for v in self.totals_frame()["cumulative"]]

    def cumulative_total_up_to(self, month: str) -> float:
        months = self.months()
        if month not in months:
            return 0.0
        return self.cumulative_totals()[months.index(month)]

    def summary(self) -> dict:
        frame = self.totals_frame()
        months = list(frame["month"])
        monthly = [float(v) for v in frame["monthly"]]
        cumulative = [float(v) for v in frame["cumulative"]]
        return {
            "months": months,
            "monthly": monthly,
            "cumulative": cumulative,
            "latest_month": months[-1] if months else None,
            "latest_monthly": monthly[-1] if monthly else 0.0,
            "current_total": cumulative[-1] if cumulative else 0.0,
        }

    # ── Editing ──

    @property
    def editing_month(self) -> Optional[str]:
        return self._editing

    def open_month(self, month: str) -> None:
        self._editing = month
        self._monthly.setdefault(month, [])

    def close_month(self) -> None:
        # Drop a month opened for editing that never received an entry
        if self._editing and not self._monthly.get(self._editing):
            self._monthly.pop(self._editing, None)
        self._editing = None

    def _editing_entries(self) -> list[dict]:
        if self._editing is None:
            raise ValueError("No month is open for editing")
        return self._monthly.setdefault(self._editing, [])

    def add_entry(self, reason: str, value) -> None:
        reason = (reason or "").strip()
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = None
        if not reason or number is None:
            raise ValueError("Please enter both reason and value")
        self._editing_entries().append({"reason": reason, "value": number})

    def update_entry(self, index: int, field: str, value) -> None:
        if field not in ("reason", "value"):
            raise ValueError(f"Unknown field: {field}")
        entry = self._editing_entries()[index]
        entry[field] = _safe_number(value) if field == "value" else value

    def delete_entry(self, index: int) -> None:
        self._editing_entries().pop(index)

    def to_records(self) -> list[dict]:
        """Records for the savings save endpoint, months in chronological order."""
        out = []
        for key in self.months():
            month, _, year = key.partition(" ")
            for e in self._monthly[key]:
                out.append({
                    "Month": month,
                    "Year": year,
                    "Reason": e["reason"],
                    "Value": _format_value(e["value"]),
                })
        return out


def summarize_savings(records: list[dict]) -> dict:
    """Monthly and cumulative totals for a list of savings records."""
    return SavingsLedger.from_records(records).summary()
