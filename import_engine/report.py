"""
import_engine.report - Structured result of a CSV import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    total_rows: int = 0
    new_rows: int = 0
    columns: list[str] = field(default_factory=list)
    added_date: str = ""
    errors: list[dict] = field(default_factory=list)   # [{row, reason}]

    def add_error(self, row: int, reason: str):
        self.errors.append({"row": row, "reason": reason})

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "new_rows": self.new_rows,
            "columns": self.columns,
            "added_date": self.added_date,
            "errors": self.errors,
        }
