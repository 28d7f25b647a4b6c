"""Error types raised while loading employee workbooks."""
from __future__ import annotations

from dataclasses import dataclass


class DashboardError(RuntimeError):
    """Base for every error surfaced to the user as a notice."""

    user_message: str = "خطا"


@dataclass(eq=True)
class UnsupportedFileTypeError(DashboardError):
    filename: str
    user_message: str = "لطفا یک فایل اکسل (xlsx یا xls) انتخاب کنید"

    def __str__(self) -> str:
        return f"unsupported file type: {self.filename!r} (expected .xlsx or .xls)"


@dataclass(eq=True)
class WorkbookParseError(DashboardError):
    filename: str
    reason: str = ""
    user_message: str = "مشکلی در خواندن فایل اکسل پیش آمد"

    def __str__(self) -> str:
        detail = f": {self.reason}" if self.reason else ""
        return f"could not read workbook {self.filename!r}{detail}"


__all__ = ["DashboardError", "UnsupportedFileTypeError", "WorkbookParseError"]
