"""Spreadsheet cells: values, types, number formats and change tracking."""

from __future__ import annotations

import base64
import binascii
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from decimal import Decimal
from enum import IntEnum
from typing import Any

from sheetcells.columns import GENERAL_FORMAT
from sheetcells.dates import UNIX_EPOCH, UTC, time_from_excel_time, time_to_excel_time
from sheetcells.styles import RichTextRun, Style
from sheetcells.validation import DataValidation

MAX_NON_SCIENTIFIC_NUMBER = 1e11
MIN_NON_SCIENTIFIC_NUMBER = 1e-9

DEFAULT_DATE_FORMAT = "mm-dd-yy"
DEFAULT_DATE_TIME_FORMAT = "m/d/yy h:mm"

_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_RE = re.compile(r"[+-]?\d+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _parse_float(text: str) -> float:
    """Parse a decimal number strictly: no spaces, no underscores."""
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(f'parsing "{text}": invalid syntax')
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(f'parsing "{text}": value out of range')
    return value


def _parse_int64(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f'parsing "{text}": invalid syntax')
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f'parsing "{text}": value out of range')
    return value


def _format_float(value: float) -> str:
    """Shortest exact decimal text for value, never in scientific notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_any(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_any(item) for item in value) + "]"
    return str(value)


class CellType(IntEnum):
    """The storage type of a cell's value."""

    STRING = 0
    STRING_FORMULA = 1
    NUMERIC = 2
    BOOL = 3
    INLINE = 4
    ERROR = 5
    DATE = 6

    @staticmethod
    def fallback_to(
        cell_type: CellType | None, cell_data: str, fallback: CellType
    ) -> CellType:
        """Keep a numeric type only if cell_data parses as a number."""
        if cell_type is CellType.NUMERIC:
            try:
                _parse_float(cell_data)
            except ValueError:
                return fallback
            return cell_type
        return fallback


@dataclass
class Hyperlink:
    """A link held by a cell; in-workbook targets are kept in location."""

    display_string: str = ""
    link: str = ""
    tooltip: str = ""
    location: str = ""


@dataclass(frozen=True)
class DateTimeOptions:
    """How a datetime is stored: the zone to shift into and the format to show."""

    location: tzinfo = UTC
    excel_time_format: str = DEFAULT_DATE_FORMAT


DEFAULT_DATE_OPTIONS = DateTimeOptions(UTC, DEFAULT_DATE_FORMAT)
DEFAULT_DATE_TIME_OPTIONS = DateTimeOptions(UTC, DEFAULT_DATE_TIME_FORMAT)


class RowNotFoundError(LookupError):
    """Raised when a stored row cannot be found under its key."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(key, reason)
        self.key = key
        self.reason = reason

    def __str__(self) -> str:
        return f'Row "{self.key}" not found. {self.reason}'


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _unb64(token: str, prefix: str) -> str:
    try:
        raw = base64.b64decode(token.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError(f"invalid base64 field: {token!r}") from exc
    return raw.decode("utf-8").removeprefix(prefix)


def _parse_bool_token(token: str) -> bool:
    if token == "true":
        return True
    if token == "false":
        return False
    raise ValueError(f"invalid boolean field: {token!r}")


def _parse_int_token(token: str) -> int:
    try:
        return _parse_int64(token)
    except ValueError as exc:
        raise ValueError(f"invalid integer field: {token!r}") from exc


@dataclass(eq=False)
class Cell:
    """One cell of a row, with its value and how it is stored and shown."""

    value: str = ""
    rich_text: list[RichTextRun] = field(default_factory=list)
    formula: str = ""
    style: Style | None = None
    num_fmt: str = ""
    date1904: bool = False
    hidden: bool = False
    hmerge: int = 0
    vmerge: int = 0
    cell_type: CellType = CellType.STRING
    data_validation: DataValidation | None = None
    hyperlink: Hyperlink = field(default_factory=Hyperlink)
    num: int = 0
    _modified: bool = field(default=False, init=False, repr=False)
    _orig_value: str = field(default="", init=False, repr=False)
    _orig_num_fmt: str = field(default="", init=False, repr=False)
    _orig_rich_text: list[RichTextRun] = field(
        default_factory=list, init=False, repr=False
    )

    # --- serialisation -------------------------------------------------

    def to_bytes(self) -> bytes:
        """Encode the cell as one line of space-separated fields.

        Strings are base64 encoded behind a fixed prefix so that empty
        strings and newlines survive.
        """
        fields = [
            _b64("V" + self.value),
            _b64("F" + self.formula),
            _b64("N" + self.num_fmt),
            _format_any(self.date1904),
            _format_any(self.hidden),
            str(self.hmerge),
            str(self.vmerge),
            str(int(self.cell_type)),
            _b64("HDS" + self.hyperlink.display_string),
            _b64("HL" + self.hyperlink.link),
            _b64("HTT" + self.hyperlink.tooltip),
            str(self.num),
        ]
        return (" ".join(fields) + "\n").encode("ascii")

    @classmethod
    def from_bytes(cls, data: bytes) -> Cell:
        """Decode a cell produced by to_bytes."""
        tokens = data.decode("ascii").split()
        if len(tokens) != 12:
            raise ValueError(f"expected 12 fields, found {len(tokens)}")
        (value, formula, num_fmt, date1904, hidden, hmerge, vmerge,
         cell_type, hds, hl, htt, num) = tokens
        cell = cls(
            value=_unb64(value, "V"),
            formula=_unb64(formula, "F"),
            num_fmt=_unb64(num_fmt, "N"),
            date1904=_parse_bool_token(date1904),
            hidden=_parse_bool_token(hidden),
            hmerge=_parse_int_token(hmerge),
            vmerge=_parse_int_token(vmerge),
            cell_type=CellType(_parse_int_token(cell_type)),
            num=_parse_int_token(num),
        )
        cell.hyperlink.display_string = _unb64(hds, "HDS")
        cell.hyperlink.link = _unb64(hl, "HL")
        cell.hyperlink.tooltip = _unb64(htt, "HTT")
        return cell

    # --- change tracking -----------------------------------------------

    def modified(self) -> bool:
        """True if the cell has changed since it was last persisted."""
        return (
            self._modified
            or self.value != self._orig_value
            or self.num_fmt != self._orig_num_fmt
            or list(self.rich_text or []) != list(self._orig_rich_text or [])
        )

    def mark_persisted(self) -> None:
        """Record the current state as the persisted one."""
        self._modified = False
        self._orig_value = self.value
        self._orig_num_fmt = self.num_fmt
        self._orig_rich_text = list(self.rich_text or [])

    # --- setters -------------------------------------------------------

    def merge(self, hcells: int, vcells: int) -> None:
        """Merge with cells to the right and below."""
        self.hmerge = hcells
        self.vmerge = vcells
        self._modified = True

    def set_string(self, value: str) -> None:
        self.value = value
        self.rich_text = []
        self.formula = ""
        self.cell_type = CellType.STRING
        self._modified = True

    def set_rich_text(self, runs: list[RichTextRun]) -> None:
        self.value = ""
        self.rich_text = list(runs)
        self.formula = ""
        self.cell_type = CellType.STRING
        self._modified = True

    def set_float(self, value: float) -> None:
        self.set_value(float(value))

    def set_float_with_format(self, value: float, number_format: str) -> None:
        self.set_value(float(value))
        self.num_fmt = number_format
        self.formula = ""

    def set_format(self, number_format: str) -> None:
        self.num_fmt = number_format
        self._modified = True

    def set_date(self, t: datetime) -> None:
        self.set_date_with_options(t, DEFAULT_DATE_OPTIONS)

    def set_date_time(self, t: datetime) -> None:
        self.set_date_with_options(t, DEFAULT_DATE_TIME_OPTIONS)

    def set_date_with_options(self, t: datetime, options: DateTimeOptions) -> None:
        """Store t as its wall-clock time in options.location, to the second.

        Naive datetimes are taken to be in UTC.
        """
        if t.tzinfo is None:
            t = t.replace(tzinfo=UTC)
        delta = t - UNIX_EPOCH
        unix_seconds = delta.days * 86400 + delta.seconds
        offset = t.astimezone(options.location).utcoffset() or timedelta(0)
        shifted = UNIX_EPOCH + timedelta(
            seconds=unix_seconds + int(offset.total_seconds())
        )
        self.set_date_time_with_format(
            time_to_excel_time(shifted, self.date1904), options.excel_time_format
        )
        self._modified = True

    def set_date_time_with_format(self, value: float, number_format: str) -> None:
        self.value = _format_float(value)
        self.num_fmt = number_format
        self.formula = ""
        self.cell_type = CellType.NUMERIC
        self._modified = True

    def set_int(self, value: int) -> None:
        self.set_value(int(value))

    def set_numeric(self, value: str) -> None:
        self.value = value
        self.num_fmt = GENERAL_FORMAT
        self.formula = ""
        self.cell_type = CellType.NUMERIC
        self._modified = True

    def set_value(self, value: Any) -> None:
        """Store a value of any type, choosing the cell type to match."""
        if isinstance(value, datetime):
            self.set_date_time(value)
        elif isinstance(value, bool):
            self.set_string(_format_any(value))
        elif isinstance(value, int):
            self.set_numeric(str(value))
        elif isinstance(value, float):
            self.set_numeric(_format_float(value))
        elif isinstance(value, str):
            self.set_string(value)
        elif isinstance(value, (bytes, bytearray)):
            self.set_string(bytes(value).decode("utf-8", errors="replace"))
        elif value is None:
            self.set_string("")
        else:
            self.set_string(_format_any(value))

    def set_bool(self, value: bool) -> None:
        self.value = "1" if value else "0"
        self.cell_type = CellType.BOOL
        self._modified = True

    def set_formula(self, formula: str) -> None:
        """Set a formula whose result is a number or boolean."""
        self.formula = formula
        self.cell_type = CellType.NUMERIC
        self._modified = True

    def set_string_formula(self, formula: str) -> None:
        """Set a formula whose result is a string."""
        self.formula = formula
        self.cell_type = CellType.STRING_FORMULA
        self._modified = True

    def get_style(self) -> Style:
        """Return the cell's style, creating a default one if it has none."""
        if self.style is None:
            self.style = Style()
        return self.style

    def set_style(self, style: Style) -> None:
        self.style = style
        self._modified = True

    def set_data_validation(self, validation: DataValidation) -> None:
        self.data_validation = validation
        self._modified = True

    # --- getters -------------------------------------------------------

    def as_float(self) -> float:
        return _parse_float(self.value)

    def as_int(self) -> int:
        """Return the value truncated to an integer (53 bits of precision)."""
        number = _parse_float(self.value)
        if not math.isfinite(number):
            raise ValueError(f'parsing "{self.value}": not a finite number')
        return int(number)

    def as_int64(self) -> int:
        return _parse_int64(self.value)

    def as_bool(self) -> bool:
        if self.cell_type == CellType.BOOL:
            return self.value == "1"
        if self.cell_type == CellType.NUMERIC:
            return self.value != "0"
        return self.value != ""

    def get_time(self, date1904: bool) -> datetime:
        return time_from_excel_time(self.as_float(), date1904)