"""Spreadsheet cells, column ranges, data validation, Excel dates, a binary cell encoding and a disk-backed cell store."""

__version__ = "0.1.0"

__all__ = [
    "cell",
    "cellcodec",
    "columns",
    "dates",
    "encoding",
    "store",
    "styles",
    "validation",
]