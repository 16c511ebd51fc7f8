"""A directory-backed key-value store of encoded cells."""

from __future__ import annotations

import os
import shutil
import string
import tempfile
from pathlib import Path

from sheetcells.cell import Cell, RowNotFoundError
from sheetcells.cellcodec import decode_cell, encode_cell

CELL_STORE_PREFIX = "cellstore"

_HEX_DIGITS = frozenset(string.hexdigits.lower())


class DiskCellStore:
    """Persists cells under string keys in a private temporary directory.

    Closing the store removes the directory and everything in it.
    """

    def __init__(self) -> None:
        self._base = Path(tempfile.mkdtemp(prefix=CELL_STORE_PREFIX))
        self._closed = False

    @property
    def base_dir(self) -> Path:
        return self._base

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("cell store is closed")

    def _path(self, key: str) -> Path:
        if not key:
            raise ValueError("key must not be empty")
        return self._base / key.encode("utf-8").hex()

    def write_cell(self, key: str, cell: Cell | None) -> None:
        """Store cell under key, replacing anything stored there."""
        self._check_open()
        path = self._path(key)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_bytes(encode_cell(cell))
        os.replace(tmp, path)

    def read_cell(self, key: str) -> Cell | None:
        """Return the cell stored under key."""
        self._check_open()
        try:
            data = self._path(key).read_bytes()
        except FileNotFoundError as exc:
            raise RowNotFoundError(key, str(exc)) from None
        return decode_cell(data)

    def has(self, key: str) -> bool:
        self._check_open()
        return self._path(key).is_file()

    def erase(self, key: str) -> None:
        """Remove the entry stored under key."""
        self._check_open()
        try:
            self._path(key).unlink()
        except FileNotFoundError as exc:
            raise RowNotFoundError(key, str(exc)) from None

    def keys_with_prefix(self, prefix: str) -> list[str]:
        """Return the stored keys starting with prefix, in sorted order."""
        self._check_open()
        keys = []
        for entry in self._base.iterdir():
            name = entry.name
            if not name or not set(name) <= _HEX_DIGITS or len(name) % 2:
                continue
            key = bytes.fromhex(name).decode("utf-8")
            if key.startswith(prefix):
                keys.append(key)
        return sorted(keys)

    def remove_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with prefix; return how many."""
        keys = self.keys_with_prefix(prefix)
        for key in keys:
            self.erase(key)
        return len(keys)

    def close(self) -> None:
        """Remove the store's directory. Closing twice is harmless."""
        if self._closed:
            return
        self._closed = True
        if self._base.exists():
            shutil.rmtree(self._base)

    def __enter__(self) -> DiskCellStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()