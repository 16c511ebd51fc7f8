# sheetcells

Building blocks for working with spreadsheet cells in the style of the XLSX
format.

- `sheetcells.dates` converts between `datetime` values and Excel's
  floating-point serial day numbers, in both the 1900 and 1904 date systems
  (`time_to_excel_time`, `time_from_excel_time`,
  `julian_date_to_gregorian_time`, `fraction_of_a_day`, `time_to_utc_time`).
- `sheetcells.columns` keeps column definitions (`Col`) in a `ColStore`
  that trims or splits existing ranges when a new one overlaps them, so no
  two definitions overlap. A `ColStore` supports `len()` and iterates over its
  `Col`s in column order.
- `sheetcells.validation` builds data validation rules (`DataValidation`,
  created with `new_data_validation`): drop-down lists (`set_drop_list`),
  references to a range on another sheet (`set_in_file_list`), numeric or
  text-length bounds (`set_range`), and input and error messages
  (`set_input`, `set_error`).
- `sheetcells.cell` holds the `Cell` model: typed setters (`set_string`,
  `set_float`, `set_int`, `set_bool`, `set_date`, `set_formula`,
  `set_value`, ...), getters (`as_float`, `as_int`, `as_int64`, `as_bool`,
  `get_time`), hyperlinks, styles, data validation, change tracking
  (`modified`, `mark_persisted`) and a one-line text encoding
  (`to_bytes`, `Cell.from_bytes`). It also defines `CellType`,
  `Hyperlink`, `DateTimeOptions` and `RowNotFoundError`.
- `sheetcells.styles` describes styles (`Style`, `Border`, `Fill`, `Font`,
  `Alignment`) and rich text (`RichTextRun`, `RichTextFont`,
  `RichTextColor`), with functions to write and read each of them.
- `sheetcells.encoding` is the compact separator-delimited binary record
  format used for that (`RecordWriter`, `RecordReader`); malformed or
  truncated data raises `FormatError`.
- `sheetcells.cellcodec` encodes whole cells, including their style, rich
  text and data validation (`encode_cell`, `decode_cell`, `write_cell`,
  `read_cell`).
- `sheetcells.store` persists encoded cells under string keys in a private
  temporary directory (`DiskCellStore`).

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Excel dates:

```python
from datetime import datetime, timezone
from sheetcells.dates import time_from_excel_time, time_to_excel_time

time_to_excel_time(datetime(2018, 6, 18, tzinfo=timezone.utc), False)   # 43269.0
time_from_excel_time(41275.0, False)   # 2013-01-01 00:00:00+00:00
```

Naive datetimes are taken to be in UTC; results are always in UTC.

Column ranges:

```python
from sheetcells.columns import Col, ColStore

store = ColStore()
store.add(Col.for_range(1, 8))
store.add(Col.for_range(4, 5))
[(c.min, c.max) for c in store]   # [(1, 3), (4, 5), (6, 8)]
len(store)                        # 3
```

Data validation:

```python
from sheetcells.validation import new_data_validation

rule = new_data_validation(0, 0, 0, 0, True)
rule.set_drop_list(["a1", "a2", "a3"])
rule.formula1   # '"a1,a2,a3"'
rule.type       # 'list'
```

`set_drop_list` raises `ValueError` when the list is longer than 255
characters.

Cells and the disk store:

```python
from sheetcells.cell import Cell
from sheetcells.store import DiskCellStore

cell = Cell()
cell.set_float(37947.75334343)
cell.value       # '37947.75334343'
cell.modified()  # True

with DiskCellStore() as store:
    store.write_cell("Sheet1:000000:000000", cell)
    store.read_cell("Sheet1:000000:000000").value   # '37947.75334343'
    store.keys_with_prefix("Sheet1:")               # ['Sheet1:000000:000000']
```

Reading or erasing a key that is not stored raises `RowNotFoundError`; using
a store after `close()` raises `ValueError`. The store's directory is removed
when the `with` block ends or `close()` is called.

## What this package does not do

- It does not read or write `.xlsx` files; there are no workbook, sheet or
  row objects, only cells, column definitions and validation rules.
- It does not render number formats: a `Cell` stores its `num_fmt` string
  but has no method that formats its value for display.
- `DiskCellStore` stores individual cells under keys you choose; it does not
  organise them into rows or move rows around.