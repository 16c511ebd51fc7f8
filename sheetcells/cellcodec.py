"""Record encoding of cells and their data validation rules."""

from __future__ import annotations

from sheetcells.cell import Cell, CellType, Hyperlink
from sheetcells.encoding import FormatError, RecordReader, RecordWriter
from sheetcells.styles import read_rich_text, read_style, write_rich_text, write_style
from sheetcells.validation import DataValidation


def write_data_validation(writer: RecordWriter, validation: DataValidation) -> None:
    writer.write_bool(validation.allow_blank)
    writer.write_bool(validation.show_input_message)
    writer.write_bool(validation.show_error_message)
    writer.write_optional_string(validation.error_style)
    writer.write_optional_string(validation.error_title)
    writer.write_string(validation.operator)
    writer.write_optional_string(validation.error)
    writer.write_optional_string(validation.prompt_title)
    writer.write_optional_string(validation.prompt)
    writer.write_string(validation.type)
    writer.write_string(validation.sqref)
    writer.write_string(validation.formula1)
    writer.write_string(validation.formula2)
    writer.write_end_of_record()


def read_data_validation(reader: RecordReader) -> DataValidation:
    validation = DataValidation(
        allow_blank=reader.read_bool(),
        show_input_message=reader.read_bool(),
        show_error_message=reader.read_bool(),
    )
    validation.error_style = reader.read_optional_string()
    validation.error_title = reader.read_optional_string()
    validation.operator = reader.read_string()
    validation.error = reader.read_optional_string()
    validation.prompt_title = reader.read_optional_string()
    validation.prompt = reader.read_optional_string()
    validation.type = reader.read_string()
    validation.sqref = reader.read_string()
    validation.formula1 = reader.read_string()
    validation.formula2 = reader.read_string()
    reader.read_end_of_record()
    return validation


def write_cell(writer: RecordWriter, cell: Cell | None) -> None:
    """Write a cell record; None is written as an empty-cell marker."""
    if cell is None:
        writer.write_bool(True)
        writer.write_end_of_record()
        return
    writer.write_bool(False)
    writer.write_string(cell.value)
    writer.write_string(cell.formula)
    writer.write_bool(cell.style is not None)
    writer.write_string(cell.num_fmt)
    writer.write_bool(cell.date1904)
    writer.write_bool(cell.hidden)
    writer.write_int(cell.hmerge)
    writer.write_int(cell.vmerge)
    writer.write_int(int(cell.cell_type))
    writer.write_bool(cell.data_validation is not None)
    writer.write_string(cell.hyperlink.display_string)
    writer.write_string(cell.hyperlink.link)
    writer.write_string(cell.hyperlink.tooltip)
    writer.write_int(cell.num)
    write_rich_text(writer, cell.rich_text)
    writer.write_end_of_record()
    if cell.style is not None:
        write_style(writer, cell.style)
    if cell.data_validation is not None:
        write_data_validation(writer, cell.data_validation)


def read_cell(reader: RecordReader) -> Cell | None:
    """Read a cell record; returns None for an empty-cell marker."""
    if reader.read_bool():
        reader.read_end_of_record()
        return None
    value = reader.read_string()
    formula = reader.read_string()
    has_style = reader.read_bool()
    num_fmt = reader.read_string()
    date1904 = reader.read_bool()
    hidden = reader.read_bool()
    hmerge = reader.read_int()
    vmerge = reader.read_int()
    raw_type = reader.read_int()
    try:
        cell_type = CellType(raw_type)
    except ValueError as exc:
        raise FormatError(f"unknown cell type: {raw_type}") from exc
    has_validation = reader.read_bool()
    hyperlink = Hyperlink(
        display_string=reader.read_string(),
        link=reader.read_string(),
        tooltip=reader.read_string(),
    )
    num = reader.read_int()
    rich_text = read_rich_text(reader)
    reader.read_end_of_record()
    cell = Cell(
        value=value,
        rich_text=rich_text,
        formula=formula,
        num_fmt=num_fmt,
        date1904=date1904,
        hidden=hidden,
        hmerge=hmerge,
        vmerge=vmerge,
        cell_type=cell_type,
        hyperlink=hyperlink,
        num=num,
    )
    if has_style:
        cell.style = read_style(reader)
    if has_validation:
        cell.data_validation = read_data_validation(reader)
    return cell


def encode_cell(cell: Cell | None) -> bytes:
    """Return the record bytes for a single cell."""
    writer = RecordWriter()
    write_cell(writer, cell)
    return writer.getvalue()


def decode_cell(data: bytes) -> Cell | None:
    """Decode bytes produced by encode_cell."""
    return read_cell(RecordReader(data))