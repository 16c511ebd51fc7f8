"""Cell styles and rich text runs, with their record encoding."""

from __future__ import annotations

from dataclasses import dataclass, field

from sheetcells.encoding import RecordReader, RecordWriter


@dataclass
class Border:
    """Border line styles and colours for each side of a cell."""

    left: str = ""
    left_color: str = ""
    right: str = ""
    right_color: str = ""
    top: str = ""
    top_color: str = ""
    bottom: str = ""
    bottom_color: str = ""


@dataclass
class Fill:
    """Background pattern and colours of a cell."""

    pattern_type: str = ""
    bg_color: str = ""
    fg_color: str = ""


@dataclass
class Font:
    """Font settings of a cell."""

    size: float = 0.0
    name: str = ""
    family: int = 0
    charset: int = 0
    color: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass
class Alignment:
    """Text placement within a cell."""

    horizontal: str = ""
    indent: int = 0
    shrink_to_fit: bool = False
    text_rotation: int = 0
    vertical: str = ""
    wrap_text: bool = False


@dataclass
class Style:
    """The visual appearance of a cell."""

    border: Border = field(default_factory=Border)
    fill: Fill = field(default_factory=Fill)
    font: Font = field(default_factory=Font)
    alignment: Alignment = field(default_factory=Alignment)
    apply_border: bool = False
    apply_fill: bool = False
    apply_font: bool = False
    apply_alignment: bool = False


@dataclass
class RichTextColor:
    """A colour given as RGB, a theme index or a palette index, with a tint."""

    rgb: str = ""
    tint: float = 0.0
    theme: int | None = None
    indexed: int | None = None


@dataclass
class RichTextFont:
    """Font settings of a single rich text run."""

    name: str = ""
    size: float = 0.0
    family: int = 0
    charset: int = 0
    color: RichTextColor | None = None
    bold: bool = False
    italic: bool = False
    strike: bool = False
    vert_align: str = ""
    underline: str = ""


@dataclass
class RichTextRun:
    """A piece of text sharing one font."""

    text: str = ""
    font: RichTextFont | None = None


def write_border(writer: RecordWriter, border: Border) -> None:
    for value in (
        border.left,
        border.left_color,
        border.right,
        border.right_color,
        border.top,
        border.top_color,
        border.bottom,
        border.bottom_color,
    ):
        writer.write_string(value)


def read_border(reader: RecordReader) -> Border:
    return Border(*(reader.read_string() for _ in range(8)))


def write_fill(writer: RecordWriter, fill: Fill) -> None:
    writer.write_string(fill.pattern_type)
    writer.write_string(fill.bg_color)
    writer.write_string(fill.fg_color)


def read_fill(reader: RecordReader) -> Fill:
    pattern_type = reader.read_string()
    bg_color = reader.read_string()
    fg_color = reader.read_string()
    return Fill(pattern_type, bg_color, fg_color)


def write_font(writer: RecordWriter, font: Font) -> None:
    writer.write_float(font.size)
    writer.write_string(font.name)
    writer.write_int(font.family)
    writer.write_int(font.charset)
    writer.write_string(font.color)
    writer.write_bool(font.bold)
    writer.write_bool(font.italic)
    writer.write_bool(font.underline)


def read_font(reader: RecordReader) -> Font:
    size = reader.read_float()
    name = reader.read_string()
    family = reader.read_int()
    charset = reader.read_int()
    color = reader.read_string()
    bold = reader.read_bool()
    italic = reader.read_bool()
    underline = reader.read_bool()
    return Font(size, name, family, charset, color, bold, italic, underline)


def write_alignment(writer: RecordWriter, alignment: Alignment) -> None:
    writer.write_string(alignment.horizontal)
    writer.write_int(alignment.indent)
    writer.write_bool(alignment.shrink_to_fit)
    writer.write_int(alignment.text_rotation)
    writer.write_string(alignment.vertical)
    writer.write_bool(alignment.wrap_text)


def read_alignment(reader: RecordReader) -> Alignment:
    horizontal = reader.read_string()
    indent = reader.read_int()
    shrink_to_fit = reader.read_bool()
    text_rotation = reader.read_int()
    vertical = reader.read_string()
    wrap_text = reader.read_bool()
    return Alignment(horizontal, indent, shrink_to_fit, text_rotation, vertical, wrap_text)


def write_style(writer: RecordWriter, style: Style) -> None:
    write_border(writer, style.border)
    write_fill(writer, style.fill)
    write_font(writer, style.font)
    write_alignment(writer, style.alignment)
    writer.write_bool(style.apply_border)
    writer.write_bool(style.apply_fill)
    writer.write_bool(style.apply_font)
    writer.write_bool(style.apply_alignment)
    writer.write_end_of_record()


def read_style(reader: RecordReader) -> Style:
    border = read_border(reader)
    fill = read_fill(reader)
    font = read_font(reader)
    alignment = read_alignment(reader)
    apply_border = reader.read_bool()
    apply_fill = reader.read_bool()
    apply_font = reader.read_bool()
    apply_alignment = reader.read_bool()
    reader.read_end_of_record()
    return Style(
        border, fill, font, alignment, apply_border, apply_fill, apply_font, apply_alignment
    )


def write_rich_text_color(writer: RecordWriter, color: RichTextColor) -> None:
    has_theme = color.theme is not None
    has_indexed = color.indexed is not None
    writer.write_string(color.rgb)
    writer.write_bool(has_theme)
    writer.write_float(color.tint)
    writer.write_bool(has_indexed)
    writer.write_end_of_record()
    if color.theme is not None:
        writer.write_int(color.theme)
        writer.write_end_of_record()
    if color.indexed is not None:
        writer.write_int(color.indexed)
        writer.write_end_of_record()


def read_rich_text_color(reader: RecordReader) -> RichTextColor:
    color = RichTextColor(rgb=reader.read_string())
    has_theme = reader.read_bool()
    color.tint = reader.read_float()
    has_indexed = reader.read_bool()
    reader.read_end_of_record()
    if has_theme:
        color.theme = reader.read_int()
        reader.read_end_of_record()
    if has_indexed:
        color.indexed = reader.read_int()
        reader.read_end_of_record()
    return color


def write_rich_text_font(writer: RecordWriter, font: RichTextFont) -> None:
    writer.write_string(font.name)
    writer.write_float(font.size)
    writer.write_int(int(font.family))
    writer.write_int(int(font.charset))
    writer.write_bool(font.color is not None)
    writer.write_bool(font.bold)
    writer.write_bool(font.italic)
    writer.write_bool(font.strike)
    writer.write_string(str(font.vert_align))
    writer.write_string(str(font.underline))
    writer.write_end_of_record()
    if font.color is not None:
        write_rich_text_color(writer, font.color)


def read_rich_text_font(reader: RecordReader) -> RichTextFont:
    font = RichTextFont(name=reader.read_string())
    font.size = reader.read_float()
    font.family = reader.read_int()
    font.charset = reader.read_int()
    has_color = reader.read_bool()
    font.bold = reader.read_bool()
    font.italic = reader.read_bool()
    font.strike = reader.read_bool()
    font.vert_align = reader.read_string()
    font.underline = reader.read_string()
    reader.read_end_of_record()
    if has_color:
        font.color = read_rich_text_color(reader)
    return font


def write_rich_text_run(writer: RecordWriter, run: RichTextRun) -> None:
    writer.write_bool(run.font is not None)
    writer.write_string(run.text)
    writer.write_end_of_record()
    if run.font is not None:
        write_rich_text_font(writer, run.font)


def read_rich_text_run(reader: RecordReader) -> RichTextRun:
    has_font = reader.read_bool()
    run = RichTextRun(text=reader.read_string())
    reader.read_end_of_record()
    if has_font:
        run.font = read_rich_text_font(reader)
    return run


def write_rich_text(writer: RecordWriter, runs: list[RichTextRun] | None) -> None:
    """Write a run count followed by each run; None counts as no runs."""
    runs = runs or []
    writer.write_int(len(runs))
    for run in runs:
        write_rich_text_run(writer, run)


def read_rich_text(reader: RecordReader) -> list[RichTextRun]:
    count = reader.read_int()
    return [read_rich_text_run(reader) for _ in range(count)]