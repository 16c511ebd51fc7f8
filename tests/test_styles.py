import pytest

from sheetcells.encoding import FormatError, RecordReader, RecordWriter
from sheetcells.styles import (
    Alignment,
    Border,
    Fill,
    Font,
    RichTextColor,
    RichTextFont,
    RichTextRun,
    Style,
    read_alignment,
    read_border,
    read_fill,
    read_font,
    read_rich_text,
    read_rich_text_color,
    read_rich_text_font,
    read_rich_text_run,
    read_style,
    write_alignment,
    write_border,
    write_fill,
    write_font,
    write_rich_text,
    write_rich_text_color,
    write_rich_text_font,
    write_rich_text_run,
    write_style,
)


def make_border():
    return Border(
        left="left",
        left_color="leftColor",
        right="right",
        right_color="rightColor",
        top="top",
        top_color="topColor",
        bottom="bottom",
        bottom_color="bottomColor",
    )


def make_fill():
    return Fill(pattern_type="PatternType", bg_color="BgColor", fg_color="FgColor")


def make_font():
    return Font(
        size=1, name="Font", family=2, charset=3, color="Red",
        bold=True, italic=True, underline=True,
    )


def make_alignment():
    return Alignment(
        horizontal="left", indent=1, shrink_to_fit=True,
        text_rotation=90, vertical="top", wrap_text=True,
    )


def roundtrip(write, read, value):
    writer = RecordWriter()
    write(writer, value)
    reader = RecordReader(writer.getvalue())
    return read(reader), reader


def test_border_roundtrip():
    b = make_border()
    b2, reader = roundtrip(write_border, read_border, b)
    assert b2 == b
    with pytest.raises(FormatError):
        read_border(reader)


def test_fill_roundtrip():
    f = make_fill()
    f2, reader = roundtrip(write_fill, read_fill, f)
    assert f2 == f
    with pytest.raises(FormatError):
        read_fill(reader)


def test_font_roundtrip():
    f = make_font()
    f2, reader = roundtrip(write_font, read_font, f)
    assert f2 == f
    assert f2.size == 1.0
    with pytest.raises(FormatError):
        read_font(reader)


def test_alignment_roundtrip():
    a = make_alignment()
    a2, reader = roundtrip(write_alignment, read_alignment, a)
    assert a2 == a
    with pytest.raises(FormatError):
        read_alignment(reader)


def test_style_roundtrip():
    s = Style(
        border=make_border(),
        fill=make_fill(),
        font=make_font(),
        alignment=make_alignment(),
        apply_border=True,
        apply_fill=True,
        apply_font=True,
        apply_alignment=True,
    )
    s2, reader = roundtrip(write_style, read_style, s)
    assert s2.border == s.border
    assert s2.fill == s.fill
    assert s2.font == s.font
    assert s2.alignment == s.alignment
    assert s2.apply_border and s2.apply_fill and s2.apply_font and s2.apply_alignment
    with pytest.raises(FormatError):
        read_style(reader)


def test_default_style_roundtrip():
    s2, _ = roundtrip(write_style, read_style, Style())
    assert s2 == Style()


def test_rich_text_color_rgb():
    c1 = RichTextColor(rgb="01234567", tint=-0.3)
    c2, reader = roundtrip(write_rich_text_color, read_rich_text_color, c1)
    assert c2.rgb == "01234567"
    assert c2.tint == -0.3
    assert c2.indexed is None
    assert c2.theme is None
    with pytest.raises(FormatError):
        reader.read_bool()


def test_rich_text_color_indexed():
    c1 = RichTextColor(indexed=7, tint=0.4)
    c2, reader = roundtrip(write_rich_text_color, read_rich_text_color, c1)
    assert c2.rgb == ""
    assert c2.tint == 0.4
    assert c2.indexed == 7
    assert c2.theme is None
    with pytest.raises(FormatError):
        reader.read_bool()


def test_rich_text_color_theme():
    c1 = RichTextColor(theme=8)
    c2, reader = roundtrip(write_rich_text_color, read_rich_text_color, c1)
    assert c2.rgb == ""
    assert c2.tint == 0.0
    assert c2.indexed is None
    assert c2.theme == 8
    with pytest.raises(FormatError):
        reader.read_bool()


def test_rich_text_font_bold():
    f1 = RichTextFont(
        name="Font1",
        size=12.5,
        family=4,
        charset=161,
        color=RichTextColor(rgb="12345678"),
        bold=True,
        vert_align="superscript",
        underline="single",
    )
    f2, reader = roundtrip(write_rich_text_font, read_rich_text_font, f1)
    assert f2.name == "Font1"
    assert f2.size == 12.5
    assert f2.family == 4
    assert f2.charset == 161
    assert f2.color.rgb == "12345678"
    assert f2.bold is True
    assert f2.italic is False
    assert f2.strike is False
    assert f2.vert_align == "superscript"
    assert f2.underline == "single"
    with pytest.raises(FormatError):
        reader.read_bool()


@pytest.mark.parametrize(
    "font",
    [RichTextFont(italic=True), RichTextFont(strike=True)],
)
def test_rich_text_font_flags(font):
    f2, reader = roundtrip(write_rich_text_font, read_rich_text_font, font)
    assert f2 == font
    assert f2.color is None
    with pytest.raises(FormatError):
        reader.read_bool()


def test_rich_text_run_with_font():
    r1 = RichTextRun(text="Text1", font=RichTextFont(bold=True))
    r2, reader = roundtrip(write_rich_text_run, read_rich_text_run, r1)
    assert r2.font == r1.font
    assert r2.text == "Text1"
    with pytest.raises(FormatError):
        reader.read_bool()


def test_rich_text_run_without_font():
    r1 = RichTextRun(text="Text1")
    r2, reader = roundtrip(write_rich_text_run, read_rich_text_run, r1)
    assert r2.font is None
    assert r2.text == "Text1"
    with pytest.raises(FormatError):
        reader.read_bool()


def test_rich_text_roundtrip():
    rt1 = [
        RichTextRun(text="Text1"),
        RichTextRun(text="Text2", font=RichTextFont(italic=True)),
    ]
    rt2, reader = roundtrip(write_rich_text, read_rich_text, rt1)
    assert rt2 == rt1
    with pytest.raises(FormatError):
        reader.read_bool()


@pytest.mark.parametrize("runs", [None, []])
def test_rich_text_empty(runs):
    rt2, reader = roundtrip(write_rich_text, read_rich_text, runs)
    assert rt2 == []
    with pytest.raises(FormatError):
        reader.read_bool()