import pytest

from sheetcells.columns import Col, ColStore

STRING, STRING_FORMULA, NUMERIC, BOOL, INLINE, ERROR, DATE = range(7)


def _store(*cols):
    cs = ColStore()
    for col in cols:
        cs.add(col)
    return cs


def _chain_from_root(cs):
    spans = []
    node = cs.root
    while node is not None:
        if node.next is not None:
            assert node.next.prev is node
        spans.append((node.col.min, node.col.max))
        node = node.next
    return spans


def _chain_from_head(cs):
    node = cs.root
    while node.prev is not None:
        assert node.prev.next is node
        node = node.prev
    spans = []
    while node is not None:
        if node.next is not None:
            assert node.next.prev is node
        spans.append((node.col.min, node.col.max))
        node = node.next
    return spans


def test_new_col_for_range():
    col = Col.for_range(30, 45)
    assert (col.min, col.max) == (30, 45)
    col = Col.for_range(45, 30)
    assert (col.min, col.max) == (30, 45)


@pytest.mark.parametrize(
    "cell_type, expected",
    [
        (STRING, "@"),
        (NUMERIC, "0"),
        (BOOL, "general"),
        (INLINE, "@"),
        (ERROR, "general"),
        (DATE, "general"),
        (STRING_FORMULA, "@"),
    ],
)
def test_set_type(cell_type, expected):
    col = Col()
    col.set_type(cell_type)
    assert col.num_fmt == expected


def test_set_width():
    col = Col()
    col.set_width(20.2)
    assert col.width == 20.2
    assert col.custom_width is True


def test_set_outline_level():
    col = Col()
    col.set_outline_level(3)
    assert col.outline_level == 3
    with pytest.raises(ValueError):
        col.set_outline_level(256)


def test_copy_to_range():
    nf = object()
    style = object()
    c1 = Col(
        min=1,
        max=11,
        hidden=True,
        width=300.4,
        collapsed=True,
        outline_level=2,
        num_fmt="-0.00",
        parsed_num_fmt=nf,
        style=style,
    )
    c2 = c1.copy_to_range(4, 10)
    assert (c2.min, c2.max) == (4, 10)
    assert c2.hidden == c1.hidden
    assert c2.width == c1.width
    assert c2.collapsed == c1.collapsed
    assert c2.outline_level == c1.outline_level
    assert c2.num_fmt == c1.num_fmt
    assert c2.parsed_num_fmt is nf
    assert c2.style is style
    assert (c1.min, c1.max) == (1, 11)


def test_add_root_node():
    col = Col(min=1, max=1)
    cs = ColStore()
    cs.add(col)
    assert len(cs) == 1
    assert cs.root.col is col


@pytest.mark.parametrize(
    "spans, root_span, chain",
    [
        ([(1, 2), (3, 4)], (1, 2), [(1, 2), (3, 4)]),
        ([(3, 4), (1, 2)], (3, 4), [(1, 2), (3, 4)]),
        ([(1, 3), (3, 4)], (1, 2), [(1, 2), (3, 4)]),
        ([(2, 3), (1, 2)], (3, 3), [(1, 2), (3, 3)]),
        ([(1, 8), (4, 5)], (1, 3), [(1, 3), (4, 5), (6, 8)]),
        ([(1, 2), (3, 4), (5, 6)], (1, 2), [(1, 2), (3, 4), (5, 6)]),
        ([(5, 6), (3, 4), (1, 2)], (5, 6), [(1, 2), (3, 4), (5, 6)]),
        ([(1, 2), (10, 11), (5, 6)], (1, 2), [(1, 2), (5, 6), (10, 11)]),
        ([(1, 2), (8, 9), (2, 8)], (1, 1), [(1, 1), (2, 8), (9, 9)]),
        ([(1, 2), (8, 9), (2, 7)], (1, 1), [(1, 1), (2, 7), (8, 9)]),
        ([(1, 2), (8, 9), (3, 8)], (1, 2), [(1, 2), (3, 8), (9, 9)]),
    ],
)
def test_make_way(spans, root_span, chain):
    cs = _store(*(Col(min=lo, max=hi) for lo, hi in spans))
    assert len(cs) == len(chain)
    assert (cs.root.col.min, cs.root.col.max) == root_span
    assert _chain_from_head(cs) == chain


def test_make_way_exact_match_replaces():
    cs = _store(Col(min=1, max=2, width=40.1), Col(min=1, max=2, width=10.0))
    assert len(cs) == 1
    assert cs.root.prev is None and cs.root.next is None
    assert (cs.root.col.min, cs.root.col.max) == (1, 2)
    assert cs.root.col.width == 10.0


def test_make_way_envelope_replaces():
    cs = _store(Col(min=2, max=3, width=40.1), Col(min=1, max=4, width=10.0))
    assert len(cs) == 1
    assert cs.root.prev is None and cs.root.next is None
    assert (cs.root.col.min, cs.root.col.max) == (1, 4)
    assert cs.root.col.width == 10.0


def test_make_way_replaces_middle_exactly():
    cs = _store(
        Col(min=1, max=2),
        Col(min=3, max=4, width=1.0),
        Col(min=5, max=6),
        Col(min=3, max=4, width=2.0),
    )
    assert len(cs) == 3
    assert _chain_from_root(cs) == [(1, 2), (3, 4), (5, 6)]
    assert cs.root.next.col.width == 2.0


def test_make_way_spanning_several():
    cs = _store(
        Col(min=1, max=2, width=1.0),
        Col(min=3, max=4, width=2.0),
        Col(min=5, max=6, width=3.0),
        Col(min=2, max=5, width=4.0),
    )
    assert len(cs) == 3
    assert cs.root.prev is None
    assert _chain_from_root(cs) == [(1, 1), (2, 5), (6, 6)]
    assert [col.width for col in cs] == [1.0, 4.0, 3.0]


def test_find_node_for_col():
    cols = [Col(min=n, max=n) for n in range(1, 6)] + [Col(min=100, max=125)]
    cs = _store(*cols)
    expectations = {
        0: None,
        1: cols[0],
        2: cols[1],
        3: cols[2],
        4: cols[3],
        5: cols[4],
        6: None,
        99: None,
        100: cols[5],
        110: cols[5],
        125: cols[5],
        126: None,
    }
    for num, expected in expectations.items():
        node = cs.find_node_for_col_num(num)
        if expected is None:
            assert node is None
        else:
            assert node.col is expected
        assert cs.find_col_by_index(num) is expected


def test_find_in_empty_store():
    assert ColStore().find_col_by_index(1) is None


def test_remove_node():
    cs = _store(*(Col(min=n, max=n) for n in range(1, 6)))
    assert len(cs) == 5
    cs.remove_node(cs.find_node_for_col_num(5))
    assert len(cs) == 4
    assert _chain_from_root(cs) == [(1, 1), (2, 2), (3, 3), (4, 4)]
    cs.remove_node(cs.find_node_for_col_num(1))
    assert len(cs) == 3
    assert _chain_from_root(cs) == [(2, 2), (3, 3), (4, 4)]


def test_for_each():
    cols = [Col(min=1, max=1, hidden=True)] + [Col(min=n, max=n) for n in range(2, 6)]
    cs = _store(*cols)
    seen = []

    def visit(index, col):
        col.phonetic = True
        seen.append((index, col.min))

    cs.for_each(visit)
    assert all(col.phonetic is True for col in cols)
    assert seen == [(0, 1), (1, 2), (2, 3), (3, 4), (5, 5)]


def test_iteration_is_in_column_order():
    cs = _store(Col(min=5, max=6), Col(min=1, max=2), Col(min=3, max=4))
    assert [(c.min, c.max) for c in cs] == [(1, 2), (3, 4), (5, 6)]


@pytest.mark.parametrize(
    "initial, expected",
    [
        ([], [(1, 11)]),
        ([(1, 11)], [(1, 11)]),
        ([(1, 4), (5, 8), (9, 11)], [(1, 4), (5, 8), (9, 11)]),
        ([(1, 4), (9, 11)], [(1, 4), (5, 8), (9, 11)]),
    ],
)
def test_get_or_make_cols_for_range(initial, expected):
    cs = _store(*(Col(min=lo, max=hi) for lo, hi in initial))
    result = cs.get_or_make_cols_for_range(cs.root, 1, 11)
    assert [(c.min, c.max) for c in result] == expected
    assert [(c.min, c.max) for c in cs] == expected