"""Column definitions and a store that keeps their ranges disjoint."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

COL_WIDTH = 9.5
EXCEL_2006_MAX_ROW_COUNT = 1048576
EXCEL_2006_MAX_ROW_INDEX = EXCEL_2006_MAX_ROW_COUNT - 1

GENERAL_FORMAT = "general"
INT_FORMAT = "0"
STRING_FORMAT = "@"

# Keyed by cell type number: string, string formula, numeric, bool,
# inline string, error, date.
_FORMAT_FOR_CELL_TYPE = {
    0: STRING_FORMAT,
    1: STRING_FORMAT,
    2: INT_FORMAT,
    3: GENERAL_FORMAT,
    4: STRING_FORMAT,
    5: GENERAL_FORMAT,
    6: GENERAL_FORMAT,
}


@dataclass
class Col:
    """Display settings applied to an inclusive range of columns."""

    min: int = 0
    max: int = 0
    hidden: bool | None = None
    width: float | None = None
    collapsed: bool | None = None
    outline_level: int | None = None
    best_fit: bool | None = None
    custom_width: bool | None = None
    phonetic: bool | None = None
    num_fmt: str = ""
    parsed_num_fmt: Any = None
    style: Any = None
    out_xf_id: int = 0

    @classmethod
    def for_range(cls, min_col: int, max_col: int) -> "Col":
        """Create a Col covering min_col..max_col, swapping a reversed range."""
        if max_col < min_col:
            return cls(min=max_col, max=min_col)
        return cls(min=min_col, max=max_col)

    def set_width(self, width: float) -> None:
        """Set a custom width, measured in digit widths of the default font."""
        self.width = width
        self.custom_width = True

    def set_type(self, cell_type: int) -> None:
        """Set the number format to the default one for a cell type."""
        fmt = _FORMAT_FOR_CELL_TYPE.get(int(cell_type))
        if fmt is not None:
            self.num_fmt = fmt

    def set_outline_level(self, outline_level: int) -> None:
        if not 0 <= outline_level <= 255:
            raise ValueError(f"outline level out of range: {outline_level}")
        self.outline_level = outline_level

    def copy_to_range(self, min_col: int, max_col: int) -> "Col":
        """Copy these settings onto a new Col with a different range."""
        return dataclasses.replace(self, min=min_col, max=max_col, out_xf_id=0)


@dataclass(eq=False)
class ColStoreNode:
    """A link in the ordered chain of column definitions."""

    col: Col
    prev: ColStoreNode | None = field(default=None, repr=False)
    next: ColStoreNode | None = field(default=None, repr=False)

    def find_node_for_col_num(self, num: int) -> ColStoreNode | None:
        """Walk the chain from this node to the node covering column num."""
        node: ColStoreNode | None = self
        while node is not None:
            if node.col.min <= num <= node.col.max:
                return node
            if num < node.col.min:
                prev = node.prev
                if prev is None or prev.col.max < num:
                    return None
                node = prev
            else:
                nxt = node.next
                if nxt is None or nxt.col.min > num:
                    return None
                node = nxt
        return None


class ColStore:
    """Ordered, non-overlapping column definitions.

    Adding a Col trims or splits any existing Cols it overlaps.
    """

    def __init__(self) -> None:
        self.root: ColStoreNode | None = None
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[Col]:
        for node in self._nodes():
            yield node.col

    def _nodes(self) -> Iterator[ColStoreNode]:
        node = self.root
        if node is None:
            return
        while node.prev is not None:
            node = node.prev
        while node is not None:
            yield node
            node = node.next

    def add(self, col: Col) -> ColStoreNode:
        """Insert col, adjusting any existing Cols it overlaps."""
        new_node = ColStoreNode(col)
        if self.root is None:
            self.root = new_node
            self._len = 1
            return new_node
        self._make_way(self.root, new_node)
        return new_node

    def find_col_by_index(self, index: int) -> Col | None:
        node = self.find_node_for_col_num(index)
        return node.col if node is not None else None

    def find_node_for_col_num(self, num: int) -> ColStoreNode | None:
        if self.root is None:
            return None
        return self.root.find_node_for_col_num(num)

    def remove_node(self, node: ColStoreNode) -> None:
        """Unlink node from the chain."""
        if node.prev is not None:
            node.prev.next = node.next
        if node.next is not None:
            node.next.prev = node.prev
        if self.root is node:
            if node.prev is not None:
                self.root = node.prev
            elif node.next is not None:
                self.root = node.next
            else:
                self.root = None
        node.next = None
        node.prev = None
        self._len -= 1

    def _add_node(
        self,
        prev: ColStoreNode | None,
        this: ColStoreNode,
        nxt: ColStoreNode | None,
    ) -> None:
        if prev is not None:
            prev.next = this
        this.prev = prev
        this.next = nxt
        if nxt is not None:
            nxt.prev = this
        self._len += 1

    def _make_way(self, node1: ColStoreNode, node2: ColStoreNode) -> None:
        """Adjust node1 (and neighbours) so node2 can take its range."""
        c1, c2 = node1.col, node2.col

        if c1.max < c2.min:
            # node2 starts after node1 ends
            if node1.next is not None:
                if node1.next.col.min <= c2.max:
                    self._make_way(node1.next, node2)
                    return
                self._add_node(node1, node2, node1.next)
                return
            self._add_node(node1, node2, None)
            return

        if c1.min > c2.max:
            # node2 ends before node1 begins
            if node1.prev is not None:
                if node1.prev.col.max >= c2.min:
                    self._make_way(node1.prev, node2)
                    return
                self._add_node(node1.prev, node2, node1)
                return
            self._add_node(None, node2, node1)
            return

        if c1.min == c2.min and c1.max == c2.max:
            # exact replacement
            prev, nxt = node1.prev, node1.next
            self.remove_node(node1)
            self._add_node(prev, node2, nxt)
            if self.root is None:
                self.root = node2
            return

        if c1.min > c2.min and c1.max < c2.max:
            # node2 envelopes node1
            prev, nxt = node1.prev, node1.next
            self.remove_node(node1)
            if prev is node2:
                node2.next = nxt
            elif nxt is node2:
                node2.prev = prev
            else:
                self._add_node(prev, node2, nxt)
            if node2.prev is not None and node2.prev.col.max >= c2.min:
                self._make_way(prev, node2)
            if node2.next is not None and node2.next.col.min <= c2.max:
                self._make_way(nxt, node2)
            if self.root is None:
                self.root = node2
            return

        if c1.min < c2.min and c1.max > c2.max:
            # node2 splits node1 in two
            tail = ColStoreNode(c1.copy_to_range(c2.max + 1, c1.max))
            self._add_node(node1, tail, node1.next)
            c1.max = c2.min - 1
            self._add_node(node1, node2, tail)
            return

        if c1.max >= c2.min and c1.min < c2.min:
            # node2 overlaps the top of node1
            nxt = node1.next
            c1.max = c2.min - 1
            if nxt is node2:
                return
            self._add_node(node1, node2, nxt)
            if nxt is not None and nxt.col.min <= c2.max:
                self._make_way(nxt, node2)
            return

        if c1.min <= c2.max and c1.min > c2.min:
            # node2 overlaps the bottom of node1
            prev = node1.prev
            c1.min = c2.max + 1
            if prev is node2:
                return
            self._add_node(prev, node2, node1)
            if prev is not None and prev.col.max >= c2.min:
                self._make_way(node1.prev, node2)
            return

    def get_or_make_cols_for_range(
        self, start: ColStoreNode | None, min_col: int, max_col: int
    ) -> list[Col]:
        """Return Cols covering min_col..max_col, creating them for any gaps."""
        cols: list[Col] = []
        while True:
            if start is None:
                node = self.add(Col.for_range(min_col, max_col))
            elif start.col.min <= min_col <= start.col.max:
                node = start
            elif start.col.max < min_col:
                if start.next is not None:
                    start = start.next
                    continue
                node = self.add(Col.for_range(min_col, max_col))
            else:
                upper = max_col if start.col.min > max_col else start.col.min - 1
                node = self.add(Col.for_range(min_col, upper))
            cols.append(node.col)
            if node.col.max >= max_col:
                return cols
            start, min_col = node.next, node.col.max + 1

    def for_each(self, fn: Callable[[int, Col], None]) -> None:
        """Call fn(index, col) for each Col in column order.

        The final Col is reported with an index one past its position.
        """
        nodes = list(self._nodes())
        last = len(nodes) - 1
        for idx, node in enumerate(nodes):
            fn(idx if idx < last else idx + 1, node.col)