from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Column tree model for hierarchical table export.

A column is either a LEAF (carries a value accessor and optional span
resolution) or a GROUP (carries ordered children). Tree walkers dispatch on
``Column.kind`` rather than on subclass methods.
"""

__all__ = [
    "CellProps",
    "Column",
    "ColumnFeatures",
    "ColumnKind",
    "SpanRect",
    "group",
    "leaf",
]


class ColumnKind(Enum):
    """Tag of the column variant."""
    LEAF = "leaf"
    GROUP = "group"


@dataclass(frozen=True)
class SpanRect:
    """Half-open cell rectangle (bottom/right exclusive)."""
    top: int
    left: int
    bottom: int
    right: int

    @property
    def row_span(self) -> int:
        return self.bottom - self.top

    @property
    def col_span(self) -> int:
        return self.right - self.left

    @property
    def is_single(self) -> bool:
        return self.row_span == 1 and self.col_span == 1


@dataclass(frozen=True)
class CellProps:
    row_span: int | None = None
    col_span: int | None = None


@dataclass(frozen=True)
class ColumnFeatures:
    no_export: bool = False  # Exclude this column and its subtree from export


ValueGetter = Callable[[Any, int], Any]
SpanRectGetter = Callable[[Any, Any, int], "SpanRect | None"]
CellPropsGetter = Callable[[Any, int], "CellProps | None"]


@dataclass(frozen=True)
class Column:
    """Node of the column tree.

    ``get_span_rect`` takes priority over ``cell_props`` when both are set.
    Without either, every cell of the column is 1x1.
    """
    name: str
    kind: ColumnKind = ColumnKind.LEAF
    children: tuple[Column, ...] = ()
    code: str | None = None  # Record key used when get_value is absent
    get_value: ValueGetter | None = None
    get_span_rect: SpanRectGetter | None = None
    cell_props: CellPropsGetter | None = None
    features: ColumnFeatures = field(default_factory=ColumnFeatures)

    @property
    def no_export(self) -> bool:
        return self.features.no_export


def leaf(
    name: str,
    code: str | None = None,
    *,
    get_value: ValueGetter | None = None,
    get_span_rect: SpanRectGetter | None = None,
    cell_props: CellPropsGetter | None = None,
    no_export: bool = False,
) -> Column:
    return Column(
        name=name,
        kind=ColumnKind.LEAF,
        code=code,
        get_value=get_value,
        get_span_rect=get_span_rect,
        cell_props=cell_props,
        features=ColumnFeatures(no_export=no_export),
    )


def group(name: str, children: Sequence[Column], *, no_export: bool = False) -> Column:
    """Build a group column.

    An empty ``children`` sequence yields a leaf, the same way a header node
    without children renders as a leaf.
    """
    kind = ColumnKind.GROUP if children else ColumnKind.LEAF
    return Column(
        name=name,
        kind=kind,
        children=tuple(children),
        features=ColumnFeatures(no_export=no_export),
    )
