"""Mini README: Chart projection helpers shared by dashboard widgets.

Structure:
    * ChartSlice - label/value pair with the colour used to draw it.
    * palettes - colour sequences for income, expense and group charts.
    * slices_from_pairs - attaches palette colours to label/value pairs.

The helpers perform no arithmetic beyond what the caller supplies; they only
shape data so the presentation layer can render proportional charts.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

INCOME_PALETTE: Tuple[str, ...] = ("#22c55e", "#16a34a", "#15803d", "#166534", "#14532d", "#a7f3d0")
EXPENSE_PALETTE: Tuple[str, ...] = ("#9b87f5", "#7C3AED", "#4C1D95", "#6D28D9", "#5B21B6", "#C4B5FD")
GROUP_PALETTE: Tuple[str, ...] = ("#9b87f5", "#6D28D9", "#22c55e", "#ea384c", "#0EA5E9", "#F97316")


@dataclass(slots=True)
class ChartSlice:
    """One labelled segment of a proportional chart."""

    label: str
    value: Decimal
    color: str

    def as_dict(self) -> Dict[str, object]:
        return {"label": self.label, "value": str(self.value), "color": self.color}


def slices_from_pairs(
    pairs: Iterable[Tuple[str, Decimal]], palette: Sequence[str] = GROUP_PALETTE
) -> List[ChartSlice]:
    """Attach palette colours to label/value pairs, cycling by index."""

    return [
        ChartSlice(label=label, value=value, color=palette[index % len(palette)])
        for index, (label, value) in enumerate(pairs)
    ]
