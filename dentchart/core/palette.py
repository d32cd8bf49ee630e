from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional

from dentchart.core.schemas.chart import LegendEntry
from dentchart.core.schemas.dental import (
    DentalConditionType,
    TreatmentPriority,
    condition_label,
)

DEFAULT_CONDITION_COLORS: Mapping[DentalConditionType, str] = MappingProxyType(
    {
        DentalConditionType.HEALTHY: "#22c55e",             # green
        DentalConditionType.CARIES: "#ef4444",              # red
        DentalConditionType.FILLING: "#3b82f6",             # blue
        DentalConditionType.CROWN: "#f59e0b",               # amber
        DentalConditionType.BRIDGE: "#8b5cf6",              # purple
        DentalConditionType.IMPLANT: "#6b7280",             # gray
        DentalConditionType.EXTRACTION: "#000000",          # black
        DentalConditionType.ROOT_CANAL: "#dc2626",          # dark red
        DentalConditionType.MISSING: "#f3f4f6",             # light gray
        DentalConditionType.FRACTURED: "#f97316",           # orange
        DentalConditionType.WEAR: "#facc15",                # yellow
        DentalConditionType.RESTORATION_NEEDED: "#ec4899",  # pink
        DentalConditionType.SEALANT: "#06b6d4",             # cyan
        DentalConditionType.VENEER: "#a855f7",              # violet
        DentalConditionType.TEMPORARY_FILLING: "#84cc16",   # lime
        DentalConditionType.PERIAPICAL_LESION: "#7c2d12",   # dark orange
    }
)

DEFAULT_PRIORITY_COLORS: Mapping[TreatmentPriority, str] = MappingProxyType(
    {
        TreatmentPriority.LOW: "#22c55e",
        TreatmentPriority.MEDIUM: "#f59e0b",
        TreatmentPriority.HIGH: "#f97316",
        TreatmentPriority.URGENT: "#ef4444",
    }
)

# 0x40 alpha on top of the surface color
OVERLAY_ALPHA = "40"

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class PaletteError(ValueError):
    pass


def _coerce_colors(colors: Mapping, enum_type: type, kind: str) -> dict:
    coerced = {}
    for key, value in colors.items():
        try:
            member = enum_type(key)
        except ValueError as exc:
            raise PaletteError(f"unknown {kind}: {key!r}") from exc
        if member in coerced:
            raise PaletteError(f"duplicate {kind}: {member.value}")
        if not isinstance(value, str) or not _HEX_COLOR.match(value):
            raise PaletteError(f"invalid color for {member.value}: {value!r}")
        coerced[member] = value.lower()
    missing = [member.value for member in enum_type if member not in coerced]
    if missing:
        raise PaletteError(f"missing {kind} colors: {', '.join(missing)}")
    return coerced


class ConditionPalette:
    """Immutable condition and priority color tables.

    Every condition must have a color; a palette that cannot draw a legend
    swatch for some condition is rejected at construction.
    """

    __slots__ = ("_colors", "_priority_colors")

    def __init__(
        self,
        colors: Optional[Mapping] = None,
        priority_colors: Optional[Mapping] = None,
    ) -> None:
        if colors is None:
            colors = DEFAULT_CONDITION_COLORS
        if priority_colors is None:
            priority_colors = DEFAULT_PRIORITY_COLORS
        self._colors = MappingProxyType(_coerce_colors(colors, DentalConditionType, "condition"))
        self._priority_colors = MappingProxyType(
            _coerce_colors(priority_colors, TreatmentPriority, "priority")
        )

    @property
    def colors(self) -> Mapping[DentalConditionType, str]:
        return self._colors

    @property
    def priority_colors(self) -> Mapping[TreatmentPriority, str]:
        return self._priority_colors

    def color(self, condition: DentalConditionType | str) -> str:
        return self._colors[DentalConditionType(condition)]

    def overlay_color(self, condition: DentalConditionType | str) -> str:
        return self.color(condition) + OVERLAY_ALPHA

    def priority_color(self, priority: TreatmentPriority | str) -> str:
        return self._priority_colors[TreatmentPriority(priority)]

    def with_overrides(
        self,
        colors: Optional[Mapping] = None,
        priority_colors: Optional[Mapping] = None,
    ) -> "ConditionPalette":
        merged = dict(self._colors)
        merged.update({DentalConditionType(k): v for k, v in (colors or {}).items()})
        merged_priority = dict(self._priority_colors)
        merged_priority.update({TreatmentPriority(k): v for k, v in (priority_colors or {}).items()})
        return ConditionPalette(merged, merged_priority)

    def missing_conditions(self) -> list[DentalConditionType]:
        return [condition for condition in DentalConditionType if condition not in self._colors]

    def legend(self) -> list[LegendEntry]:
        return [
            LegendEntry(condition=condition, label=condition_label(condition), color=self._colors[condition])
            for condition in DentalConditionType
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConditionPalette):
            return NotImplemented
        return dict(self._colors) == dict(other._colors) and dict(self._priority_colors) == dict(
            other._priority_colors
        )

    def __hash__(self) -> int:
        return hash((tuple(self._colors.items()), tuple(self._priority_colors.items())))

    def __repr__(self) -> str:
        return f"ConditionPalette({len(self._colors)} conditions)"


DEFAULT_PALETTE = ConditionPalette()


__all__ = [
    "DEFAULT_CONDITION_COLORS",
    "DEFAULT_PRIORITY_COLORS",
    "OVERLAY_ALPHA",
    "PaletteError",
    "ConditionPalette",
    "DEFAULT_PALETTE",
]
