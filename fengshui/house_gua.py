"""寄卦编宅: derive the building, floor and unit-door verdict from a selection.

The selection is an immutable :class:`SelectionState`; every change produces a
new state and :func:`derive_all` recomputes all derived values from scratch,
so clearing an upstream choice clears everything below it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import List, Optional

from .bagua import DIRECTIONS, advance_trigram, describe_polarity, element_of, polarity_of, trigram_of
from .bazhai_eightstars import (
    PROSTRATE,
    Severity,
    classify_relation,
    describe,
    severity,
    severity_color,
    transform_trigram,
)

logger = logging.getLogger(__name__)

# Default calculator parameters; callers may override these module level variables
MAX_FLOOR: int = 30
FACING_LABEL: str = "住宅朝向"
FLOOR_LABEL: str = "住戶樓層"
UNIT_DOOR_LABEL: str = "住戶大門方位"


class DoorPlacement(str, Enum):
    CENTERED = "大門置中"
    NOT_CENTERED = "大門不置中"

    @property
    def description(self) -> str:
        if self is DoorPlacement.CENTERED:
            return "以坐到向，寄卦編宅"
        return "以門到向，寄卦編宅"

    @property
    def base_label(self) -> str:
        """Question asked for the base direction under this mode."""
        if self is DoorPlacement.CENTERED:
            return "住宅坐方位"
        return "住宅大門方位"


def floor_choices() -> List[int]:
    return list(range(1, MAX_FLOOR + 1))


def base_label(door_placement: Optional[DoorPlacement]) -> str:
    return (door_placement or DoorPlacement.NOT_CENTERED).base_label


@dataclass(frozen=True)
class SelectionState:
    door_placement: Optional[DoorPlacement] = None
    base_direction: Optional[str] = None
    facing_direction: Optional[str] = None
    floor: Optional[int] = None
    unit_door_direction: Optional[str] = None

    def __post_init__(self):
        if self.door_placement is not None and not isinstance(self.door_placement, DoorPlacement):
            object.__setattr__(self, "door_placement", DoorPlacement(self.door_placement))
        for name in ("base_direction", "facing_direction", "unit_door_direction"):
            value = getattr(self, name)
            if value is not None and value not in DIRECTIONS:
                raise ValueError(f"未知方位: {value!r}")
        if self.floor is not None:
            object.__setattr__(self, "floor", int(self.floor))
            if self.floor < 1:
                raise ValueError(f"楼层必须从1开始: {self.floor}")


SELECTION_FIELDS = tuple(f.name for f in fields(SelectionState))


@dataclass(frozen=True)
class DerivedValues:
    transform_trigram: Optional[str] = None
    floor_trigram: Optional[str] = None
    relation: Optional[str] = None

    @property
    def is_prostrate(self) -> bool:
        return self.transform_trigram == PROSTRATE

    @property
    def description(self) -> Optional[str]:
        return describe(self.relation) if self.relation else None

    @property
    def severity(self) -> Optional[Severity]:
        return severity(self.relation) if self.relation else None

    @property
    def color(self) -> Optional[str]:
        return severity_color(self.relation) if self.relation else None


def update_selection(state: SelectionState, field_name: str, value) -> SelectionState:
    """Return a new state with ``field_name`` set to ``value``.

    Empty strings clear the field. Changing the door placement mode changes
    which direction the base question asks for, so the base is cleared.
    """
    if field_name not in SELECTION_FIELDS:
        raise KeyError(field_name)
    if value == "":
        value = None
    if field_name == "floor" and value is not None:
        value = int(value)
    if field_name == "door_placement":
        if value is not None:
            value = DoorPlacement(value)
        if value != state.door_placement:
            return replace(state, door_placement=value, base_direction=None)
    return replace(state, **{field_name: value})


def derive_all(state: SelectionState) -> DerivedValues:
    transform = None
    floor_gua = None
    relation = None

    if state.base_direction and state.facing_direction:
        transform = transform_trigram(
            trigram_of(state.base_direction), trigram_of(state.facing_direction)
        )
    if transform and transform != PROSTRATE and state.floor:
        floor_gua = advance_trigram(transform, state.floor)
    if floor_gua and state.unit_door_direction:
        relation = classify_relation(floor_gua, trigram_of(state.unit_door_direction))

    derived = DerivedValues(transform, floor_gua, relation)
    logger.debug("derive_all(%s) -> %s", state, derived)
    return derived


def disabled_directions(state: SelectionState, field_name: str) -> List[str]:
    """Directions that must be greyed out in the dropdown for ``field_name``."""
    if field_name == "base_direction" and state.facing_direction:
        return [state.facing_direction]
    if field_name == "facing_direction" and state.base_direction:
        return [state.base_direction]
    return []


def transform_prompt(state: SelectionState) -> Optional[str]:
    """Message shown instead of the 寄卦 result while it cannot be computed."""
    if state.base_direction and state.facing_direction:
        if trigram_of(state.base_direction) == trigram_of(state.facing_direction):
            return f"{base_label(state.door_placement)}與{FACING_LABEL}同卦（伏位），無法寄卦編宅。"
        return None
    if not state.door_placement or not (state.base_direction or state.facing_direction):
        return None
    if not state.base_direction:
        return f"尚未決定{base_label(state.door_placement)}，無法計算寄卦。"
    return f"尚未決定{FACING_LABEL}，無法計算寄卦。"


# ---------- 显示文本 ----------
def format_gua(gua: str) -> str:
    return f"{gua} (類型: {element_of(gua)}, 極性: {describe_polarity(polarity_of(gua))})"


def format_direction_info(direction: Optional[str]) -> Optional[str]:
    if not direction:
        return None
    return f"{direction} - {format_gua(trigram_of(direction))}"


def format_transform(derived: DerivedValues) -> Optional[str]:
    gua = derived.transform_trigram
    if not gua or gua == PROSTRATE:
        return None
    return f"寄卦編宅結果: {gua} ({element_of(gua)}{polarity_of(gua)})"


def format_floor(state: SelectionState, derived: DerivedValues) -> Optional[str]:
    if not derived.floor_trigram:
        return None
    return f"{state.floor}樓 - {format_gua(derived.floor_trigram)}"


def format_relation(derived: DerivedValues) -> Optional[str]:
    if not derived.relation:
        return None
    return f"相容性: {derived.relation}"


def build_report(state: SelectionState, derived: Optional[DerivedValues] = None) -> List[str]:
    """Assemble the text lines the calculator shows for ``state``."""
    if derived is None:
        derived = derive_all(state)
    lines: List[str] = []
    if state.door_placement:
        lines.append(f"{state.door_placement.value} - {state.door_placement.description}")
    info = format_direction_info(state.base_direction)
    if info:
        lines.append(f"{base_label(state.door_placement)}: {info}")
    info = format_direction_info(state.facing_direction)
    if info:
        lines.append(f"{FACING_LABEL}: {info}")
    prompt = transform_prompt(state)
    for line in (
        prompt,
        format_transform(derived),
        format_floor(state, derived),
    ):
        if line:
            lines.append(line)
    info = format_direction_info(state.unit_door_direction)
    if info:
        lines.append(f"{UNIT_DOOR_LABEL}: {info}")
    if derived.relation:
        lines.append(format_relation(derived))
        lines.append(derived.description)
    return lines
