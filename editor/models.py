from __future__ import annotations

import logging
from collections import deque
from typing import Optional

from fengshui.bagua import DIRECTIONS
from fengshui.house_gua import (
    FACING_LABEL,
    FLOOR_LABEL,
    UNIT_DOOR_LABEL,
    DerivedValues,
    DoorPlacement,
    SelectionState,
    base_label,
    derive_all,
    disabled_directions,
    floor_choices,
    format_direction_info,
    format_floor,
    format_relation,
    format_transform,
    transform_prompt,
    update_selection,
)

logger = logging.getLogger(__name__)

# 撤销最多保留的历史状态数
HISTORY_LIMIT = 100


class CalculatorDocument:
    """Current selection of the calculator form and its derived values."""

    def __init__(self, state: Optional[SelectionState] = None):
        self.state = state or SelectionState()
        self.derived = derive_all(self.state)
        # 历史状态，供撤销
        self._history: deque[SelectionState] = deque(maxlen=HISTORY_LIMIT)

    # ---------- 基础 ----------
    def set_field(self, field_name: str, value) -> DerivedValues:
        new_state = update_selection(self.state, field_name, value)
        if new_state == self.state:
            return self.derived
        self._history.append(self.state)
        self.state = new_state
        self.derived = derive_all(new_state)
        logger.debug("%s=%r -> %s", field_name, value, self.derived)
        return self.derived

    def undo(self) -> bool:
        if not self._history:
            return False
        self.state = self._history.pop()
        self.derived = derive_all(self.state)
        return True

    def reset(self):
        if self.state != SelectionState():
            self._history.append(self.state)
        self.state = SelectionState()
        self.derived = derive_all(self.state)

    # ---------- 选项 ----------
    @staticmethod
    def door_placements() -> list[DoorPlacement]:
        return list(DoorPlacement)

    @staticmethod
    def directions() -> list[str]:
        return list(DIRECTIONS)

    @staticmethod
    def floors() -> list[int]:
        return floor_choices()

    def disabled(self, field_name: str) -> list[str]:
        return disabled_directions(self.state, field_name)

    # ---------- 显示 ----------
    def labels(self) -> dict:
        return {
            "door_placement": "住宅大門置向",
            "base_direction": base_label(self.state.door_placement),
            "facing_direction": FACING_LABEL,
            "floor": FLOOR_LABEL,
            "unit_door_direction": UNIT_DOOR_LABEL,
        }

    def door_info(self) -> str:
        mode = self.state.door_placement
        return f"{mode.value} - {mode.description}" if mode else ""

    def direction_info(self, field_name: str) -> str:
        return format_direction_info(getattr(self.state, field_name)) or ""

    def transform_info(self) -> str:
        return transform_prompt(self.state) or format_transform(self.derived) or ""

    def floor_info(self) -> str:
        return format_floor(self.state, self.derived) or ""

    def relation_info(self) -> tuple[str, str, str]:
        """(相容性, 说明, 颜色)；尚未可算时全部为空"""
        if not self.derived.relation:
            return "", "", ""
        return format_relation(self.derived), self.derived.description, self.derived.color
