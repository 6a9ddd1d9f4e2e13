"""Tests for the 寄卦编宅 orchestration over a selection."""
import pytest

from fengshui.bazhai_eightstars import PROSTRATE, Severity
from fengshui.house_gua import (
    DerivedValues,
    DoorPlacement,
    SelectionState,
    build_report,
    derive_all,
    disabled_directions,
    floor_choices,
    transform_prompt,
    update_selection,
)


def _full_state(**overrides):
    values = dict(
        door_placement=DoorPlacement.CENTERED,
        base_direction="北",
        facing_direction="南",
        floor=1,
        unit_door_direction="北",
    )
    values.update(overrides)
    return SelectionState(**values)


def test_empty_selection_derives_nothing():
    assert derive_all(SelectionState()) == DerivedValues()


def test_north_base_south_facing_first_floor():
    derived = derive_all(_full_state(unit_door_direction=None))
    assert derived.transform_trigram == "乾"
    assert derived.floor_trigram == "乾"
    assert derived.relation is None


def test_second_floor_of_qian_is_kan():
    derived = derive_all(_full_state(floor=2, unit_door_direction=None))
    assert derived.floor_trigram == "坎"


def test_kan_floor_with_north_unit_door_is_prostrate():
    derived = derive_all(_full_state(floor=2))
    assert derived.relation == PROSTRATE
    assert derived.severity is Severity.NEUTRAL
    assert derived.color == "default"
    assert derived.description.startswith("伏位門")


def test_same_base_and_facing_uses_prostrate_sentinel():
    derived = derive_all(_full_state(base_direction="東", facing_direction="東"))
    assert derived.transform_trigram == PROSTRATE
    assert derived.is_prostrate
    assert derived.floor_trigram is None
    assert derived.relation is None


def test_clearing_base_clears_everything_downstream():
    state = _full_state(floor=2)
    assert derive_all(state).relation == PROSTRATE
    cleared = update_selection(state, "base_direction", None)
    assert derive_all(cleared) == DerivedValues()


def test_clearing_floor_keeps_transform_only():
    state = update_selection(_full_state(), "floor", "")
    derived = derive_all(state)
    assert derived.transform_trigram == "乾"
    assert derived.floor_trigram is None
    assert derived.relation is None


def test_changing_door_placement_clears_base():
    state = _full_state()
    changed = update_selection(state, "door_placement", DoorPlacement.NOT_CENTERED.value)
    assert changed.door_placement is DoorPlacement.NOT_CENTERED
    assert changed.base_direction is None
    assert changed.facing_direction == "南"
    same = update_selection(state, "door_placement", "大門置中")
    assert same.base_direction == "北"


def test_update_selection_returns_new_state():
    state = SelectionState()
    new_state = update_selection(state, "floor", "3")
    assert new_state.floor == 3
    assert state.floor is None
    with pytest.raises(KeyError):
        update_selection(state, "north_angle", 90)


def test_selection_rejects_unknown_values():
    with pytest.raises(ValueError):
        SelectionState(base_direction="中")
    with pytest.raises(ValueError):
        SelectionState(floor=0)
    with pytest.raises(ValueError):
        SelectionState(door_placement="大門偏左")


def test_disabled_directions():
    state = SelectionState(base_direction="北", facing_direction="南")
    assert disabled_directions(state, "base_direction") == ["南"]
    assert disabled_directions(state, "facing_direction") == ["北"]
    assert disabled_directions(state, "unit_door_direction") == []


def test_transform_prompts():
    assert transform_prompt(SelectionState()) is None
    assert transform_prompt(SelectionState(door_placement=DoorPlacement.CENTERED)) is None
    state = SelectionState(door_placement=DoorPlacement.CENTERED, facing_direction="南")
    assert transform_prompt(state) == "尚未決定住宅坐方位，無法計算寄卦。"
    state = SelectionState(door_placement=DoorPlacement.NOT_CENTERED, facing_direction="南")
    assert transform_prompt(state) == "尚未決定住宅大門方位，無法計算寄卦。"
    state = SelectionState(door_placement=DoorPlacement.CENTERED, base_direction="北")
    assert transform_prompt(state) == "尚未決定住宅朝向，無法計算寄卦。"
    assert "伏位" in transform_prompt(_full_state(facing_direction="北"))
    assert transform_prompt(_full_state()) is None


def test_door_placement_texts():
    assert DoorPlacement.CENTERED.description == "以坐到向，寄卦編宅"
    assert DoorPlacement.NOT_CENTERED.description == "以門到向，寄卦編宅"
    assert DoorPlacement.CENTERED.base_label == "住宅坐方位"
    assert DoorPlacement.NOT_CENTERED.base_label == "住宅大門方位"


def test_floor_choices_follow_max_floor(monkeypatch):
    assert floor_choices() == list(range(1, 31))
    monkeypatch.setattr("fengshui.house_gua.MAX_FLOOR", 5)
    assert floor_choices() == [1, 2, 3, 4, 5]


def test_build_report():
    lines = build_report(_full_state(floor=2))
    assert lines[0] == "大門置中 - 以坐到向，寄卦編宅"
    assert "住宅坐方位: 北 - 坎 (類型: 水, 極性: 無)" in lines
    assert "寄卦編宅結果: 乾 (金+)" in lines
    assert "2樓 - 坎 (類型: 水, 極性: 無)" in lines
    assert "相容性: 伏" in lines
    assert lines[-1].startswith("伏位門")


def test_prostrate_notice_without_door_placement():
    state = SelectionState(base_direction="東", facing_direction="東")
    prompt = transform_prompt(state)
    assert "伏位" in prompt
    assert prompt in build_report(state)
