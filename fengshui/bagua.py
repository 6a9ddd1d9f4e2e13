"""Eight directions, eight trigrams and the five-element cycle used by BaZhai."""
from __future__ import annotations

import logging
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

PLUS = "+"
MINUS = "-"
NO_POLARITY = ""

# 水木火土金 相生顺序，金之后回到水
ELEMENT_ORDER: List[str] = ["水", "木", "火", "土", "金"]

# 方位 -> (卦, 五行, 极性)，顺时针自北起
DIRECTION_TABLE: Dict[str, Tuple[str, str, str]] = {
    "北": ("坎", "水", NO_POLARITY),
    "東北": ("艮", "土", PLUS),
    "東": ("震", "木", PLUS),
    "東南": ("巽", "木", MINUS),
    "南": ("離", "火", NO_POLARITY),
    "西南": ("坤", "土", MINUS),
    "西": ("兌", "金", MINUS),
    "西北": ("乾", "金", PLUS),
}

DIRECTIONS: List[str] = list(DIRECTION_TABLE)

# English compass abbreviations accepted by the command line
DIRECTION_ALIASES: Dict[str, str] = {
    "N": "北",
    "NE": "東北",
    "E": "東",
    "SE": "東南",
    "S": "南",
    "SW": "西南",
    "W": "西",
    "NW": "西北",
}

TRIGRAM_DIRECTION: Dict[str, str] = {
    gua: direction for direction, (gua, _, _) in DIRECTION_TABLE.items()
}
TRIGRAMS: List[str] = list(TRIGRAM_DIRECTION)

# (五行, 极性) -> 卦；水火无极性
TRIGRAM_BY_ELEMENT: Dict[str, Dict[str, str]] = {
    "水": {NO_POLARITY: "坎"},
    "木": {PLUS: "震", MINUS: "巽"},
    "火": {NO_POLARITY: "離"},
    "土": {PLUS: "艮", MINUS: "坤"},
    "金": {PLUS: "乾", MINUS: "兌"},
}

_NEUTRAL_ELEMENTS = ("水", "火")


class InvalidTrigram(ValueError):
    """Raised when a symbol is not one of the eight trigrams."""

    def __init__(self, symbol):
        super().__init__(f"未知卦象: {symbol!r}")
        self.symbol = symbol


def _check_trigram(gua: str) -> str:
    if gua not in TRIGRAM_DIRECTION:
        raise InvalidTrigram(gua)
    return gua


def normalize_direction(direction: str) -> str:
    """Return the canonical direction name, accepting ``N``/``NE``… aliases."""
    name = DIRECTION_ALIASES.get(direction.strip().upper(), direction.strip())
    if name not in DIRECTION_TABLE:
        raise ValueError(f"未知方位: {direction!r}")
    return name


def trigram_of(direction: str) -> str:
    if direction not in DIRECTION_TABLE:
        raise ValueError(f"未知方位: {direction!r}")
    return DIRECTION_TABLE[direction][0]


def direction_of(gua: str) -> str:
    return TRIGRAM_DIRECTION[_check_trigram(gua)]


def element_of(gua: str) -> str:
    return DIRECTION_TABLE[direction_of(gua)][1]


def polarity_of(gua: str) -> str:
    return DIRECTION_TABLE[direction_of(gua)][2]


def next_element(element: str) -> str:
    idx = ELEMENT_ORDER.index(element)
    return ELEMENT_ORDER[(idx + 1) % len(ELEMENT_ORDER)]


def resolve_trigram(element: str, polarity: str) -> str:
    """Look up the trigram carrying ``element`` and ``polarity``."""
    try:
        return TRIGRAM_BY_ELEMENT[element][polarity]
    except KeyError:
        raise InvalidTrigram(f"{element}{polarity}") from None


def advance_trigram(start: str, steps: int) -> str:
    """Advance ``start`` by ``steps - 1`` elements along the generating cycle.

    This is the 楼层卦 rule: floor 1 keeps the starting trigram, every floor
    above moves to the next element. A neutral polarity becomes ``+`` when
    the next element is 木/土/金, an existing ``+``/``-`` is carried over,
    and 水/火 always drop the polarity.

    Parameters
    ----------
    start: str
        Starting trigram, usually the 寄卦 of the building.
    steps: int
        Floor number, must be at least 1.

    Returns
    -------
    str
        The trigram reached on that floor.
    """
    _check_trigram(start)
    if steps < 1:
        raise ValueError(f"楼层必须从1开始: {steps}")

    element = element_of(start)
    polarity = polarity_of(start)
    gua = start
    for _ in range(steps - 1):
        element = next_element(element)
        if polarity == NO_POLARITY:
            polarity = PLUS
        if element in _NEUTRAL_ELEMENTS:
            polarity = NO_POLARITY
        gua = resolve_trigram(element, polarity)
    logger.debug("advance_trigram(%s, %d) -> %s", start, steps, gua)
    return gua


def describe_polarity(polarity: str) -> str:
    return polarity or "無"


def direction_table() -> List[Dict[str, str]]:
    """Return the direction table as rows for display."""
    return [
        {
            "direction": direction,
            "trigram": gua,
            "element": element,
            "polarity": describe_polarity(polarity),
        }
        for direction, (gua, element, polarity) in DIRECTION_TABLE.items()
    ]
