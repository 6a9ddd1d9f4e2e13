"""Fengshui utilities for the BaZhai floor calculator.

This package currently provides:

* ``advance_trigram`` – the 楼层卦 rule moving a trigram one element per
  floor.
* ``classify_relation`` – the eight-star relation between two trigrams.
* ``derive_all`` – 寄卦, 楼层卦 and the unit door verdict for a
  ``SelectionState``.
* ``describe`` / ``severity`` – display text and 吉凶 for a star.
"""

from .bagua import (
    DIRECTIONS,
    TRIGRAMS,
    InvalidTrigram,
    advance_trigram,
    element_of,
    polarity_of,
    trigram_of,
)
from .bazhai_eightstars import (
    PROSTRATE,
    Severity,
    classify_relation,
    describe,
    severity,
    star_distribution,
)
from .house_gua import (
    DerivedValues,
    DoorPlacement,
    SelectionState,
    build_report,
    derive_all,
    floor_choices,
    update_selection,
)

__all__ = [
    "DIRECTIONS",
    "TRIGRAMS",
    "InvalidTrigram",
    "advance_trigram",
    "element_of",
    "polarity_of",
    "trigram_of",
    "PROSTRATE",
    "Severity",
    "classify_relation",
    "describe",
    "severity",
    "star_distribution",
    "DerivedValues",
    "DoorPlacement",
    "SelectionState",
    "build_report",
    "derive_all",
    "floor_choices",
    "update_selection",
]
