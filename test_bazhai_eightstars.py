"""Unit tests for the BaZhai eight-star tables and classifier."""
from itertools import combinations, product

import pytest

from fengshui.bagua import TRIGRAMS, InvalidTrigram, trigram_of
from fengshui.bazhai_eightstars import (
    DEFAULT_DESCRIPTION,
    INCOMPATIBLE,
    PROSTRATE,
    STAR_INFO,
    STAR_PAIRS,
    STARS,
    TRANSFORM_TRIGRAM,
    Severity,
    check_partition,
    classify_relation,
    describe,
    severity,
    severity_color,
    star_distribution,
    transform_trigram,
)


def test_every_distinct_pair_has_a_star():
    for a, b in combinations(TRIGRAMS, 2):
        star = classify_relation(a, b)
        assert star in STARS
        assert star != INCOMPATIBLE


def test_stars_partition_all_pairs():
    covered = []
    for pairs in STAR_PAIRS.values():
        assert len(pairs) == 4
        covered.extend(frozenset(p) for p in pairs)
    assert len(covered) == 28
    assert set(covered) == {frozenset(p) for p in combinations(TRIGRAMS, 2)}
    assert len(check_partition()) == 28


def test_each_star_is_a_perfect_matching():
    for pairs in STAR_PAIRS.values():
        members = [g for pair in pairs for g in pair]
        assert sorted(members) == sorted(TRIGRAMS)


def test_classification_is_symmetric():
    for a, b in product(TRIGRAMS, repeat=2):
        assert classify_relation(a, b) == classify_relation(b, a)


def test_same_trigram_is_prostrate():
    for gua in TRIGRAMS:
        assert classify_relation(gua, gua) == PROSTRATE


def test_unknown_trigram_rejected():
    with pytest.raises(InvalidTrigram):
        classify_relation("坎", "X")
    with pytest.raises(InvalidTrigram):
        classify_relation("伏", "坎")


def test_broken_table_detected():
    broken = dict(STAR_PAIRS)
    broken["延年"] = [("坎", "震"), ("離", "巽"), ("乾", "坤"), ("艮", "兌")]
    with pytest.raises(ValueError):
        check_partition(broken)


def test_north_south_is_yannian_and_transforms_to_qian():
    assert classify_relation(trigram_of("北"), trigram_of("南")) == "延年"
    assert transform_trigram("坎", "離") == "乾"


def test_same_direction_transform_is_prostrate():
    for gua in TRIGRAMS:
        assert transform_trigram(gua, gua) == PROSTRATE


def test_every_star_has_transform_and_info():
    assert set(TRANSFORM_TRIGRAM) == set(STARS)
    assert set(STAR_INFO) == set(STARS) | {PROSTRATE}
    assert set(TRANSFORM_TRIGRAM.values()) <= set(TRIGRAMS)


def test_severity_and_color():
    for star in ("延年", "天乙", "生氣"):
        assert severity(star) is Severity.AUSPICIOUS
        assert severity_color(star) == "green"
    for star in ("六煞", "絕命", "五鬼", "禍害"):
        assert severity(star) is Severity.INAUSPICIOUS
        assert severity_color(star) == "red"
    assert severity(PROSTRATE) is Severity.NEUTRAL
    assert severity_color(PROSTRATE) == "default"


def test_descriptions():
    assert describe(PROSTRATE).startswith("伏位門")
    assert describe("天乙").startswith("天醫門")
    assert describe(INCOMPATIBLE) == DEFAULT_DESCRIPTION
    assert describe(None) == DEFAULT_DESCRIPTION


def test_star_distribution_for_kan():
    stars = star_distribution("坎")
    assert stars == {
        "北": "伏",
        "東北": "五鬼",
        "東": "天乙",
        "東南": "生氣",
        "南": "延年",
        "西南": "絕命",
        "西": "禍害",
        "西北": "六煞",
    }
