"""Classify pairs of trigrams into the BaZhai (Eight Mansions) eight stars."""
from __future__ import annotations

import logging
from enum import Enum
from itertools import combinations
from typing import Dict, FrozenSet, List, Optional, Tuple

from .bagua import DIRECTIONS, TRIGRAMS, _check_trigram, trigram_of

logger = logging.getLogger(__name__)

# 伏位：两卦相同
PROSTRATE = "伏"
# 仅在配对表残缺时出现
INCOMPATIBLE = "不相容"


class Severity(str, Enum):
    AUSPICIOUS = "吉"
    INAUSPICIOUS = "凶"
    NEUTRAL = "平"


# 每颗星由四组互不相交的卦对组成，七星合起来恰好覆盖28组卦对
STAR_PAIRS: Dict[str, List[Tuple[str, str]]] = {
    "延年": [("坎", "離"), ("震", "巽"), ("乾", "坤"), ("艮", "兌")],
    "天乙": [("坎", "震"), ("離", "巽"), ("乾", "艮"), ("坤", "兌")],
    "生氣": [("坎", "巽"), ("離", "震"), ("乾", "兌"), ("坤", "艮")],
    "六煞": [("坎", "乾"), ("離", "坤"), ("震", "艮"), ("巽", "兌")],
    "絕命": [("坎", "坤"), ("離", "乾"), ("震", "兌"), ("巽", "艮")],
    "五鬼": [("坎", "艮"), ("離", "兌"), ("震", "乾"), ("巽", "坤")],
    "禍害": [("坎", "兌"), ("震", "坤"), ("離", "艮"), ("巽", "乾")],
}

STARS: List[str] = list(STAR_PAIRS)

# 寄卦编宅：坐向所得星 -> 寄卦
TRANSFORM_TRIGRAM: Dict[str, str] = {
    "延年": "乾",
    "天乙": "艮",
    "生氣": "震",
    "六煞": "坎",
    "絕命": "兌",
    "五鬼": "離",
    "禍害": "坤",
}

# 星 -> (吉凶, 说明)
STAR_INFO: Dict[str, Tuple[Severity, str]] = {
    "延年": (Severity.AUSPICIOUS, "延年門 ( 武曲星 ) : 人丁旺，出聰明人才，出長壽人，發田莊。"),
    "天乙": (Severity.AUSPICIOUS, "天醫門 ( 巨門星 ) : 加官進爵，生財旺相，子孫聰明剛健 。"),
    "生氣": (Severity.AUSPICIOUS, "生氣門 ( 貪狼星 ) : 人丁旺，出生意人才，住家平安，富貴長久。"),
    "六煞": (Severity.INAUSPICIOUS, "六煞門 ( 文曲星 ) : 初年丁財旺先吉後凶家破人亡，邪淫，災難多破財。"),
    "絕命": (Severity.INAUSPICIOUS, "絕命門 ( 破軍星 ) : 不生子女多後絕，官災意外多。"),
    "五鬼": (Severity.INAUSPICIOUS, "五鬼門 ( 廉貞星 ) : 貧窮，災害，疾病，鬼魅，口舌，血光意外。"),
    "禍害": (Severity.INAUSPICIOUS, "禍害門 ( 祿存星 ) : 人不旺財也不旺，事事不順，子女依賴重，小不順，後絕，不生子。"),
    PROSTRATE: (Severity.NEUTRAL, "伏位門 ( 輔弼星 ) : 無定位遇吉則吉遇凶則凶，小康之家三代後絕。"),
}

DEFAULT_DESCRIPTION = "這個組合沒有特定的風水意義。"

SEVERITY_COLORS: Dict[Severity, str] = {
    Severity.AUSPICIOUS: "green",
    Severity.INAUSPICIOUS: "red",
    Severity.NEUTRAL: "default",
}


def check_partition(star_pairs: Optional[Dict[str, List[Tuple[str, str]]]] = None) -> Dict[FrozenSet[str], str]:
    """Verify the star tables and return the unordered pair -> star index.

    Every star must be a perfect matching on the eight trigrams and the seven
    stars together must cover each of the 28 distinct pairs exactly once.
    """
    if star_pairs is None:
        star_pairs = STAR_PAIRS
    index: Dict[FrozenSet[str], str] = {}
    for star, pairs in star_pairs.items():
        seen: List[str] = []
        for a, b in pairs:
            _check_trigram(a)
            _check_trigram(b)
            if a == b:
                raise ValueError(f"{star}: 卦对不能相同 {a}{b}")
            key = frozenset((a, b))
            if key in index:
                raise ValueError(f"卦对 {a}{b} 同时属于 {index[key]} 与 {star}")
            index[key] = star
            seen.extend((a, b))
        if sorted(seen) != sorted(TRIGRAMS):
            raise ValueError(f"{star}: 卦对未覆盖全部八卦")
    expected = {frozenset(p) for p in combinations(TRIGRAMS, 2)}
    missing = expected - set(index)
    if missing:
        raise ValueError(f"缺少卦对: {sorted(''.join(sorted(p)) for p in missing)}")
    for star in star_pairs:
        if star not in TRANSFORM_TRIGRAM or star not in STAR_INFO:
            raise ValueError(f"{star}: 缺少寄卦或说明")
    return index


PAIR_STARS: Dict[FrozenSet[str], str] = check_partition()


def classify_relation(a: str, b: str) -> str:
    """Return the star between two trigrams; identical trigrams give 伏."""
    _check_trigram(a)
    _check_trigram(b)
    if a == b:
        return PROSTRATE
    star = PAIR_STARS.get(frozenset((a, b)))
    if star is None:
        logger.error("卦对 %s%s 不在八星表中", a, b)
        return INCOMPATIBLE
    return star


def transform_trigram(base: str, facing: str) -> str:
    """寄卦: the trigram assigned by the star between base and facing.

    Returns ``PROSTRATE`` when both trigrams are the same; that sentinel has
    no element and cannot be advanced by floor.
    """
    star = classify_relation(base, facing)
    if star == PROSTRATE:
        return PROSTRATE
    return TRANSFORM_TRIGRAM[star]


def describe(star: Optional[str]) -> str:
    info = STAR_INFO.get(star)
    return info[1] if info else DEFAULT_DESCRIPTION


def severity(star: Optional[str]) -> Severity:
    info = STAR_INFO.get(star)
    return info[0] if info else Severity.NEUTRAL


def severity_color(star: Optional[str]) -> str:
    return SEVERITY_COLORS[severity(star)]


def star_distribution(gua: str) -> Dict[str, str]:
    """Map each of the eight door directions to its star against ``gua``."""
    return {d: classify_relation(gua, trigram_of(d)) for d in DIRECTIONS}
