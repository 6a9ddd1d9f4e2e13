#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八星罗盘图 - 以楼层卦为中心，显示八个住户大门方位各自对应的星
"""

import logging
import math
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from .bagua import DIRECTIONS, trigram_of
from .bazhai_eightstars import Severity, severity, star_distribution

logger = logging.getLogger(__name__)

# 可按需覆盖，按顺序尝试
FONT_PATHS = [
    "C:/Windows/Fonts/msyh.ttc",  # 微软雅黑
    "C:/Windows/Fonts/simhei.ttf",  # 黑体
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/wqy/wqy-microhei.ttc",
    "/System/Library/Fonts/PingFang.ttc",
]

SEVERITY_FILL = {
    Severity.AUSPICIOUS: (46, 160, 67),
    Severity.INAUSPICIOUS: (200, 50, 50),
    Severity.NEUTRAL: (120, 120, 120),
}
HIGHLIGHT_OUTLINE = (255, 215, 0)
BACKGROUND = (40, 40, 40)


def get_chinese_font(size=20):
    """获取中文字体"""
    for font_path in FONT_PATHS:
        if Path(font_path).exists():
            try:
                return ImageFont.truetype(font_path, size)
            except OSError:
                logger.debug("无法加载字体 %s", font_path)
    return ImageFont.load_default()


def _sector_angle(index: int) -> float:
    """Center angle of a direction sector in PIL degrees (0=east, clockwise)."""
    return -90.0 + 45.0 * index


def _draw_centered(draw, text, center, font, fill=(255, 255, 255)):
    bbox = draw.textbbox((0, 0), text, font=font)
    w = bbox[2] - bbox[0]
    h = bbox[3] - bbox[1]
    draw.text((center[0] - w / 2, center[1] - h / 2), text, font=font, fill=fill)


def draw_star_compass(floor_gua: str, highlight: Optional[str] = None, size: int = 480) -> Image.Image:
    """Draw the eight-star compass for ``floor_gua``, north at the top.

    ``highlight`` is the chosen unit door direction, outlined in gold.
    """
    stars = star_distribution(floor_gua)
    image = Image.new("RGB", (size, size), BACKGROUND)
    draw = ImageDraw.Draw(image)

    margin = size // 20
    box = [margin, margin, size - margin, size - margin]
    cx = cy = size / 2
    radius = size / 2 - margin

    label_font = get_chinese_font(max(size // 28, 10))
    center_font = get_chinese_font(max(size // 10, 12))

    for i, direction in enumerate(DIRECTIONS):
        star = stars[direction]
        angle = _sector_angle(i)
        draw.pieslice(box, angle - 22.5, angle + 22.5, fill=SEVERITY_FILL[severity(star)], outline=BACKGROUND, width=2)

        rad = math.radians(angle)
        label_r = radius * 0.68
        pos = (cx + label_r * math.cos(rad), cy + label_r * math.sin(rad))
        line_h = label_font.size if hasattr(label_font, "size") else 12
        _draw_centered(draw, direction, (pos[0], pos[1] - line_h), label_font)
        _draw_centered(draw, trigram_of(direction), pos, label_font)
        _draw_centered(draw, star, (pos[0], pos[1] + line_h), label_font)

    if highlight:
        i = DIRECTIONS.index(highlight)
        angle = _sector_angle(i)
        draw.arc(box, angle - 22.5, angle + 22.5, fill=HIGHLIGHT_OUTLINE, width=max(size // 60, 3))

    inner = radius * 0.28
    draw.ellipse([cx - inner, cy - inner, cx + inner, cy + inner], fill=BACKGROUND, outline=(255, 255, 255), width=2)
    _draw_centered(draw, floor_gua, (cx, cy), center_font)
    return image


def save_star_compass(floor_gua: str, output_path, highlight: Optional[str] = None, size: int = 480) -> str:
    """Render the compass and write it as an image file; returns the path."""
    image = draw_star_compass(floor_gua, highlight=highlight, size=size)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path))
    logger.info("八星罗盘图已保存至: %s", output_path)
    return str(output_path)
