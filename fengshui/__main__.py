import argparse
import logging
import sys

from . import house_gua
from .bagua import InvalidTrigram, direction_table, normalize_direction
from .bazhai_eightstars import describe, severity, star_distribution
from .house_gua import DoorPlacement, SelectionState, build_report, derive_all

logger = logging.getLogger("fengshui")

DOOR_ALIASES = {
    "centered": DoorPlacement.CENTERED,
    "offset": DoorPlacement.NOT_CENTERED,
    DoorPlacement.CENTERED.value: DoorPlacement.CENTERED,
    DoorPlacement.NOT_CENTERED.value: DoorPlacement.NOT_CENTERED,
}


def _direction_arg(value):
    try:
        return normalize_direction(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _floor_arg(value):
    floor = int(value)
    if floor < 1:
        raise argparse.ArgumentTypeError(f"楼层必须从1开始: {value}")
    return floor


def build_parser():
    parser = argparse.ArgumentParser(
        prog="fengshui",
        description="BaZhai 寄卦编宅: floor trigram and unit door verdict",
    )
    parser.add_argument(
        "--door",
        choices=list(DOOR_ALIASES),
        help="Door placement: 大門置中 (centered) or 大門不置中 (offset)",
    )
    parser.add_argument("--base", type=_direction_arg, help="Seat direction, or main door direction when not centered")
    parser.add_argument("--facing", type=_direction_arg, help="Facing direction of the building")
    parser.add_argument(
        "--floor",
        type=_floor_arg,
        help=f"Floor of the unit (1-{house_gua.MAX_FLOOR} in the form, any positive floor here)",
    )
    parser.add_argument("--unit-door", type=_direction_arg, help="Direction of the unit's own door")
    parser.add_argument("--compass", help="Save an eight-star compass image for the floor trigram")
    parser.add_argument("--output", help="Optional path to save report")
    parser.add_argument("--table", action="store_true", help="Print the direction / trigram table and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _table_lines():
    lines = ["方位  卦  五行  極性"]
    for row in direction_table():
        lines.append(f"{row['direction']:<4}{row['trigram']:<4}{row['element']:<5}{row['polarity']}")
    return lines


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if args.table:
        report = "\n".join(_table_lines())
    else:
        try:
            state = SelectionState(
                door_placement=DOOR_ALIASES[args.door] if args.door else None,
                base_direction=args.base,
                facing_direction=args.facing,
                floor=args.floor,
                unit_door_direction=args.unit_door,
            )
            derived = derive_all(state)
        except (InvalidTrigram, ValueError) as e:
            logger.error("%s", e)
            return 2

        lines = build_report(state, derived)
        if derived.floor_trigram and not derived.relation:
            lines.append("")
            lines.append(f"{derived.floor_trigram}卦八星方位分布：")
            for direction, star in star_distribution(derived.floor_trigram).items():
                lines.append(f"{direction}: {star} ({severity(star).value}) - {describe(star)}")
        if not lines:
            lines.append("尚未選擇任何條件。")

        if args.compass:
            if not derived.floor_trigram:
                logger.warning("尚無樓層卦，無法繪製八星羅盤")
            else:
                from .star_compass import save_star_compass

                path = save_star_compass(derived.floor_trigram, args.compass, highlight=state.unit_door_direction)
                lines.append(f"八星羅盤圖: {path}")
        report = "\n".join(lines)

    print(report)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
