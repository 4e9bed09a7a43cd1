# __main__.py - deal a game and print the opening layout
import argparse
import sys

from klondike import common as C
from klondike.logging_utils import get_logger, setup_logging
from klondike.modes.klondike import new_game

log = get_logger("klondike.main")


def _parse_args(argv=None):
    settings = C.get_current_settings()
    parser = argparse.ArgumentParser(prog="klondike", description="Deal a Klondike game and show the layout.")
    parser.add_argument("--seed", type=int, default=settings["seed"],
                        help="Shuffle seed (defaults to $KLONDIKE_SEED, else random)")
    parser.add_argument("--log-level", default=settings["log_level"],
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    return parser.parse_args(argv)


def format_layout(deal) -> str:
    columns, stock_waste = deal
    lines = [f"Stock {stock_waste.stock_display()}  Waste {stock_waste.waste_display()}"]
    lines.append(" ".join(col.display() for col in columns))
    lines.append(" ".join(f"{col.hidden_count:>4}" for col in columns))
    return "\n".join(lines)


def main(argv=None) -> int:
    args = _parse_args(argv)
    setup_logging(args.log_level)
    log.info(f"Dealing with seed={args.seed}")
    deal = new_game(seed=args.seed)
    print(format_layout(deal))
    return 0


if __name__ == "__main__":
    sys.exit(main())
