# logging_utils.py - logging setup shared by the engine and its entry point

import logging
from typing import Optional

from klondike import common as C

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def setup_logging(level: Optional[str] = None) -> None:
    """Call once at program start (klondike/__main__.py). Library modules never do."""
    if level is None:
        level = C.get_current_settings()["log_level"]
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def describe_cards(cards) -> str:
    """Compact card list for log lines: 'K♠ Q♥ J♠'."""
    return " ".join(C.card_text(c) for c in cards) or "-"
