# common.py - shared card model, deck helpers and settings for the Klondike engine
import os
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Sequence

# --- Settings ---

# Defaults (may be overridden by environment switches)
_DEFAULT_SETTINGS = {
    "seed": None,          # int | None; None means system randomness
    "log_level": "INFO",   # DEBUG | INFO | WARNING | ERROR
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_CURRENT_SETTINGS = dict(_DEFAULT_SETTINGS)


def load_settings(environ=None):
    """Merge ``KLONDIKE_SEED`` / ``LOG_LEVEL`` from the environment over the defaults.

    Unparseable values are ignored and the default is kept.
    """
    global _CURRENT_SETTINGS
    env = os.environ if environ is None else environ
    settings = dict(_DEFAULT_SETTINGS)

    raw_seed = env.get("KLONDIKE_SEED", "").strip()
    if raw_seed:
        try:
            settings["seed"] = int(raw_seed)
        except ValueError:
            pass

    level = env.get("LOG_LEVEL", "").strip().upper()
    if level in _LOG_LEVELS:
        settings["log_level"] = level

    _CURRENT_SETTINGS = settings
    return dict(_CURRENT_SETTINGS)


def get_current_settings():
    return dict(_CURRENT_SETTINGS)


load_settings()


# ---------- Cards ----------
class Suit(IntEnum):
    CLUBS = 0
    SPADES = 1
    HEARTS = 2
    DIAMONDS = 3


class Rank(IntEnum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


SUIT_TO_TEXT: Dict[Suit, str] = {
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
}

# Ten is "T" so every card renders two characters wide
RANK_TO_TEXT: Dict[Rank, str] = {Rank.ACE: "A", Rank.TEN: "T", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K"}
for _r in range(2, 10):
    RANK_TO_TEXT[Rank(_r)] = str(_r)

RED_SUITS = (Suit.HEARTS, Suit.DIAMONDS)


def is_red(suit: Suit) -> bool:
    return suit in RED_SUITS


@dataclass(frozen=True)
class Card:
    """One of the 52 standard cards. Face-up state belongs to the pile holding it."""

    suit: Suit
    rank: Rank

    @property
    def color(self) -> str:
        return "red" if is_red(self.suit) else "black"

    def __repr__(self):
        return card_text(self)


def card_text(card: Card) -> str:
    """Two-character display text, e.g. ``A♠`` or ``T♥``."""
    return f"{RANK_TO_TEXT[card.rank]}{SUIT_TO_TEXT[card.suit]}"


# ---------- Deck ----------
DECK_SIZE = len(Suit) * len(Rank)


def build_standard_deck() -> List[Card]:
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def shuffle(deck: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Fisher-Yates shuffle in place; returns the same list for chaining.

    ``rng`` defaults to a fresh system-seeded generator, so no state is kept
    between calls.
    """
    rng = rng if rng is not None else random.Random()
    for i in range(len(deck) - 1, 0, -1):
        k = rng.randint(0, i)
        deck[i], deck[k] = deck[k], deck[i]
    return deck


def make_deck(shuffled=True, rng: Optional[random.Random] = None) -> List[Card]:
    d = build_standard_deck()
    if shuffled:
        shuffle(d, rng)
    return d


def validate_deck(cards: Sequence[Card]) -> None:
    """Raise ValueError unless ``cards`` holds each of the 52 standard cards exactly once."""
    if len(cards) != DECK_SIZE:
        raise ValueError(f"deck must hold {DECK_SIZE} cards, got {len(cards)}")
    seen = set()
    for c in cards:
        if not isinstance(c, Card):
            raise ValueError(f"not a card: {c!r}")
        if c in seen:
            raise ValueError(f"duplicate card in deck: {card_text(c)}")
        seen.add(c)
