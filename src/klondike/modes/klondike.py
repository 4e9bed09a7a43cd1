# klondike.py - Klondike tableau columns, stock/waste piles and the opening deal
import random
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from klondike import common as C
from klondike import mechanics as M
from klondike.logging_utils import describe_cards, get_logger

log = get_logger("klondike.modes.klondike")

TABLEAU_COLUMNS = 7
TABLEAU_CARDS = TABLEAU_COLUMNS * (TABLEAU_COLUMNS + 1) // 2  # 28

FACE_DOWN_MARKER = "[##]"
RECYCLE_MARKER = "[↻]"
EMPTY_WASTE_MARKER = "[  ]"


class TableauColumn:
    """
    One of the seven tableau columns.

    ``hidden`` holds the face-down cards and ``face_up`` the visible ones, both
    ordered bottom to top. A dealt column always shows at least one card unless
    it is completely empty; draining the face-up cards flips the top hidden card.
    Listeners registered with subscribe() receive the column index after each
    committed change.
    """

    def __init__(self, index: int, initial_cards: Sequence[C.Card] = ()):
        if not 0 <= index < TABLEAU_COLUMNS:
            raise ValueError(f"column index must be 0..{TABLEAU_COLUMNS - 1}, got {index}")
        self._index = index
        cards = list(initial_cards)
        # Only the top card starts face-up
        self._hidden: List[C.Card] = cards[:-1]
        self._face_up: List[C.Card] = cards[-1:]
        self._changed = M.ChangeNotifier()

    @classmethod
    def from_layout(cls, index: int, hidden: Sequence[C.Card], face_up: Sequence[C.Card]) -> "TableauColumn":
        """Rebuild a column from an explicit layout, e.g. one taken with snapshot()."""
        if hidden and not face_up:
            raise ValueError("a column with face-down cards must show at least one face-up card")
        if len(set(hidden) | set(face_up)) != len(hidden) + len(face_up):
            raise ValueError("a column layout must not repeat a card")
        col = cls(index)
        col._hidden = list(hidden)
        col._face_up = list(face_up)
        return col

    # ---------- Read-only views ----------
    @property
    def index(self) -> int:
        return self._index

    @property
    def hidden_count(self) -> int:
        return len(self._hidden)

    @property
    def face_up_cards(self) -> Tuple[C.Card, ...]:
        return tuple(self._face_up)

    def is_empty(self) -> bool:
        return not self._face_up and not self._hidden

    def top_card(self) -> Optional[C.Card]:
        return self._face_up[-1] if self._face_up else None

    def display(self) -> str:
        if self._face_up:
            return f"[{C.card_text(self._face_up[-1])}]"
        if self._hidden:
            return FACE_DOWN_MARKER
        return f"[{self._index + 1}]"

    def snapshot(self):
        return {"hidden": list(self._hidden), "face_up": list(self._face_up)}

    def subscribe(self, handler: Callable[[int], None]) -> Callable[[], None]:
        return self._changed.subscribe(handler)

    def unsubscribe(self, handler: Callable[[int], None]) -> bool:
        return self._changed.unsubscribe(handler)

    # ---------- Rules ----------
    def can_place(self, card: C.Card) -> bool:
        if not self._face_up:
            # Empty columns accept only Kings
            return card.rank == C.Rank.KING
        return M.can_stack(card, self._face_up[-1])

    def try_place(self, card: C.Card) -> bool:
        """Append ``card`` if legal. The caller must already have taken it from its old pile."""
        if not self.can_place(card):
            return False
        self._face_up.append(card)
        log.debug(f"column {self._index}: placed {C.card_text(card)}")
        self._changed.fire(self._index)
        return True

    def try_remove_run(self, starting_card: C.Card) -> List[C.Card]:
        """
        Lift ``starting_card`` and every face-up card above it.
        Returns [] and leaves the column untouched when the card is not face-up
        here or the cards above it do not form one valid run.
        """
        try:
            position = self._face_up.index(starting_card)
        except ValueError:
            return []
        return self.try_remove_run_at(position)

    def try_remove_run_at(self, position: int) -> List[C.Card]:
        """Positional variant of try_remove_run(); ``position`` indexes face_up_cards."""
        if not 0 <= position < len(self._face_up):
            return []
        run = self._face_up[position:]
        if not M.is_valid_run(run):
            return []
        del self._face_up[position:]
        log.debug(f"column {self._index}: removed run {describe_cards(run)}")
        if not self._face_up and self._hidden:
            flipped = self._hidden.pop()
            self._face_up.append(flipped)
            log.debug(f"column {self._index}: flipped {C.card_text(flipped)}")
        self._changed.fire(self._index)
        return run

    def __repr__(self):
        return f"TableauColumn({self._index}, hidden={len(self._hidden)}, face_up={self._face_up!r})"


class StockWasteManager:
    """
    Draw pile (stock, face-down) and discard pile (waste, face-up).
    Cards only ever move between the two piles, so their combined size never changes.
    """

    def __init__(self, cards: Sequence[C.Card] = ()):
        self._stock: List[C.Card] = list(cards)
        self._waste: List[C.Card] = []
        self._changed = M.ChangeNotifier()

    @property
    def stock_count(self) -> int:
        return len(self._stock)

    @property
    def waste_count(self) -> int:
        return len(self._waste)

    @property
    def stock_cards(self) -> Tuple[C.Card, ...]:
        return tuple(self._stock)

    @property
    def waste_cards(self) -> Tuple[C.Card, ...]:
        return tuple(self._waste)

    def top_waste_card(self) -> Optional[C.Card]:
        return self._waste[-1] if self._waste else None

    def subscribe(self, handler: Callable[[], None]) -> Callable[[], None]:
        return self._changed.subscribe(handler)

    def unsubscribe(self, handler: Callable[[], None]) -> bool:
        return self._changed.unsubscribe(handler)

    def handle_stock_click(self) -> bool:
        """
        Draw one card from stock to waste, or recycle the waste when stock is empty.
        Returns True if anything moved; listeners are notified only in that case.
        """
        if self._stock:
            card = self._stock.pop(0)
            self._waste.append(card)
            log.debug(f"drew {C.card_text(card)} ({len(self._stock)} left in stock)")
        elif self._waste:
            # Turning the waste face-down puts its bottom card (the first drawn) back on top
            self._stock = list(self._waste)
            self._waste.clear()
            log.debug(f"recycled {len(self._stock)} waste cards into stock")
        else:
            return False
        self._changed.fire()
        return True

    def stock_display(self) -> str:
        return f"[#{len(self._stock)}]" if self._stock else RECYCLE_MARKER

    def waste_display(self) -> str:
        if self._waste:
            return f"[{C.card_text(self._waste[-1])}]"
        return EMPTY_WASTE_MARKER

    def __repr__(self):
        return f"StockWasteManager(stock={len(self._stock)}, waste={len(self._waste)})"


class Deal(NamedTuple):
    columns: List[TableauColumn]
    stock_waste: StockWasteManager


def new_game(rng: Optional[random.Random] = None, *, seed: Optional[int] = None,
             deck: Optional[Sequence[C.Card]] = None) -> Deal:
    """
    Shuffle a fresh deck and deal it: column ``i`` gets ``i + 1`` cards, the
    remaining 24 seed the stock. Pass ``rng`` or ``seed`` (not both) for a
    reproducible deal, or ``deck`` to deal an already ordered 52-card deck as-is.
    """
    if rng is not None and seed is not None:
        raise ValueError("pass either rng or seed, not both")
    if deck is None:
        if rng is None:
            rng = random.Random(seed)
        cards = C.make_deck(shuffled=True, rng=rng)
    else:
        cards = list(deck)
        C.validate_deck(cards)

    columns = []
    pos = 0
    for col in range(TABLEAU_COLUMNS):
        columns.append(TableauColumn(col, cards[pos:pos + col + 1]))
        pos += col + 1
    stock_waste = StockWasteManager(cards[pos:])
    log.debug(f"dealt new game: {TABLEAU_CARDS} tableau cards, {stock_waste.stock_count} in stock")
    return Deal(columns, stock_waste)
