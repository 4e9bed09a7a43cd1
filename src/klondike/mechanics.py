from typing import Callable, List, Optional, Sequence

from klondike import common as C


class ChangeNotifier:
    """
    Ordered list of change handlers.
    Piles call fire() after a committed mutation; handlers run synchronously in
    the order they subscribed, before the mutating call returns.
    """

    def __init__(self):
        self._handlers: List[Callable[..., None]] = []

    def subscribe(self, handler: Callable[..., None]) -> Callable[[], None]:
        """Register ``handler`` and return a callable that unregisters it."""
        self._handlers.append(handler)

        def _unsubscribe():
            self.unsubscribe(handler)

        return _unsubscribe

    def unsubscribe(self, handler: Callable[..., None]) -> bool:
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def __len__(self):
        return len(self._handlers)

    def fire(self, *args) -> None:
        # Copy so handlers may unsubscribe while being notified
        for fn in list(self._handlers):
            fn(*args)


def can_stack(upper: Optional[C.Card], lower: Optional[C.Card]) -> bool:
    """True if ``upper`` may sit on ``lower``: opposite colour, exactly one rank lower."""
    if upper is None or lower is None:
        return False
    return C.is_red(upper.suit) != C.is_red(lower.suit) and upper.rank == lower.rank - 1


def is_valid_run(cards: Sequence[C.Card]) -> bool:
    """Every adjacent pair (bottom to top) must be a descending alternating-colour link."""
    for i in range(len(cards) - 1):
        if not can_stack(cards[i + 1], cards[i]):
            return False
    return True
