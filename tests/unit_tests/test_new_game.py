import random

import pytest

from klondike import common as C
from klondike.__main__ import format_layout, main
from klondike.modes.klondike import TABLEAU_COLUMNS, new_game


def _all_cards(deal):
    columns, sw = deal
    out = []
    for col in columns:
        snap = col.snapshot()
        out.extend(snap["hidden"])
        out.extend(snap["face_up"])
    out.extend(sw.stock_cards)
    out.extend(sw.waste_cards)
    return out


def test_deal_shape() -> None:
    columns, sw = new_game(seed=3)
    assert len(columns) == TABLEAU_COLUMNS
    for i, col in enumerate(columns):
        assert col.index == i
        assert col.hidden_count == i
        assert len(col.face_up_cards) == 1
    assert sw.stock_count == 24
    assert sw.waste_count == 0


def test_deal_owns_each_card_once() -> None:
    cards = _all_cards(new_game(rng=random.Random(8)))
    C.validate_deck(cards)


def test_seeded_deals_are_reproducible() -> None:
    a = new_game(seed=77)
    b = new_game(seed=77)
    assert _all_cards(a) == _all_cards(b)
    assert [c.display() for c in a.columns] == [c.display() for c in b.columns]


def test_explicit_deck_is_dealt_in_order() -> None:
    deck = C.build_standard_deck()
    columns, sw = new_game(deck=deck)
    assert columns[0].top_card() == deck[0]
    assert columns[1].top_card() == deck[2]
    assert columns[6].top_card() == deck[27]
    assert sw.stock_cards == tuple(deck[28:])


def test_rng_and_seed_together_are_rejected() -> None:
    with pytest.raises(ValueError):
        new_game(random.Random(1), seed=2)


def test_rng_alone_matches_equal_seed() -> None:
    a = new_game(random.Random(2))
    b = new_game(seed=2)
    assert _all_cards(a) == _all_cards(b)


def test_explicit_deck_must_be_standard() -> None:
    deck = C.build_standard_deck()
    deck[1] = deck[0]
    with pytest.raises(ValueError):
        new_game(deck=deck)


def test_moving_a_card_between_columns_transfers_it() -> None:
    king = C.Card(C.Suit.SPADES, C.Rank.KING)
    queen = C.Card(C.Suit.HEARTS, C.Rank.QUEEN)
    deck = C.build_standard_deck()
    deck.remove(king)
    deck.remove(queen)
    # column 0 is [K♠]; column 1 is [deck[1], Q♥]
    deck.insert(0, king)
    deck.insert(2, queen)
    columns, sw = new_game(deck=deck)
    under_queen = deck[1]

    lifted = columns[1].try_remove_run(queen)
    assert lifted == [queen]
    assert columns[1].face_up_cards == (under_queen,)
    for c in lifted:
        assert columns[0].try_place(c)
    assert columns[0].face_up_cards == (king, queen)
    C.validate_deck(_all_cards((columns, sw)))


def test_format_layout() -> None:
    deal = new_game(deck=C.build_standard_deck())
    text = format_layout(deal)
    lines = text.splitlines()
    assert lines[0] == "Stock [#24]  Waste [  ]"
    assert lines[1].split() == [f"[{C.card_text(c.top_card())}]" for c in deal.columns]


def test_main_prints_layout(capsys, monkeypatch) -> None:
    monkeypatch.setattr("klondike.__main__.setup_logging", lambda level: None)
    assert main(["--seed", "5"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Stock [#24]  Waste [  ]")
    assert format_layout(new_game(seed=5)) in out
