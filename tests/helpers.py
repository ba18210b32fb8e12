from typing import Dict, List

from euchre_engine.cards import Card, Deck, Rank, Suit


def C(text: str) -> Card:
    """Parse short card names like "J♥", "10♠" or "Joker"."""
    if text == "Joker":
        return Card(Suit.NONE, Rank.JOKER)
    symbols = {s.symbol: s for s in Suit.playable()}
    ranks = {r.value: r for r in Rank.standard()}
    return Card(symbols[text[-1]], ranks[text[:-1]])


def build_stacked_deck(
    hands: Dict[int, List[Card]],
    turned: Card,
    dealer: int = 0,
    base: Deck = None,
) -> Deck:
    """Order a deck so that an unshuffled 3+2 deal produces `hands`."""
    order: List[Card] = []
    for offset, count in ((0, 3), (3, 2)):
        for i in range(4):
            seat = (dealer + 1 + i) % 4
            order.extend(hands[seat][offset:offset + count])
    order.append(turned)
    used = set(order)
    if len(used) != len(order):
        raise ValueError("Duplicate cards in stacked deck")
    base = base if base is not None else Deck.standard()
    order.extend(c for c in base.cards if c not in used)
    return Deck(order)
