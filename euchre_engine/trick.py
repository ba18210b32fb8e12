# euchre_engine/trick.py
from __future__ import annotations

from typing import List, Optional, Set, Tuple

from .cards import Card, Hand, Suit
from .errors import CardNotInHand, MustFollowSuit
from .state import PlayedCard, TrickResult

_TRUMP_BASE = 1000
_LEAD_BASE = 100


class Trick:
    """
    One round of card play under a fixed trump.

    The lead suit is the effective suit of the first card and never changes
    afterwards. Legality is not checked here; the round validates a play with
    `validate_play` before recording it.
    """

    def __init__(self, trump: Suit) -> None:
        self._trump = trump
        self._plays: List[PlayedCard] = []
        self._lead_suit = Suit.NONE

    @property
    def trump(self) -> Suit:
        return self._trump

    @property
    def lead_suit(self) -> Suit:
        return self._lead_suit

    @property
    def plays(self) -> Tuple[PlayedCard, ...]:
        return tuple(self._plays)

    @property
    def leader(self) -> Optional[int]:
        if not self._plays:
            return None
        return self._plays[0].seat

    @property
    def seats_played(self) -> Set[int]:
        return {p.seat for p in self._plays}

    def __len__(self) -> int:
        return len(self._plays)

    def is_complete(self, active_seats: int) -> bool:
        return len(self._plays) >= active_seats

    def play(self, seat: int, card: Card) -> None:
        if seat in self.seats_played:
            raise ValueError(f"Seat {seat} already played to this trick")
        self._plays.append(PlayedCard(seat=seat, card=card))
        if len(self._plays) == 1:
            self._lead_suit = card.effective_suit(self._trump)

    def card_value(self, card: Card) -> int:
        """
        Trick-taking power of `card` in this trick.

        Any trump beats any card of the lead suit, which beats everything else;
        cards that neither follow nor trump are worth 0 and never win.
        """
        if card.is_trump(self._trump):
            return _TRUMP_BASE + card.trump_value(self._trump)
        if self._plays and card.effective_suit(self._trump) == self._lead_suit:
            return _LEAD_BASE + card.off_suit_value()
        return 0

    def _best(self) -> Optional[PlayedCard]:
        best: Optional[PlayedCard] = None
        best_value = -1
        for played in self._plays:
            value = self.card_value(played.card)
            if value > best_value:
                best = played
                best_value = value
        return best

    def winner(self) -> Optional[int]:
        best = self._best()
        return best.seat if best is not None else None

    def winning_card(self) -> Optional[Card]:
        best = self._best()
        return best.card if best is not None else None

    def can_beat(self, card: Card) -> bool:
        """Would `card` take over the lead if it were played now?"""
        current = self.winning_card()
        if current is None:
            return True
        return self.card_value(card) > self.card_value(current)

    def must_follow(self) -> Suit:
        """Suit that has to be followed; Suit.NONE while leading."""
        if not self._plays:
            return Suit.NONE
        return self._lead_suit

    def result(self) -> TrickResult:
        best = self._best()
        if best is None:
            raise ValueError("Cannot determine winner of an empty trick")
        was_trumped = (
            best.card.is_trump(self._trump) and self._lead_suit != self._trump
        )
        return TrickResult(
            winner=best.seat,
            cards=tuple(self._plays),
            lead_suit=self._lead_suit,
            trump=self._trump,
            was_trumped=was_trumped,
        )


def validate_play(hand: Hand, card: Card, trick: Trick) -> None:
    """Raise if `card` may not be played from `hand` to `trick`."""
    if not hand.contains(card):
        raise CardNotInHand(f"{card} is not in hand")

    if len(trick) == 0:
        return

    lead_suit = trick.lead_suit
    trump = trick.trump
    if hand.has_suit(lead_suit, trump) and card.effective_suit(trump) != lead_suit:
        raise MustFollowSuit(f"Must follow {lead_suit.name.title()} with {card}")


def legal_plays(hand: Hand, trick: Trick) -> List[Card]:
    """
    Return the cards in `hand` that may legally be played to `trick`.

    - Leading: any card.
    - Holding the lead suit (by effective suit): only those cards.
    - Void in the lead suit: any card.
    """
    if len(trick) == 0:
        return hand.cards

    following = hand.cards_of_suit(trick.lead_suit, trick.trump)
    if following:
        return following
    return hand.cards
