# euchre_engine/state.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .cards import Card, Suit


@dataclass(frozen=True)
class PlayedCard:
    seat: int
    card: Card


@dataclass(frozen=True)
class TrickResult:
    winner: int
    # (seat, card) pairs in play order
    cards: Tuple[PlayedCard, ...]
    lead_suit: Suit
    trump: Suit
    # a trump won a trick that was led in another suit
    was_trumped: bool

    @property
    def winning_card(self) -> Card:
        for played in self.cards:
            if played.seat == self.winner:
                return played.card
        raise RuntimeError("Trick winner did not play a card")


@dataclass(frozen=True)
class ScoreUpdate:
    team0_delta: int = 0
    team1_delta: int = 0


@dataclass(frozen=True)
class RoundResult:
    dealer: int
    trump: Suit
    maker: Optional[int]  # None on a misdeal
    maker_team: Optional[int]
    maker_tricks: int
    defender_tricks: int
    was_alone: bool
    was_euchred: bool
    maker_points: int
    defend_points: int

    @property
    def is_misdeal(self) -> bool:
        return self.maker is None

    @property
    def defender_team(self) -> Optional[int]:
        if self.maker_team is None:
            return None
        return 1 - self.maker_team

    @property
    def was_march(self) -> bool:
        return not self.is_misdeal and self.maker_tricks == 5

    def score_update(self) -> ScoreUpdate:
        if self.maker_team is None:
            return ScoreUpdate()
        deltas = [0, 0]
        deltas[self.maker_team] += self.maker_points
        deltas[1 - self.maker_team] += self.defend_points
        return ScoreUpdate(team0_delta=deltas[0], team1_delta=deltas[1])
