# euchre_engine/rules.py
from __future__ import annotations

from typing import Optional

from .cards import Suit
from .state import RoundResult

NUM_SEATS = 4
NUM_TEAMS = 2
HAND_SIZE = 5
TRICKS_PER_ROUND = 5
TRICKS_TO_MAKE = 3

_POSITIONS = [
    "Dealer",
    "Left of Dealer",
    "Across from Dealer",
    "Right of Dealer",
]


def team_of(seat: int) -> int:
    """Seats 0 and 2 form team 0; seats 1 and 3 form team 1."""
    return seat % NUM_TEAMS


def partner_of(seat: int) -> int:
    return (seat + 2) % NUM_SEATS


def is_partner(a: int, b: int) -> bool:
    return team_of(a) == team_of(b)


def next_seat(seat: int, num_seats: int = NUM_SEATS) -> int:
    return (seat + 1) % num_seats


def seat_position(seat: int, dealer: int) -> str:
    return _POSITIONS[(seat - dealer) % NUM_SEATS]


def score_round(
    maker: Optional[int],
    maker_tricks: int,
    alone: bool,
    *,
    dealer: int = 0,
    trump: Suit = Suit.NONE,
) -> RoundResult:
    """
    Score a finished round:

    - No maker (everyone passed twice): misdeal, nobody scores.
    - Makers take fewer than 3 tricks: euchred, defenders score 2.
    - Makers take all 5 (a march): 4 if the maker went alone, else 2.
    - Otherwise the makers score 1.
    """
    if maker is None:
        return RoundResult(
            dealer=dealer,
            trump=trump,
            maker=None,
            maker_team=None,
            maker_tricks=0,
            defender_tricks=0,
            was_alone=False,
            was_euchred=False,
            maker_points=0,
            defend_points=0,
        )

    if not 0 <= maker_tricks <= TRICKS_PER_ROUND:
        raise ValueError(f"maker_tricks out of range: {maker_tricks}")

    maker_points = 0
    defend_points = 0
    was_euchred = maker_tricks < TRICKS_TO_MAKE
    if was_euchred:
        defend_points = 2
    elif maker_tricks == TRICKS_PER_ROUND:
        maker_points = 4 if alone else 2
    else:
        maker_points = 1

    return RoundResult(
        dealer=dealer,
        trump=trump,
        maker=maker,
        maker_team=team_of(maker),
        maker_tricks=maker_tricks,
        defender_tricks=TRICKS_PER_ROUND - maker_tricks,
        was_alone=alone,
        was_euchred=was_euchred,
        maker_points=maker_points,
        defend_points=defend_points,
    )
