# euchre_engine/game.py
from __future__ import annotations

import logging
import random
from typing import List, Optional

from .actions import Action
from .cards import Card, Suit
from .config import GameConfig
from .errors import GameOver, InvariantViolation, NoRoundInProgress, WrongPhase
from .round import Phase, Round
from .rules import NUM_SEATS, NUM_TEAMS, next_seat
from .state import RoundResult

logger = logging.getLogger(__name__)


class Game:
    """
    A full game: rounds are dealt until a team reaches the target score.

    The dealer moves one seat to the left after every round, including
    misdeals. Scores change only when a round finishes inside
    `apply_action`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        dealer: int = 0,
    ) -> None:
        if not 0 <= dealer < NUM_SEATS:
            raise ValueError(f"dealer must be a seat in 0..{NUM_SEATS - 1}")

        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else random.Random()

        self._scores: List[int] = [0] * NUM_TEAMS
        self._dealer = dealer
        self._round: Optional[Round] = None
        self._round_history: List[RoundResult] = []

    # -------------------------------------------------------------------------
    # Round lifecycle
    # -------------------------------------------------------------------------

    def start_round(self) -> Round:
        """Create a fresh deck and round for the current dealer and deal it."""
        if self.is_over():
            raise GameOver("The game is already over")
        if self._round is not None and not self._round.is_complete:
            raise WrongPhase("The current round is still in progress")

        deck = self.config.create_deck()
        self._round = Round(self._dealer, self.config)
        self._round.deal(deck, self.rng)
        logger.debug(
            "Started round %d with dealer %d",
            len(self._round_history) + 1,
            self._dealer,
        )
        return self._round

    def apply_action(self, action: Action) -> None:
        if self._round is None:
            raise NoRoundInProgress("No round in progress; call start_round()")

        self._round.apply_action(action)

        if self._round.is_complete:
            self._end_round()

    def _end_round(self) -> None:
        if self._round is None:
            raise InvariantViolation("Round ended with no round in progress")
        result = self._round.result()
        self._round_history.append(result)

        update = result.score_update()
        self._scores[0] += update.team0_delta
        self._scores[1] += update.team1_delta

        self._dealer = next_seat(self._dealer)

        if result.is_misdeal:
            logger.info("Round %d: misdeal", len(self._round_history))
        else:
            logger.info(
                "Round %d: team %d made %s with %d tricks%s; score %d-%d",
                len(self._round_history),
                result.maker_team,
                result.trump.name.title(),
                result.maker_tricks,
                " (euchred)" if result.was_euchred else "",
                self._scores[0],
                self._scores[1],
            )
        if self.is_over():
            logger.info("Game over: team %d wins", self.winner())

    # -------------------------------------------------------------------------
    # Read API
    # -------------------------------------------------------------------------

    @property
    def round(self) -> Optional[Round]:
        return self._round

    @property
    def scores(self) -> List[int]:
        return list(self._scores)

    def score(self, team: int) -> int:
        return self._scores[team]

    @property
    def target_score(self) -> int:
        return self.config.target_score

    @property
    def dealer(self) -> int:
        return self._dealer

    @property
    def round_history(self) -> List[RoundResult]:
        return list(self._round_history)

    @property
    def phase(self) -> Phase:
        if self.is_over():
            return Phase.GAME_END
        if self._round is None:
            return Phase.DEAL
        return self._round.phase

    @property
    def trump(self) -> Suit:
        if self._round is None:
            return Suit.NONE
        return self._round.trump

    @property
    def turned_card(self) -> Optional[Card]:
        if self._round is None:
            return None
        return self._round.turned_card

    def current_player(self) -> Optional[int]:
        if self._round is None:
            return None
        return self._round.current_player()

    def legal_actions(self) -> List[Action]:
        if self._round is None:
            return []
        return self._round.legal_actions()

    def hand(self, seat: int) -> List[Card]:
        if self._round is None:
            return []
        return self._round.hand(seat)

    def needs_new_round(self) -> bool:
        if self.is_over():
            return False
        return self._round is None or self._round.is_complete

    def is_over(self) -> bool:
        return any(score >= self.config.target_score for score in self._scores)

    def winner(self) -> Optional[int]:
        for team, score in enumerate(self._scores):
            if score >= self.config.target_score:
                return team
        return None
