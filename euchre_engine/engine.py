# euchre_engine/engine.py
from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

from .actions import Action, Discard, PlayCard, action_to_dict
from .agents.base import EuchreAgent
from .cards import card_to_dict
from .config import GameConfig
from .game import Game
from .round import Phase, Round
from .rules import NUM_SEATS, seat_position, team_of
from .state import RoundResult, TrickResult
from .verbose_logger import VerboseGameLogger

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 500


def _trick_to_dict(trick: TrickResult) -> Dict[str, Any]:
    return {
        "plays": [
            {"player_id": p.seat, "card": card_to_dict(p.card)} for p in trick.cards
        ],
        "lead_suit": trick.lead_suit.name,
        "winner_id": trick.winner,
        "was_trumped": trick.was_trumped,
    }


def describe_result(result: RoundResult) -> str:
    if result.is_misdeal:
        return "Misdeal: nobody named trump"
    outcome = "euchred" if result.was_euchred else (
        "march" if result.was_march else "made it"
    )
    return (
        f"Seat {result.maker} (team {result.maker_team}) called "
        f"{result.trump.name.title()}{' alone' if result.was_alone else ''}: "
        f"{result.maker_tricks} tricks, {outcome}"
    )


class GameEngine:
    """
    Plays a full Euchre game using pluggable agents.

    This module is *pure* game logic: no rendering, no strategy. Agents just
    implement the EuchreAgent protocol and every decision is turned into an
    Action applied through `Game.apply_action`.
    """

    def __init__(
        self,
        agents: List[EuchreAgent],
        player_names: Optional[List[str]] = None,
        rng_seed: Optional[int] = None,
        game_label: Optional[str] = None,
        config: Optional[GameConfig] = None,
        max_rounds: Optional[int] = DEFAULT_MAX_ROUNDS,
        transcript: Optional[VerboseGameLogger] = None,
    ) -> None:
        if len(agents) != NUM_SEATS:
            raise ValueError(f"Euchre needs exactly {NUM_SEATS} agents")

        self.agents: List[EuchreAgent] = agents

        if player_names is None:
            player_names = [f"Player {i}" for i in range(len(agents))]
        if len(player_names) != len(agents):
            raise ValueError("player_names must match number of agents")
        self.player_names = list(player_names)

        self.rng = random.Random(rng_seed)
        self.game_label = game_label
        self.max_rounds = max_rounds
        self.transcript = transcript
        self.game = Game(config=config, rng=self.rng)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def play_game(self) -> Game:
        """Play rounds until a team reaches the target score; return the Game."""
        game = self.game
        while not game.is_over():
            if (
                self.max_rounds is not None
                and len(game.round_history) >= self.max_rounds
            ):
                logger.warning(
                    "Stopping%s after %d rounds without a winner",
                    f" {self.game_label}" if self.game_label else "",
                    self.max_rounds,
                )
                break

            round_state = game.start_round()
            round_index = len(game.round_history)
            self._play_round(round_state, round_index)

            result = game.round_history[-1]
            if self.transcript is not None:
                self.transcript.log_round_result(
                    game_id=self.game_label,
                    round_index=round_index,
                    summary=describe_result(result),
                    scores=game.scores,
                )
            logger.info(
                "Finished round %d%s: %s",
                round_index + 1,
                f" for {self.game_label}" if self.game_label else "",
                describe_result(result),
            )

        logger.info(
            "Finished game%s with scores %s",
            f" {self.game_label}" if self.game_label else "",
            game.scores,
        )
        return game

    # -------------------------------------------------------------------------
    # Round lifecycle
    # -------------------------------------------------------------------------

    def _play_round(self, round_state: Round, round_index: int) -> None:
        while not round_state.is_complete:
            seat = round_state.current_player()
            if seat is None:
                raise RuntimeError(f"No player to act in {round_state.phase}")
            phase = round_state.phase
            hand = [str(c) for c in round_state.hand(seat)]
            action, note = self._choose_action(round_state, seat, round_index)
            self.game.apply_action(action)

            if self.transcript is not None:
                self.transcript.log_action(
                    agent_label=self.player_names[seat],
                    game_id=self.game_label,
                    round_index=round_index,
                    phase=phase.value,
                    action=action_to_dict(action),
                    hand=hand,
                    note=note,
                )

    def _choose_action(
        self, round_state: Round, seat: int, round_index: int
    ) -> tuple[Action, Optional[str]]:
        agent = self.agents[seat]
        hand = round_state.hand(seat)
        obs = self._build_common_observation_base(seat, round_state, round_index)
        obs["hand"] = [card_to_dict(c) for c in hand]

        if round_state.phase.is_bidding:
            legal = round_state.legal_actions()
            obs.update(
                {
                    "phase": "bidding",
                    "bid_round": round_state.bid_round,
                    "legal_actions": [action_to_dict(a) for a in legal],
                }
            )
            choice = agent.choose_bid(obs)
            if not isinstance(choice, int) or not 0 <= choice < len(legal):
                return legal[0], self._corrected(seat, "bid", choice)
            return legal[choice], None

        if round_state.phase == Phase.DISCARD:
            obs.update({"phase": "discard", "hand_cards": hand[:]})
            choice = agent.choose_discard(obs)
            if not isinstance(choice, int) or not 0 <= choice < len(hand):
                return Discard(seat, hand[0]), self._corrected(seat, "discard", choice)
            return Discard(seat, hand[choice]), None

        legal_cards = round_state.legal_plays(seat)
        legal_indices = [i for i, c in enumerate(hand) if c in legal_cards]
        trick = round_state.current_trick
        obs.update(
            {
                "phase": "play",
                "legal_move_indices": legal_indices,
                "current_trick": {
                    "plays": [
                        {"player_id": p.seat, "card": card_to_dict(p.card)}
                        for p in (trick.plays if trick is not None else ())
                    ],
                    "lead_suit": trick.must_follow().name if trick is not None else None,
                },
                "trick_index": len(round_state.trick_history),
                "trick_history": [
                    _trick_to_dict(t) for t in round_state.trick_history
                ],
                "tricks_taken_so_far": {
                    pid: round_state.tricks_won(pid) for pid in range(NUM_SEATS)
                },
                "hand_sizes": {
                    pid: len(round_state.hand(pid)) for pid in range(NUM_SEATS)
                },
            }
        )
        choice = agent.choose_card(obs)
        if choice not in legal_indices:
            # If agent chooses illegal index, auto-correct to first legal.
            note = self._corrected(seat, "card", choice)
            return PlayCard(seat, hand[legal_indices[0]]), note
        return PlayCard(seat, hand[choice]), None

    def _corrected(self, seat: int, kind: str, choice: Any) -> str:
        logger.warning(
            "Seat %d returned illegal %s choice %r; using first legal option",
            seat,
            kind,
            choice,
        )
        return f"illegal {kind} choice {choice!r} replaced"

    # -------------------------------------------------------------------------
    # Observation builders
    # -------------------------------------------------------------------------

    def _build_common_observation_base(
        self, seat: int, round_state: Round, round_index: int
    ) -> Dict[str, Any]:
        scores = self.game.scores
        turned = round_state.turned_card
        return {
            "game": {
                "game_id": self.game_label,
                "round_index": round_index,
                "dealer_id": round_state.dealer,
                "target_score": self.game.target_score,
                "with_joker": self.game.config.with_joker,
            },
            "player": {
                "id": seat,
                "name": self.player_names[seat],
                "team": team_of(seat),
                "position": seat_position(seat, round_state.dealer),
            },
            "trump": {
                "suit": round_state.trump.name,
                "turned_card": card_to_dict(turned) if turned is not None else None,
                "maker_id": round_state.maker,
                "alone": round_state.alone,
                "sitting_out_id": round_state.sitting_out,
            },
            "scores": {"team0": scores[0], "team1": scores[1]},
            "player_names": {
                pid: name for pid, name in enumerate(self.player_names)
            },
        }
