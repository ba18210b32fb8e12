import random

import pytest

from euchre_engine.actions import Pass
from euchre_engine.cards import Suit
from euchre_engine.config import GameConfig
from euchre_engine.errors import (
    GameOver,
    InvariantViolation,
    NoRoundInProgress,
    NotYourTurn,
    WrongPhase,
)
from euchre_engine.game import Game
from euchre_engine.round import Phase


def _play_round_randomly(game: Game, rng: random.Random) -> None:
    while not game.round.is_complete:
        game.apply_action(rng.choice(game.legal_actions()))


def test_new_game_has_no_round():
    game = Game(rng=random.Random(1))
    assert game.phase == Phase.DEAL
    assert game.round is None
    assert game.current_player() is None
    assert game.legal_actions() == []
    assert game.hand(0) == []
    assert game.trump == Suit.NONE
    assert game.turned_card is None
    assert game.scores == [0, 0]
    assert game.needs_new_round()
    with pytest.raises(NoRoundInProgress):
        game.apply_action(Pass(1))


def test_start_round_deals_immediately():
    game = Game(rng=random.Random(2), dealer=3)
    round_state = game.start_round()
    assert game.round is round_state
    assert game.phase == Phase.BID_ROUND_1
    assert game.current_player() == 0
    assert all(len(game.hand(seat)) == 5 for seat in range(4))
    assert game.turned_card is not None
    assert len(game.round.kitty) == 3
    assert not game.needs_new_round()

    with pytest.raises(WrongPhase):
        game.start_round()


def test_misdeal_advances_dealer_without_scoring():
    game = Game(rng=random.Random(3), dealer=0)
    game.start_round()
    for _ in range(8):
        game.apply_action(Pass(game.current_player()))

    assert game.dealer == 1
    assert game.scores == [0, 0]
    assert len(game.round_history) == 1
    assert game.round_history[0].is_misdeal
    assert game.round_history[0].dealer == 0
    assert game.needs_new_round()

    game.start_round()
    assert game.round.dealer == 1
    assert game.current_player() == 2


def test_rejected_action_does_not_touch_game():
    game = Game(rng=random.Random(4))
    game.start_round()
    with pytest.raises(NotYourTurn):
        game.apply_action(Pass(0))
    assert game.dealer == 0
    assert game.round_history == []


def test_scores_follow_round_results_until_game_over():
    rng = random.Random(5)
    game = Game(rng=random.Random(6))
    dealers = []
    while not game.is_over():
        dealers.append(game.dealer)
        game.start_round()
        _play_round_randomly(game, rng)

    totals = [0, 0]
    for result in game.round_history:
        update = result.score_update()
        totals[0] += update.team0_delta
        totals[1] += update.team1_delta
        if not result.is_misdeal:
            assert result.maker_tricks + result.defender_tricks == 5
    assert game.scores == totals

    assert dealers == [i % 4 for i in range(len(dealers))]
    assert game.dealer == len(dealers) % 4

    winner = game.winner()
    assert winner is not None
    assert game.score(winner) >= game.target_score
    assert game.score(1 - winner) < game.target_score
    assert game.phase == Phase.GAME_END
    assert not game.needs_new_round()
    with pytest.raises(GameOver):
        game.start_round()


def test_target_score_is_configurable():
    rng = random.Random(7)
    game = Game(GameConfig(target_score=1), rng=random.Random(8))
    while not game.is_over():
        game.start_round()
        _play_round_randomly(game, rng)
    assert max(game.scores) >= 1
    assert game.winner() in (0, 1)


def test_joker_deck_game():
    game = Game(GameConfig(with_joker=True), rng=random.Random(9))
    game.start_round()
    assert len(game.round.kitty) == 4
    cards = [c for seat in range(4) for c in game.hand(seat)]
    cards += [game.turned_card] + game.round.kitty
    assert len(set(cards)) == 25


def test_invalid_dealer():
    with pytest.raises(ValueError):
        Game(dealer=4)


def test_ending_a_missing_round_is_fatal():
    game = Game(rng=random.Random(10))
    with pytest.raises(InvariantViolation):
        game._end_round()
    assert game.round_history == []
    assert game.dealer == 0
