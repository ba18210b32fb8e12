import csv
import random

import pandas as pd
import pytest

from euchre_engine.actions import Pass
from euchre_engine.agents.random_agent import RandomEuchreAgent
from euchre_engine.engine import GameEngine
from euchre_engine.game import Game
from euchre_engine.game_log import FIELDNAMES, build_round_score_rows
from euchre_engine.results import (
    OUTCOMES,
    final_scores,
    load_round_scores,
    outcome_rates,
)


@pytest.fixture
def scores_csv(tmp_path):
    path = tmp_path / "scores.csv"
    games = []
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for g in range(3):
            agents = [RandomEuchreAgent(rng=random.Random(g * 10 + i)) for i in range(4)]
            game = GameEngine(agents=agents, rng_seed=g).play_game()
            games.append(game)
            for row in build_round_score_rows(game, game_id=f"game{g}"):
                writer.writerow(row)
    return path, games


def test_final_scores(scores_csv):
    path, games = scores_csv
    df = load_round_scores(path)
    finals = final_scores(df)

    assert list(finals["game_id"]) == ["game0", "game1", "game2"]
    for (_, row), game in zip(finals.iterrows(), games):
        assert [row["team0_score"], row["team1_score"]] == game.scores
        assert row["winner_team"] == game.winner()
        assert row["rounds"] == len(game.round_history)


def test_unfinished_games_have_no_winner(tmp_path):
    misdeal_only = Game(rng=random.Random(0))
    misdeal_only.start_round()
    for _ in range(8):
        misdeal_only.apply_action(Pass(misdeal_only.current_player()))

    agents = [RandomEuchreAgent(rng=random.Random(i)) for i in range(4)]
    stopped = GameEngine(agents=agents, rng_seed=4, max_rounds=1).play_game()

    path = tmp_path / "scores.csv"
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for game_id, game in (("misdeal", misdeal_only), ("stopped", stopped)):
            for row in build_round_score_rows(game, game_id=game_id):
                writer.writerow(row)

    finals = final_scores(load_round_scores(path)).set_index("game_id")
    assert misdeal_only.winner() is None
    assert pd.isna(finals.loc["misdeal", "winner_team"])
    assert list(finals.loc["misdeal", ["team0_score", "team1_score"]]) == [0, 0]
    # One round can score at most 4 points, short of the default target.
    assert stopped.winner() is None
    assert pd.isna(finals.loc["stopped", "winner_team"])
    assert finals.loc["stopped", "target_score"] == 10


def test_outcome_rates(scores_csv):
    path, games = scores_csv
    df = load_round_scores(path)
    stats = outcome_rates(df)

    assert list(stats.index) == OUTCOMES
    assert stats["count"].sum() == sum(len(g.round_history) for g in games)
    assert stats["rate"].sum() == pytest.approx(1.0)
    assert (stats["ci95"] >= 0).all()
