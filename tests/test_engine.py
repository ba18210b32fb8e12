import random

import pytest

from euchre_engine.agents.base import EuchreAgent
from euchre_engine.agents.random_agent import RandomEuchreAgent
from euchre_engine.config import GameConfig
from euchre_engine.engine import GameEngine, describe_result
from euchre_engine.rules import score_round
from euchre_engine.verbose_logger import VerboseGameLogger


def _make_engine(seed: int = 999, **kwargs) -> GameEngine:
    agents = [RandomEuchreAgent(rng=random.Random(100 + i)) for i in range(4)]
    names = [f"P{i}" for i in range(4)]
    return GameEngine(agents=agents, player_names=names, rng_seed=seed, **kwargs)


class _IllegalAgent:
    """Always answers with an out-of-range index."""

    def choose_bid(self, observation):
        return 99

    def choose_discard(self, observation):
        return -1

    def choose_card(self, observation):
        return 99


class _RecordingAgent(RandomEuchreAgent):
    def __init__(self, rng):
        super().__init__(rng)
        self.observations = []

    def choose_bid(self, observation):
        self.observations.append(observation)
        return super().choose_bid(observation)

    def choose_discard(self, observation):
        self.observations.append(observation)
        return super().choose_discard(observation)

    def choose_card(self, observation):
        self.observations.append(observation)
        return super().choose_card(observation)


def test_agents_satisfy_protocol():
    assert isinstance(RandomEuchreAgent(rng=random.Random(0)), EuchreAgent)
    assert isinstance(_IllegalAgent(), EuchreAgent)


def test_engine_requires_four_agents():
    with pytest.raises(ValueError):
        GameEngine(agents=[RandomEuchreAgent(rng=random.Random(0))] * 3)
    with pytest.raises(ValueError):
        GameEngine(
            agents=[RandomEuchreAgent(rng=random.Random(0))] * 4,
            player_names=["a", "b"],
        )


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_full_game_basic_invariants(seed):
    engine = _make_engine(seed)
    game = engine.play_game()

    assert game.is_over()
    assert game.winner() in (0, 1)

    totals = [0, 0]
    for result in game.round_history:
        if result.is_misdeal:
            assert result.maker_tricks + result.defender_tricks == 0
        else:
            assert result.maker_tricks + result.defender_tricks == 5
            # Result is a pure function of maker, tricks and alone flag.
            assert result == score_round(
                result.maker,
                result.maker_tricks,
                result.was_alone,
                dealer=result.dealer,
                trump=result.trump,
            )
        update = result.score_update()
        totals[0] += update.team0_delta
        totals[1] += update.team1_delta

    assert game.scores == totals


def test_same_seed_same_game():
    a = _make_engine(42).play_game()
    b = _make_engine(42).play_game()
    assert a.round_history == b.round_history
    assert a.scores == b.scores


def test_illegal_choices_are_corrected(caplog):
    agents = [_IllegalAgent() for _ in range(4)]
    # Stuck dealers make the first legal bid a call, so the game can finish.
    config = GameConfig(target_score=2, stick_the_dealer=True)
    engine = GameEngine(agents=agents, rng_seed=5, config=config)
    with caplog.at_level("WARNING", logger="euchre_engine.engine"):
        game = engine.play_game()
    assert game.is_over()
    assert "illegal" in caplog.text


def test_max_rounds_stops_early():
    engine = _make_engine(7, max_rounds=1)
    game = engine.play_game()
    assert len(game.round_history) == 1


def test_observations_describe_the_table():
    recorder = _RecordingAgent(random.Random(3))
    agents = [recorder] + [RandomEuchreAgent(rng=random.Random(i)) for i in range(3)]
    engine = GameEngine(agents=agents, rng_seed=11, game_label="g1")
    engine.play_game()

    phases = {obs["phase"] for obs in recorder.observations}
    assert {"bidding", "play"} <= phases
    for obs in recorder.observations:
        assert obs["player"]["id"] == 0
        assert obs["player"]["team"] == 0
        assert obs["game"]["game_id"] == "g1"
        if obs["phase"] == "bidding":
            assert obs["legal_actions"]
            assert all(a["seat"] == 0 for a in obs["legal_actions"])
        if obs["phase"] == "play":
            assert obs["legal_move_indices"]
            assert all(0 <= i < len(obs["hand"]) for i in obs["legal_move_indices"])
        if obs["phase"] == "discard":
            assert len(obs["hand"]) == 6


def test_transcript_is_written(tmp_path):
    path = tmp_path / "transcript.txt"
    transcript = VerboseGameLogger(path)
    engine = _make_engine(8, game_label="t1", transcript=transcript)
    game = engine.play_game()

    entries = transcript.entries
    assert any("Phase: play" in e for e in entries)
    action_entries = [e for e in entries if e.startswith("=== Agent:")]
    assert all("\nHand: " in e for e in action_entries)
    for e in action_entries:
        hand = e.split("\nHand: ")[1].split("\n")[0].split()
        if "Phase: discard" in e:
            assert len(hand) == 6
        elif "Phase: play" in e:
            assert 1 <= len(hand) <= 5
        else:
            assert len(hand) == 5
    assert sum("Round result" in e for e in entries) == len(game.round_history)

    transcript.flush()
    text = path.read_text(encoding="utf-8")
    assert "Game: t1" in text
    assert describe_result(game.round_history[-1]) in text
    assert transcript.entries == []
