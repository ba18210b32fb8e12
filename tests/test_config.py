import pytest

from euchre_engine.config import GameConfig


def test_defaults():
    config = GameConfig()
    assert config.target_score == 10
    assert not config.with_joker
    assert not config.stick_the_dealer
    assert config.allow_going_alone
    assert len(config.create_deck()) == 24
    assert len(GameConfig(with_joker=True).create_deck()) == 25


def test_from_dict():
    config = GameConfig.from_dict({"target_score": 5, "stick_the_dealer": True})
    assert config.target_score == 5
    assert config.stick_the_dealer

    with pytest.raises(ValueError):
        GameConfig.from_dict({"target": 5})


def test_invalid_target_score():
    with pytest.raises(ValueError):
        GameConfig(target_score=0)
