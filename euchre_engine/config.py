# euchre_engine/config.py
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict

from .cards import Deck


@dataclass(frozen=True)
class GameConfig:
    """
    Table rules for a game.

    - target_score: first team to reach it wins (commonly 10).
    - with_joker: play with the 25-card deck that adds the Joker.
    - stick_the_dealer: the dealer may not pass in the second bidding round,
      so misdeals cannot happen.
    - allow_going_alone: whether makers may play without their partner.
    """
    target_score: int = 10
    with_joker: bool = False
    stick_the_dealer: bool = False
    allow_going_alone: bool = True

    def __post_init__(self) -> None:
        if self.target_score < 1:
            raise ValueError("target_score must be at least 1")

    def create_deck(self) -> Deck:
        if self.with_joker:
            return Deck.with_joker()
        return Deck.standard()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)
