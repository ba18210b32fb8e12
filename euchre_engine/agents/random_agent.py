# euchre_engine/agents/random_agent.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict
import random

from .base import EuchreAgent


@dataclass
class RandomEuchreAgent(EuchreAgent):
    """
    Baseline agent that picks uniformly among whatever is legal.

    Useful for self-play smoke runs and for exercising the engine; it makes no
    attempt to bid or play well.
    """

    rng: random.Random

    def choose_bid(self, observation: Dict[str, Any]) -> int:
        return self.rng.randrange(len(observation["legal_actions"]))

    def choose_discard(self, observation: Dict[str, Any]) -> int:
        return self.rng.randrange(len(observation["hand"]))

    def choose_card(self, observation: Dict[str, Any]) -> int:
        legal_indices = observation["legal_move_indices"]
        return self.rng.choice(legal_indices)
