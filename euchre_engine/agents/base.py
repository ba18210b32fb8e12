# euchre_engine/agents/base.py
from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class EuchreAgent(Protocol):
    """
    Interface that all Euchre players must implement.

    `observation` is a JSON-like dict containing:
      - game-level info (round index, dealer, target score, etc.)
      - player info (seat, team, position relative to the dealer)
      - trump info (turned card, current trump)
      - phase-specific info (hand, legal actions, current trick, history)
    """

    def choose_bid(self, observation: Dict[str, Any]) -> int:
        """
        Return an index into observation["legal_actions"].

        Used in both bidding rounds; the list always contains the pass option
        unless the dealer is stuck.
        """
        raise NotImplementedError

    def choose_discard(self, observation: Dict[str, Any]) -> int:
        """Return the index into observation["hand"] of the card to bury."""
        raise NotImplementedError

    def choose_card(self, observation: Dict[str, Any]) -> int:
        """
        Return the index into the player's current hand of the card to play.

        The observation will include:
          - "hand": list[card_dict]
          - "legal_move_indices": list[int]
        """
        raise NotImplementedError
