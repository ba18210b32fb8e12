# euchre_engine/actions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Union
import enum

from .cards import Card, Suit, card_to_dict


class ActionType(enum.Enum):
    PASS = "pass"
    ORDER_UP = "order_up"
    CALL_TRUMP = "call_trump"
    DISCARD = "discard"
    PLAY_CARD = "play_card"


@dataclass(frozen=True)
class Pass:
    seat: int
    type: ClassVar[ActionType] = ActionType.PASS


@dataclass(frozen=True)
class OrderUp:
    """Bid round 1: accept the turned card's suit as trump."""
    seat: int
    alone: bool = False
    type: ClassVar[ActionType] = ActionType.ORDER_UP


@dataclass(frozen=True)
class CallTrump:
    """Bid round 2: name any suit except the one turned down."""
    seat: int
    suit: Suit
    alone: bool = False
    type: ClassVar[ActionType] = ActionType.CALL_TRUMP


@dataclass(frozen=True)
class Discard:
    seat: int
    card: Card
    type: ClassVar[ActionType] = ActionType.DISCARD


@dataclass(frozen=True)
class PlayCard:
    seat: int
    card: Card
    type: ClassVar[ActionType] = ActionType.PLAY_CARD


Action = Union[Pass, OrderUp, CallTrump, Discard, PlayCard]


def action_to_dict(action: Action) -> Dict[str, Any]:
    """Convert an Action to a JSON-serializable dict."""
    data: Dict[str, Any] = {"type": action.type.value, "seat": action.seat}
    if isinstance(action, (OrderUp, CallTrump)):
        data["alone"] = action.alone
    if isinstance(action, CallTrump):
        data["suit"] = action.suit.name
    if isinstance(action, (Discard, PlayCard)):
        data["card"] = card_to_dict(action.card)
    return data
