# euchre_engine/errors.py
from __future__ import annotations


class EngineError(ValueError):
    """An attempted action was rejected. Engine state is left unchanged."""


class NotYourTurn(EngineError):
    """The acting seat is not the current player."""


class CardNotInHand(EngineError):
    """The referenced card is not in the acting seat's hand."""


class MustFollowSuit(EngineError):
    """The played card ignores a follow-suit obligation."""


class WrongPhase(EngineError):
    """The action kind is not accepted in the current phase."""


class IllegalBid(EngineError):
    """A bid that the current bidding rules forbid."""


class NoRoundInProgress(EngineError):
    pass


class GameOver(EngineError):
    pass


class InvariantViolation(RuntimeError):
    """
    Engine state became impossible (e.g. hand sizes drifted after pickup).

    This is a bug in the engine, not a bad action, so it is deliberately not
    an EngineError and callers should not retry.
    """
