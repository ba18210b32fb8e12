# euchre_engine/cards.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional
import enum
import random


class Suit(enum.Enum):
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"
    NONE = "none"  # no trump named yet, or the Joker

    @classmethod
    def playable(cls) -> List["Suit"]:
        """The four real suits, in deck order."""
        return [cls.CLUBS, cls.DIAMONDS, cls.HEARTS, cls.SPADES]

    @property
    def color(self) -> Optional[str]:
        if self in (Suit.CLUBS, Suit.SPADES):
            return "black"
        if self in (Suit.DIAMONDS, Suit.HEARTS):
            return "red"
        return None

    def same_color(self, other: "Suit") -> bool:
        if self == Suit.NONE or other == Suit.NONE:
            return False
        return self.color == other.color

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS.get(self, "?")


_SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}


class Rank(enum.Enum):
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"
    JOKER = "Joker"  # the "Benny" of the 25-card deck

    @classmethod
    def standard(cls) -> List["Rank"]:
        return [cls.NINE, cls.TEN, cls.JACK, cls.QUEEN, cls.KING, cls.ACE]


# Strength of a plain trump card; bowers and the Joker are handled separately.
_TRUMP_VALUES = {
    Rank.ACE: 70,
    Rank.KING: 60,
    Rank.QUEEN: 50,
    Rank.TEN: 40,
    Rank.NINE: 30,
}
_JOKER_VALUE = 100
_RIGHT_BOWER_VALUE = 90
_LEFT_BOWER_VALUE = 80

_OFF_SUIT_VALUES = {
    Rank.ACE: 60,
    Rank.KING: 50,
    Rank.QUEEN: 40,
    Rank.JACK: 30,
    Rank.TEN: 20,
    Rank.NINE: 10,
}


@dataclass(frozen=True)
class Card:
    """
    Representation of a Euchre card.

    - Regular cards: suit in the four real suits, rank NINE..ACE.
    - Joker: suit=Suit.NONE, rank=JOKER.

    Nothing about a card's trump membership is stored here: every trump
    query takes the current trump suit and recomputes from suit and rank.
    """
    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        if self.rank == Rank.JOKER:
            if self.suit != Suit.NONE:
                raise ValueError("The Joker must not have a suit")
        elif self.suit == Suit.NONE:
            raise ValueError("Non-joker cards must have a suit")

    def __str__(self) -> str:
        if self.is_joker():
            return "Joker"
        return f"{self.rank.value}{self.suit.symbol}"

    def is_joker(self) -> bool:
        return self.rank == Rank.JOKER

    def is_right_bower(self, trump: Suit) -> bool:
        return self.rank == Rank.JACK and self.suit == trump

    def is_left_bower(self, trump: Suit) -> bool:
        if self.rank != Rank.JACK:
            return False
        return self.suit != trump and self.suit.same_color(trump)

    def is_bower(self, trump: Suit) -> bool:
        return self.is_right_bower(trump) or self.is_left_bower(trump)

    def effective_suit(self, trump: Suit) -> Suit:
        """Suit used for following and winning; the left bower counts as trump."""
        if self.is_left_bower(trump):
            return trump
        if self.is_joker() and trump != Suit.NONE:
            return trump
        return self.suit

    def is_trump(self, trump: Suit) -> bool:
        if trump == Suit.NONE:
            return False
        return self.effective_suit(trump) == trump

    def trump_value(self, trump: Suit) -> int:
        """Strength among trump cards only; 0 for anything that is not trump."""
        if not self.is_trump(trump):
            return 0
        if self.is_joker():
            return _JOKER_VALUE
        if self.is_right_bower(trump):
            return _RIGHT_BOWER_VALUE
        if self.is_left_bower(trump):
            return _LEFT_BOWER_VALUE
        return _TRUMP_VALUES.get(self.rank, 0)

    def off_suit_value(self) -> int:
        return _OFF_SUIT_VALUES.get(self.rank, 0)


JOKER = Card(Suit.NONE, Rank.JOKER)


def card_to_dict(card: Card) -> Dict[str, Any]:
    """Convert a Card to a JSON-serializable dict."""
    return {
        "suit": card.suit.name,
        "rank": card.rank.name,
    }


def dict_to_card(data: Dict[str, Any]) -> Card:
    """Convert a dict back into a Card."""
    return Card(suit=Suit[data["suit"]], rank=Rank[data["rank"]])


class Deck:
    """
    An ordered pile of cards; index 0 is the top.

    - standard(): 24 cards, 9 through Ace in each suit
    - with_joker(): the 25-card variant that adds the Joker
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None) -> None:
        self._cards: List[Card] = list(cards) if cards is not None else []

    @classmethod
    def standard(cls) -> "Deck":
        deck = cls(
            Card(suit, rank) for suit in Suit.playable() for rank in Rank.standard()
        )
        if len(deck) != 24:
            raise RuntimeError("Standard deck must contain exactly 24 cards")
        return deck

    @classmethod
    def with_joker(cls) -> "Deck":
        deck = cls.standard()
        deck._cards.append(JOKER)
        return deck

    @property
    def cards(self) -> List[Card]:
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Shuffle the deck in place. Uses provided RNG if given."""
        if rng is None:
            random.shuffle(self._cards)
        else:
            rng.shuffle(self._cards)

    def draw(self) -> Optional[Card]:
        if not self._cards:
            return None
        return self._cards.pop(0)

    def draw_n(self, n: int) -> List[Card]:
        """
        Remove and return up to `n` cards from the top.

        A short deck yields fewer cards rather than raising; callers check the
        length of what comes back.
        """
        if n <= 0:
            return []
        drawn = self._cards[:n]
        del self._cards[:n]
        return drawn


class Hand:
    """The cards held by one seat. Suit queries all take the trump suit."""

    def __init__(self, cards: Optional[Iterable[Card]] = None) -> None:
        self._cards: List[Card] = list(cards) if cards is not None else []

    @property
    def cards(self) -> List[Card]:
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def add(self, card: Card) -> None:
        self._cards.append(card)

    def add_all(self, cards: Iterable[Card]) -> None:
        self._cards.extend(cards)

    def remove(self, card: Card) -> bool:
        """Remove one copy of `card`. Returns False if it is not held."""
        try:
            self._cards.remove(card)
        except ValueError:
            return False
        return True

    def contains(self, card: Card) -> bool:
        return card in self._cards

    def has_suit(self, suit: Suit, trump: Suit) -> bool:
        return any(c.effective_suit(trump) == suit for c in self._cards)

    def cards_of_suit(self, suit: Suit, trump: Suit) -> List[Card]:
        return [c for c in self._cards if c.effective_suit(trump) == suit]

    def trumps(self, trump: Suit) -> List[Card]:
        return [c for c in self._cards if c.is_trump(trump)]

    def count_trumps(self, trump: Suit) -> int:
        return len(self.trumps(trump))

    def highest_trump(self, trump: Suit) -> Optional[Card]:
        trumps = self.trumps(trump)
        if not trumps:
            return None
        return max(trumps, key=lambda c: c.trump_value(trump))

    def sort_by_trump(self, trump: Suit) -> None:
        """Trumps first (strongest first), then by suit and descending rank."""
        suit_order = {suit: i for i, suit in enumerate(Suit)}

        def key(card: Card):
            if card.is_trump(trump):
                return (0, -card.trump_value(trump), 0)
            return (1, suit_order[card.suit], -card.off_suit_value())

        self._cards.sort(key=key)

    def clear(self) -> None:
        self._cards.clear()
