# euchre_engine/round.py
from __future__ import annotations

import enum
import logging
import random
from typing import List, Optional

from .actions import Action, CallTrump, Discard, OrderUp, Pass, PlayCard
from .cards import Card, Deck, Hand, Suit
from .config import GameConfig
from .errors import (
    CardNotInHand,
    EngineError,
    IllegalBid,
    InvariantViolation,
    NotYourTurn,
    WrongPhase,
)
from .rules import (
    HAND_SIZE,
    NUM_SEATS,
    TRICKS_PER_ROUND,
    next_seat,
    partner_of,
    score_round,
    team_of,
)
from .state import RoundResult, TrickResult
from .trick import Trick, legal_plays, validate_play

logger = logging.getLogger(__name__)

# Traditional 3-then-2 deal, starting left of the dealer.
_DEAL_PATTERN = (3, 2)


class Phase(enum.Enum):
    DEAL = "deal"
    BID_ROUND_1 = "bid_round_1"  # order up or pass
    BID_ROUND_2 = "bid_round_2"  # name another suit or pass
    DISCARD = "discard"  # dealer discards after an order up
    PLAY = "play"
    ROUND_END = "round_end"
    GAME_END = "game_end"  # reported by Game only

    @property
    def is_bidding(self) -> bool:
        return self in (Phase.BID_ROUND_1, Phase.BID_ROUND_2)


class Round:
    """
    One deal of Euchre, from the deal to scoring.

    All state changes go through `apply_action`. Each action is fully checked
    before anything is mutated, so a rejected action leaves the round exactly
    as it was.
    """

    def __init__(self, dealer: int, config: Optional[GameConfig] = None) -> None:
        if not 0 <= dealer < NUM_SEATS:
            raise ValueError(f"dealer must be a seat in 0..{NUM_SEATS - 1}")

        self.config = config if config is not None else GameConfig()
        self._dealer = dealer
        self._phase = Phase.DEAL

        self._trump = Suit.NONE
        self._turned_card: Optional[Card] = None
        self._kitty: List[Card] = []
        self._maker: Optional[int] = None
        self._alone = False

        self._bid_round = 0
        self._current_bidder: Optional[int] = None

        self._hands: List[Hand] = [Hand() for _ in range(NUM_SEATS)]
        self._current_trick: Optional[Trick] = None
        self._tricks_won: List[int] = [0] * NUM_SEATS
        self._trick_history: List[TrickResult] = []

    # -------------------------------------------------------------------------
    # Read API
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def dealer(self) -> int:
        return self._dealer

    @property
    def trump(self) -> Suit:
        return self._trump

    @property
    def turned_card(self) -> Optional[Card]:
        return self._turned_card

    @property
    def kitty(self) -> List[Card]:
        """Cards left undealt under the turned card."""
        return list(self._kitty)

    @property
    def maker(self) -> Optional[int]:
        return self._maker

    @property
    def maker_team(self) -> Optional[int]:
        if self._maker is None:
            return None
        return team_of(self._maker)

    @property
    def alone(self) -> bool:
        return self._alone

    @property
    def sitting_out(self) -> Optional[int]:
        if not self._alone or self._maker is None:
            return None
        return partner_of(self._maker)

    @property
    def bid_round(self) -> int:
        return self._bid_round

    @property
    def current_trick(self) -> Optional[Trick]:
        return self._current_trick

    @property
    def trick_history(self) -> List[TrickResult]:
        return list(self._trick_history)

    @property
    def active_seats(self) -> int:
        return NUM_SEATS - 1 if self._alone else NUM_SEATS

    @property
    def is_complete(self) -> bool:
        return self._phase in (Phase.ROUND_END, Phase.GAME_END)

    def hand(self, seat: int) -> List[Card]:
        return self._hands[seat].cards

    def hands(self) -> List[List[Card]]:
        return [h.cards for h in self._hands]

    def tricks_won(self, seat: int) -> int:
        return self._tricks_won[seat]

    def team_tricks_won(self, team: int) -> int:
        return sum(
            won for seat, won in enumerate(self._tricks_won) if team_of(seat) == team
        )

    def is_sitting_out(self, seat: int) -> bool:
        return seat == self.sitting_out

    def current_player(self) -> Optional[int]:
        """
        Seat expected to act next, or None when nobody is.

        Derived from the bidding/trick state on every call rather than stored.
        """
        if self._phase.is_bidding:
            return self._current_bidder
        if self._phase == Phase.DISCARD:
            return self._dealer
        if self._phase == Phase.PLAY:
            trick = self._current_trick
            if trick is None or len(trick) == 0:
                if not self._trick_history:
                    return self._first_leader()
                return self._trick_history[-1].winner
            return self._next_to_play(trick)
        return None

    def _first_leader(self) -> int:
        return self._first_active_from(next_seat(self._dealer))

    def _first_active_from(self, seat: int, skip: frozenset = frozenset()) -> int:
        for _ in range(NUM_SEATS):
            if seat not in skip and not self.is_sitting_out(seat):
                return seat
            seat = next_seat(seat)
        raise InvariantViolation("No seat is left to act")

    def _next_to_play(self, trick: Trick) -> int:
        leader = trick.leader
        if leader is None:
            return self._first_leader()
        return self._first_active_from(leader, frozenset(trick.seats_played))

    def legal_plays(self, seat: int) -> List[Card]:
        if self._phase != Phase.PLAY or self._current_trick is None:
            return []
        return legal_plays(self._hands[seat], self._current_trick)

    def legal_actions(self) -> List[Action]:
        """Every action the current player may take right now."""
        seat = self.current_player()
        if seat is None:
            return []

        actions: List[Action] = []
        alone_options = [False, True] if self.config.allow_going_alone else [False]

        if self._phase == Phase.BID_ROUND_1:
            actions.append(Pass(seat))
            if not self._turned_card_is_joker():
                actions.extend(OrderUp(seat, alone=a) for a in alone_options)

        elif self._phase == Phase.BID_ROUND_2:
            if not self._dealer_is_stuck(seat):
                actions.append(Pass(seat))
            for suit in Suit.playable():
                if suit == self._turned_suit():
                    continue
                actions.extend(
                    CallTrump(seat, suit, alone=a) for a in alone_options
                )

        elif self._phase == Phase.DISCARD:
            actions.extend(Discard(seat, card) for card in self._hands[seat].cards)

        elif self._phase == Phase.PLAY:
            actions.extend(PlayCard(seat, card) for card in self.legal_plays(seat))

        return actions

    def result(self) -> RoundResult:
        if not self.is_complete:
            raise WrongPhase("Round is not complete")
        maker_team = self.maker_team
        maker_tricks = (
            self.team_tricks_won(maker_team) if maker_team is not None else 0
        )
        return score_round(
            self._maker,
            maker_tricks,
            self._alone,
            dealer=self._dealer,
            trump=self._trump,
        )

    # -------------------------------------------------------------------------
    # Deal
    # -------------------------------------------------------------------------

    def deal(
        self,
        deck: Deck,
        rng: Optional[random.Random] = None,
        shuffle: bool = True,
    ) -> None:
        """Shuffle (optionally), deal 3+2 to each seat and turn up one card."""
        if self._phase != Phase.DEAL:
            raise WrongPhase("Cards have already been dealt")

        needed = NUM_SEATS * HAND_SIZE + 1
        if len(deck) < needed:
            raise ValueError("Not enough cards in deck to deal")

        if shuffle:
            deck.shuffle(rng)

        for count in _DEAL_PATTERN:
            seat = next_seat(self._dealer)
            for _ in range(NUM_SEATS):
                cards = deck.draw_n(count)
                if len(cards) != count:
                    raise InvariantViolation("Deck ran short while dealing")
                self._hands[seat].add_all(cards)
                seat = next_seat(seat)

        self._turned_card = deck.draw()
        self._kitty = deck.cards

        self._phase = Phase.BID_ROUND_1
        self._bid_round = 1
        self._current_bidder = next_seat(self._dealer)
        logger.debug(
            "Dealt round with dealer %d, turned up %s", self._dealer, self._turned_card
        )

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def apply_action(self, action: Action) -> None:
        if isinstance(action, Pass):
            self._handle_pass(action)
        elif isinstance(action, OrderUp):
            self._handle_order_up(action)
        elif isinstance(action, CallTrump):
            self._handle_call_trump(action)
        elif isinstance(action, Discard):
            self._handle_discard(action)
        elif isinstance(action, PlayCard):
            self._handle_play_card(action)
        else:
            raise EngineError(f"Unknown action: {action!r}")
        logger.debug("Applied %s", action)

    def _require_turn(self, seat: int) -> None:
        current = self.current_player()
        if seat != current:
            raise NotYourTurn(f"Seat {seat} acted but it is seat {current}'s turn")

    def _handle_pass(self, action: Pass) -> None:
        if not self._phase.is_bidding:
            raise WrongPhase(f"Cannot pass during {self._phase.value}")
        self._require_turn(action.seat)
        if self._phase == Phase.BID_ROUND_2 and self._dealer_is_stuck(action.seat):
            raise IllegalBid("Dealer must name trump (stick the dealer)")

        self._current_bidder = next_seat(action.seat)
        if self._current_bidder != next_seat(self._dealer):
            return

        # Bidding went all the way around.
        if self._phase == Phase.BID_ROUND_1:
            self._phase = Phase.BID_ROUND_2
            self._bid_round = 2
        else:
            self._phase = Phase.ROUND_END
            logger.info("Misdeal: all seats passed twice (dealer %d)", self._dealer)

    def _handle_order_up(self, action: OrderUp) -> None:
        if self._phase != Phase.BID_ROUND_1:
            raise WrongPhase("Can only order up in bid round 1")
        self._require_turn(action.seat)
        if self._turned_card is None or self._turned_card_is_joker():
            raise IllegalBid("The turned card cannot be ordered up")
        self._check_alone_allowed(action.alone)
        self._check_hand_sizes()

        self._make_trump(action.seat, self._turned_card.suit, action.alone)
        # Dealer picks up the turned card and holds six until discarding.
        self._hands[self._dealer].add(self._turned_card)
        self._phase = Phase.DISCARD

    def _handle_call_trump(self, action: CallTrump) -> None:
        if self._phase != Phase.BID_ROUND_2:
            raise WrongPhase("Can only call trump in bid round 2")
        self._require_turn(action.seat)
        if action.suit == Suit.NONE:
            raise IllegalBid("Must name a suit")
        if action.suit == self._turned_suit():
            raise IllegalBid(
                f"Cannot call {action.suit.name.title()}; it was turned down"
            )
        self._check_alone_allowed(action.alone)
        self._check_hand_sizes()

        self._make_trump(action.seat, action.suit, action.alone)
        self._start_play()

    def _handle_discard(self, action: Discard) -> None:
        if self._phase != Phase.DISCARD:
            raise WrongPhase("Not in discard phase")
        self._require_turn(action.seat)
        dealer_hand = self._hands[self._dealer]
        if not dealer_hand.contains(action.card):
            raise CardNotInHand(f"{action.card} is not in the dealer's hand")
        self._check_hand_sizes(dealer_size=HAND_SIZE + 1)

        if not dealer_hand.remove(action.card):
            raise InvariantViolation("Failed to remove discarded card")
        self._check_hand_sizes()
        self._start_play()

    def _handle_play_card(self, action: PlayCard) -> None:
        if self._phase != Phase.PLAY or self._current_trick is None:
            raise WrongPhase("Not in play phase")
        self._require_turn(action.seat)

        hand = self._hands[action.seat]
        if len(hand) > HAND_SIZE:
            raise InvariantViolation(
                f"Seat {action.seat} holds {len(hand)} cards during play"
            )
        validate_play(hand, action.card, self._current_trick)

        if not hand.remove(action.card):
            raise InvariantViolation("Validated card could not be removed")
        self._current_trick.play(action.seat, action.card)

        if self._current_trick.is_complete(self.active_seats):
            self._complete_trick()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _turned_suit(self) -> Suit:
        if self._turned_card is None:
            return Suit.NONE
        return self._turned_card.suit

    def _turned_card_is_joker(self) -> bool:
        return self._turned_card is not None and self._turned_card.is_joker()

    def _dealer_is_stuck(self, seat: int) -> bool:
        return self.config.stick_the_dealer and seat == self._dealer

    def _check_alone_allowed(self, alone: bool) -> None:
        if alone and not self.config.allow_going_alone:
            raise IllegalBid("Going alone is not allowed at this table")

    def _check_hand_sizes(self, dealer_size: int = HAND_SIZE) -> None:
        for seat, hand in enumerate(self._hands):
            expected = dealer_size if seat == self._dealer else HAND_SIZE
            if len(hand) != expected:
                raise InvariantViolation(
                    f"Seat {seat} holds {len(hand)} cards, expected {expected}"
                )

    def _make_trump(self, seat: int, suit: Suit, alone: bool) -> None:
        self._trump = suit
        self._maker = seat
        self._alone = alone
        logger.debug(
            "Seat %d made %s trump%s", seat, suit.name.title(), " alone" if alone else ""
        )

    def _start_play(self) -> None:
        self._phase = Phase.PLAY
        self._current_trick = Trick(self._trump)

    def _complete_trick(self) -> None:
        if self._current_trick is None:
            raise InvariantViolation("Completed a trick that was never started")
        result = self._current_trick.result()
        self._tricks_won[result.winner] += 1
        self._trick_history.append(result)
        logger.debug(
            "Trick %d won by seat %d with %s",
            len(self._trick_history),
            result.winner,
            result.winning_card,
        )

        if len(self._trick_history) >= TRICKS_PER_ROUND:
            self._phase = Phase.ROUND_END
            return

        self._current_trick = Trick(self._trump)
