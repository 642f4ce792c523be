"""Cards, players and turn order of a game of Uno."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Protocol

log = logging.getLogger(__name__)

NORMAL_CARD_COUNT = 40
STARTING_HAND = 7
NAME_LENGTH = 15

_NAMES = (
    "wiktorek",
    "dziabko",
    "gej",
    "c++ fan",
    "bohenek",
    "malpa",
    "komuch",
    "smerma",
    "turas",
    "bozydar",
)
_COLOURS = "rgby"


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def assign_name(rng: RandomSource) -> str:
    """Pick a random nickname padded with ' #' and digits to 15 characters."""
    base = _NAMES[rng.randrange(len(_NAMES))] + " #"
    digits = "".join(str(rng.randrange(10)) for _ in range(NAME_LENGTH - len(base)))
    return base + digits


def draw_card(rng: RandomSource) -> int:
    """Return a random card number in the range 1..40."""
    card = rng.randrange(2 * NORMAL_CARD_COUNT) + 1
    if card > NORMAL_CARD_COUNT:
        card -= NORMAL_CARD_COUNT
    return card


def generate_starting_cards(cards: list[int], rng: RandomSource) -> list[int]:
    """Draw into *cards* until it holds seven cards; return the same list."""
    while len(cards) < STARTING_HAND:
        cards.append(draw_card(rng))
    return cards


def card_to_string(card: int) -> str:
    """Return a short name such as 'r0' or 'y9' for a card number."""
    if not 1 <= card <= NORMAL_CARD_COUNT:
        return "whatthehell"
    colour = _COLOURS[(card - 1) % 4]
    return f"{colour}{(card - 1) // 4}"


@dataclass
class Player:
    """One connected user and the hand they hold."""

    id: int
    username: str
    profile: int = 1
    cards: list[int] = field(default_factory=list)
    is_playing: bool = False
    is_ready: bool = False


@dataclass
class Game:
    """Shared game state: table card, readiness counters and turn order."""

    rng: RandomSource = field(default_factory=random.Random)
    is_active: bool = False
    is_playable: bool = False
    is_flipped: bool = False
    table_card: int = 0
    players_assigned: int = 0
    ready_count: int = 0
    turn_order: list[int] = field(default_factory=list)
    turn_index: int | None = None

    @property
    def current_player_id(self) -> int | None:
        """Id of the player whose turn it is, or None without a turn order."""
        if self.turn_index is None or not self.turn_order:
            return None
        return self.turn_order[self.turn_index]

    def start(self) -> bytes:
        """Begin a game, lay the first table card and return the 's' message."""
        self.is_active = True
        self.players_assigned = 0
        self.table_card = draw_card(self.rng)
        log.info("------- starting game")
        return b"s" + bytes([self.table_card])

    def check_move(self, card: int, player: Player) -> int | None:
        """Return the hand position of *card* if it may be played, else None."""
        try:
            position = player.cards.index(card)
        except ValueError:
            return None
        table = self.table_card
        if table > NORMAL_CARD_COUNT or card > NORMAL_CARD_COUNT:
            return None
        same_colour = table % 4 == card % 4
        same_number = (table - 1) // 4 == (card - 1) // 4
        return position if same_colour or same_number else None

    def play_move(self, position: int, player: Player) -> tuple[bytes, bool]:
        """Put the card at *position* on the table.

        Returns the message to broadcast and whether the player has won;
        a win ends the game.
        """
        card = player.cards[position]
        if card > NORMAL_CARD_COUNT:
            log.info("special card played")
        self.table_card = card
        last = player.cards.pop()
        if position < len(player.cards):
            player.cards[position] = last
        if not player.cards:
            self.destroy()
            return b"W" + bytes([card]), True
        return b"w" + bytes([card]), False

    def destroy(self) -> None:
        """Forget the turn order and return to the lobby state."""
        self.turn_order.clear()
        self.turn_index = None
        self.is_playable = False
        self.is_active = False
        self.ready_count = 0
        self.players_assigned = 0

    def next_player(self) -> None:
        """Move the turn on, backwards when the direction is flipped."""
        if self.turn_index is None or not self.turn_order:
            raise RuntimeError("no turn order has been set up")
        step = -1 if self.is_flipped else 1
        self.turn_index = (self.turn_index + step) % len(self.turn_order)