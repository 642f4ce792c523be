"""WebSocket lobby, chat and turn handling for the Uno server."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, NamedTuple

import websockets
from websockets.exceptions import ConnectionClosed

from .antixss import XssFilter
from .game import (
    Game,
    Player,
    RandomSource,
    assign_name,
    card_to_string,
    draw_card,
    generate_starting_cards,
)

log = logging.getLogger(__name__)

PROTOCOL = "uno-protocol"
MAX_MESSAGE_BYTES = 200
PROFILE_COUNT = 8


class _Outgoing(NamedTuple):
    """A text frame to send: to one player id, or to everyone when None."""

    text: str
    recipient: int | None = None


def _text(data: bytes) -> str:
    return data.decode("latin-1")


def _int_field(value: int) -> str:
    """Four little-endian bytes of *value*, cut at the first NUL and NUL-padded."""
    raw = (value & 0xFFFFFFFF).to_bytes(4, "little")
    raw = raw.split(b"\0", 1)[0].ljust(4, b"\0")
    return _text(raw)


class UnoServer:
    """Keeps the connected players and the shared game, and routes messages."""

    def __init__(
        self, xss_filter: XssFilter, rng: RandomSource | None = None
    ) -> None:
        self.xss_filter = xss_filter
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.game = Game(rng=self.rng)
        self.players: dict[int, Player] = {}
        self._next_id = 0
        self._sockets: dict[int, Any] = {}
        self._handlers = {
            "r": self._toggle_ready,
            "m": self._chat,
            "d": self._draw,
            "s": self._join,
            "p": self._play,
        }

    def on_connect(self) -> tuple[Player, list[_Outgoing]]:
        """Register a new connection; return its player and the messages to send."""
        username = assign_name(self.rng)
        profile = self.rng.randrange(PROFILE_COUNT) + 1
        player = Player(id=self._next_id, username=username, profile=profile)
        self._next_id += 1
        self.players[player.id] = player
        log.info("New Connection: [ Id: %d, Username: %s ]", player.id, username)
        return player, [
            _Outgoing(f"M{username} has joined"),
            _Outgoing("i" + _int_field(player.id), player.id),
        ]

    def on_message(self, player: Player, data: str) -> list[_Outgoing]:
        """Handle one frame from *player*; return the messages it causes."""
        handler = self._handlers.get(data[:1])
        if handler is None:
            log.info("message from id %d: unknown", player.id)
            return []
        return handler(player, data)

    def on_close(self, player: Player) -> list[_Outgoing]:
        """Forget a disconnected player and tell the others."""
        self.players.pop(player.id, None)
        log.info("user has disconnected id: %d", player.id)
        if not self.players:
            return []
        return [_Outgoing(f"M{player.username} has left")]

    def _toggle_ready(self, player: Player, data: str) -> list[_Outgoing]:
        game = self.game
        if game.is_active:
            log.info("tried changing ready state but the game already started")
            return []
        if player.is_playing:
            player.is_ready = False
            player.is_playing = False
        if player.is_ready:
            log.info("changed state to unready")
            player.is_ready = False
            game.ready_count -= 1
            return []
        log.info("changed state to ready")
        player.is_ready = True
        game.ready_count += 1
        connected = len(self.players)
        if connected > 1 and game.ready_count == connected:
            return [_Outgoing(_text(game.start()))]
        return []

    def _chat(self, player: Player, data: str) -> list[_Outgoing]:
        if len(data.encode("utf-8")) > MAX_MESSAGE_BYTES:
            log.info("tried sending message but is too long")
            return []
        text = data[1:]
        log.info('send message "%s"', text)
        if not self.xss_filter.is_safe(text):
            return []
        return [_Outgoing(f"m{player.username}{text}")]

    def _draw(self, player: Player, data: str) -> list[_Outgoing]:
        game = self.game
        if not game.is_playable:
            log.info("tried to draw a card but the game has not started")
            return []
        if game.current_player_id != player.id:
            log.info("tried to draw a card but was not his turn")
            return []
        card = draw_card(self.rng)
        player.cards.append(card)
        log.info("draw card: %s", card_to_string(card))
        game.next_player()
        return [
            _Outgoing("u\x01" + chr(card), player.id),
            _Outgoing("d\x01"),
        ]

    def _join(self, player: Player, data: str) -> list[_Outgoing]:
        game = self.game
        if not player.is_ready or game.is_playable:
            log.info("tried joining but game already started")
            return []
        if player.is_playing:
            log.info("tried joining but already joined")
            return []
        player.cards = []
        player.is_playing = True
        generate_starting_cards(player.cards, self.rng)
        hand = "".join(chr(card) for card in player.cards[:7])
        out = [
            _Outgoing(
                "p"
                + hand
                + _int_field(game.players_assigned)
                + _int_field(game.ready_count),
                player.id,
            )
        ]

        game.turn_order.append(player.id)
        game.turn_index = len(game.turn_order) - 1
        game.players_assigned += 1

        out.append(
            _Outgoing(
                "c"
                + _int_field(player.id)
                + player.username.ljust(16, "\0")[:16]
                + chr(player.profile)
            )
        )
        log.info(
            "joined the game with cards: %s",
            " ".join(card_to_string(card) for card in player.cards),
        )

        if game.players_assigned == game.ready_count:
            log.info("------- all players joined; game started")
            game.turn_index = 0
            game.is_playable = True
            out.append(_Outgoing("P"))
        return out

    def _play(self, player: Player, data: str) -> list[_Outgoing]:
        game = self.game
        if not game.is_playable:
            log.info("tried to play a move but the game has not started")
            return []
        if len(data) < 2:
            log.info("tried to play a move but sent invalid packet size")
            return []
        if game.current_player_id != player.id:
            log.info("tried to play a move but was not his turn")
            return []
        position = game.check_move(ord(data[1]) + 1, player)
        if position is None:
            log.info("tried to play a move but was invalid")
            return []
        message, won = game.play_move(position, player)
        if won:
            log.info("played last card; won the game")
        else:
            log.info("played card %s", card_to_string(game.table_card))
            game.next_player()
        return [_Outgoing(_text(message))]

    async def _dispatch(self, messages: list[_Outgoing]) -> None:
        for message in messages:
            if message.recipient is None:
                targets = list(self._sockets.values())
            else:
                socket = self._sockets.get(message.recipient)
                targets = [] if socket is None else [socket]
            for socket in targets:
                try:
                    await socket.send(message.text)
                except ConnectionClosed:
                    pass

    async def handler(self, websocket: Any) -> None:
        """Serve one WebSocket connection until it closes."""
        player, out = self.on_connect()
        self._sockets[player.id] = websocket
        try:
            await self._dispatch(out)
            async for frame in websocket:
                if isinstance(frame, bytes):
                    frame = frame.decode("latin-1")
                await self._dispatch(self.on_message(player, frame))
        except ConnectionClosed:
            pass
        finally:
            self._sockets.pop(player.id, None)
            await self._dispatch(self.on_close(player))

    async def serve(self, host: str | None = None, port: int = 8080) -> None:
        """Listen on *host*:*port* forever."""
        async with websockets.serve(
            self.handler, host, port, subprotocols=[PROTOCOL]
        ):
            log.info("Websocket context created. Entering main loop.")
            await asyncio.Future()