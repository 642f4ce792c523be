# unoserver

A WebSocket server that hosts multiplayer games of Uno for browser clients.

Players connect, are given a random nickname and avatar number, chat with
each other and mark themselves ready. Once at least two players are
connected and all of them are ready, the server lays a table card; each
ready player then joins and is dealt seven cards. Turns go round in the
order players joined: on their turn a player either plays a card that
matches the table card by colour or by value, or draws one card, which
passes the turn. The first player to empty their hand wins, and the server
returns to the lobby.

## Installing

```
pip install .
```

## Running

```
unoserver
```

This listens on port 8080 on all interfaces. Give another port as the only
argument:

```
unoserver 9000
```

More than one argument prints `Invalid argument amount` and exits with a
failure status. The port argument is read digit by digit without checking.

Chat messages that contain problematic HTML tags are dropped. The list of
tags is read at start-up from `html_tags.txt` in the working directory, one
tag per line; the server does not start if that file cannot be read. A
message is only checked against the list when it contains `<`.

## Protocol

Clients send short text frames whose first character is the command:

| Frame     | Meaning                                              |
|-----------|------------------------------------------------------|
| `r`       | toggle ready / unready in the lobby                  |
| `m<text>` | send a chat message (whole frame at most 200 bytes)  |
| `s`       | join the game that is starting                       |
| `p<c>`    | play the card whose number is the code of `c` + 1    |
| `d`       | draw a card and pass the turn                        |

Cards are numbered 1 to 40: the colour is red, green, blue or yellow by
`(n - 1) % 4`, the value 0 to 9 by `(n - 1) // 4`.

The server broadcasts joins and departures (`M`), chat (`m` followed by the
sender's name and the text), the starting table card (`s`), joined players
(`c`), the start of play (`P`), played cards (`w`), a winning card (`W`) and
draws (`d`); it sends each player their id (`i`), their opening hand (`p`)
and drawn cards (`u`). Numbers travel as raw character codes.

## Using it from Python

```python
import asyncio

from unoserver.antixss import XssFilter, load_tags
from unoserver.session import UnoServer

server = UnoServer(XssFilter(load_tags("html_tags.txt")), None)
asyncio.run(server.serve("0.0.0.0", 8080))
```

`UnoServer.on_connect`, `on_message` and `on_close` work without a network:
they update the players and the shared `Game` and return the messages to
send. `unoserver.game` holds the card helpers (`draw_card`,
`card_to_string`, `assign_name`, `generate_starting_cards`) and the
`Player` and `Game` classes; `unoserver.antixss` holds `load_tags` and
`XssFilter`.

## What it does not do

- Only the 40 numbered cards exist: there are no action or wild cards, and
  nothing reverses the direction of play.
- There is one game at a time for everyone connected; there are no rooms.
- Nothing is stored: players, hands and games live in memory only.
- No client is included; the server expects a browser client that speaks
  the protocol above.

## Tests

```
pip install .[test]
pytest
```