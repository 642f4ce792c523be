"""A WebSocket server for multiplayer Uno games: cards, turns, lobby and chat filtering."""

__version__ = "0.1.0"