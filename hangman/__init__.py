"""
Hangman Rooms - Multiplayer word-guessing rooms.

Players join a shared room, a host hides a word, and everyone guesses
letters or the whole word against a shared health budget.
The package provides:
- A deterministic round state machine (guess evaluation, health, win/loss)
- Membership lifecycle per room (join, leave, host, ban)
- A per-room coordinator that serializes all room operations
- A REST/WebSocket API and a small CLI
"""

__version__ = "0.1.0"
