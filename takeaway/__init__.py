"""
Takeaway - Token-depletion game engine

A deterministic engine for a two-player Nim variant played against an
optimal AI. The engine provides:
- Immutable game state and a pure reducer
- Optimal-play planning for the AI
- Narration of every state
- In-memory sessions, an HTTP API and a command-line game
"""

__version__ = "0.1.0"
