"""
Lolos - Rule engine for the Lolos arithmetic card game

Players race to empty a hand of number, fraction, operation and joker
cards by matching dice-derived targets. The package provides:
- Deck construction and dealing
- Dice-target enumeration and equation checks
- The turn state machine with operation and fraction attacks
- Per-player redacted views
- An in-memory session layer and a FastAPI adapter
"""

__version__ = "0.1.0"
