"""Exception types raised by the puzzle engine."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every error the engine raises."""


class BoardError(PuzzleError, ValueError):
    """A board violates the tile/position contract.

    Raised for a wrong tile count, a missing or duplicated blank, and
    duplicate or out-of-range positions.  This always points at a bug in
    whatever built the board, never at a player action.
    """


class ShuffleError(PuzzleError):
    """The permutation shuffle ran out of attempts."""
