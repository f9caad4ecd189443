"""Exceptions for wavemap.

Validation errors surface immediately at the offending call. Contradictions
are raised and caught inside the Wave; callers only ever see a boolean.
"""

from __future__ import annotations


class WaveMapError(Exception):
    """Base exception for wavemap errors."""

    pass


class InvalidArgumentError(WaveMapError, ValueError):
    """An argument broke a construction rule (dimensions, distribution, color)."""

    pass


class OutOfRangeError(WaveMapError, IndexError):
    """Grid coordinates outside [0, width) x [0, height)."""

    def __init__(self, message: str, x: int | None = None, y: int | None = None):
        super().__init__(message)
        self.x = x
        self.y = y


class ContradictionError(WaveMapError):
    """A tile's domain became empty.

    Internal to the Wave; recovered by backtracking.
    """

    def __init__(self, message: str, x: int | None = None, y: int | None = None):
        super().__init__(message)
        self.x = x
        self.y = y


class UnknownTerrainError(WaveMapError, LookupError):
    """A value that is not a Terrain reached a rule or color lookup.

    This is a programming defect, not bad user input.
    """

    pass


class GenerationFailedError(WaveMapError):
    """Generation exhausted its backtrack stack without a full collapse."""

    def __init__(self, message: str, seed: int | None = None):
        super().__init__(message)
        self.seed = seed
