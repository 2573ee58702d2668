"""
Error taxonomy for the music core and the lowering pipeline.

Each error also derives from the builtin it refines, so callers that
only know about ValueError / AssertionError / NotImplementedError still
catch them.
"""


class SclangError(Exception):
    """Base class for all chuk-mcp-sclang errors."""


class ParseError(SclangError, ValueError):
    """A note, chord, or numeral token could not be parsed."""


class RangeError(SclangError, ValueError):
    """A pitch (or index) fell outside its valid range."""


class InvariantViolation(SclangError, AssertionError):
    """Caller-constructed data broke a precondition (e.g. notes vs durations)."""


class UnimplementedLowering(SclangError, NotImplementedError):
    """The clip kind has no finished SuperCollider lowering yet."""
