"""
Exceptions raised by the synthesis routines.

Both kinds are deterministic functions of the caller's input: they are
raised before any gate is emitted and retrying never helps.
"""


class SynthesisError(ValueError):
    """Base class for synthesis failures."""


class PreconditionViolation(SynthesisError):
    """Register/bit-string mismatch, empty or repeated bit strings, bad counts."""


class NumericDomainError(SynthesisError):
    """Angle requested for degenerate weights (negative, non-finite, all zero)."""
