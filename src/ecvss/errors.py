"""Exceptions raised by ecvss.

Every error derives from SecretSharingError, itself a ValueError, so code
that only guards against ValueError keeps working. Share verification
never raises: a bad share is a False result, not an exception.
"""


class SecretSharingError(ValueError):
    """Base class for all secret sharing errors."""


class InvalidThreshold(SecretSharingError):
    """Threshold is below 1 or exceeds the share count."""


class ThresholdMismatch(SecretSharingError):
    """Value and blinding polynomials have different lengths."""


class InsufficientShares(SecretSharingError):
    """Fewer shares supplied than reconstruction requires."""


class DuplicateShareIndex(SecretSharingError):
    """Two or more shares carry the same index."""


class DegenerateShareSet(SecretSharingError):
    """An interpolation denominator is zero."""


class FieldElementOutOfRange(SecretSharingError):
    """A raw value is not in [0, order)."""


class FieldMismatch(SecretSharingError):
    """Operands belong to different prime fields."""


class InvalidShareIndex(SecretSharingError):
    """Share index is not a positive integer (0 is the secret itself)."""


class NotInvertible(SecretSharingError, ZeroDivisionError):
    """Inversion of the zero element."""
