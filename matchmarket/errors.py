"""Exceptions raised when a market fails validation."""

__all__ = [
    "MatchingError", "ConfigurationError", "DimensionMismatchError",
    "OwnershipIntegrityError"
]


class MatchingError(ValueError):
  """Base class of all input errors raised by matchmarket."""


class ConfigurationError(MatchingError):
  """Preferences, capacities or priorities violate a precondition."""


class DimensionMismatchError(MatchingError):
  """An auxiliary structure does not have the size of the market."""


class OwnershipIntegrityError(MatchingError):
  """An object has several owners, or an agent owns several objects."""
