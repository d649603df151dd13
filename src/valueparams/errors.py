"""Error hierarchy for valueparams.

Every failure raised by a parameter derives from ParameterError and from the
closest builtin exception, so callers can catch either:

- FormatError: malformed text input (ValueError)
- RangeError: numeric value outside its domain (ValueError)
- TypeMismatchError: incompatible assignment between parameters (TypeError)
- DatabaseConnectionError: engine missing, empty connection string or
  backend failure (ConnectionError)

A failed assignment never mutates the target parameter.
"""


class ParameterError(Exception):
    """Base class for all parameter errors."""


class FormatError(ParameterError, ValueError):
    """Raised when text does not match the grammar of a parameter."""


class RangeError(ParameterError, ValueError):
    """Raised when a numeric component is outside its valid domain."""


class TypeMismatchError(ParameterError, TypeError):
    """Raised when assigning from a parameter of another type or name."""


class DatabaseConnectionError(ParameterError, ConnectionError):
    """Raised when a database connector cannot establish a connection."""
