from __future__ import annotations


class CalculagraphError(Exception):
    """Base exception for the project."""


class ConfigError(CalculagraphError):
    """A CALCULAGRAPH_* environment variable holds an unusable value."""


class TransformError(CalculagraphError):
    """Raised while producing a replacement function.

    ``location`` points at the offending source: ``file:line:col`` for
    parsed code, or the qualified name and definition site of a callable.
    """

    def __init__(self, message: str, location: str | None = None):
        self.message = message
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


class TooManyArguments(TransformError):
    """Directive has more than two arguments."""


class InvalidTimeUnit(TransformError):
    """Unit token is not one of s, ms, us, ns."""


class InvalidFormatLiteral(TransformError):
    """Second directive argument is not a literal string."""


class UnsupportedTargetKind(TransformError):
    """Directive attached to something other than a function."""
