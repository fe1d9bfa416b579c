"""Exceptions raised by alkon operations.

Core code raises these at the point a precondition is found unmet; the CLI
reports them once through ``fail`` and exits 1. Benign outcomes (nothing
selected, already cloned, config already present) are not errors and never
raise.
"""
from __future__ import annotations
from typing import Sequence


class AlkonError(Exception):
    """Base class for failures that end the current operation."""

    def __init__(self, message: str, hints: Sequence[str] = ()):
        super().__init__(message)
        self.hints = tuple(hints)


class MissingDependency(AlkonError):
    """A required external tool is not installed."""


class Unauthenticated(AlkonError):
    """The GitHub CLI is installed but has no authenticated session."""


class ConfigMissing(AlkonError):
    """The config file does not exist."""


class ConfigIncomplete(AlkonError):
    """The config file exists but a required field is empty."""


class ConfigInvalid(AlkonError):
    """The config file could not be parsed."""


class InputRequired(AlkonError):
    """A value requested interactively was left empty."""


class MalformedSelection(AlkonError):
    """The line returned by the fuzzy selector lacks an expected field."""


class FetchFailed(AlkonError):
    """Listing repositories through the GitHub CLI failed."""


class CloneFailed(AlkonError):
    """``git clone`` exited with a non-zero status."""
