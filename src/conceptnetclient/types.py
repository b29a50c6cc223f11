"""Type definitions for the ConceptNet client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from .config import (
    DEFAULT_ASSOCIATION_LIMIT,
    DEFAULT_LANGUAGE,
    DEFAULT_LOOKUP_LIMIT,
    DEFAULT_OFFSET,
)
from .errors import ConceptNetError

Callback = Callable[[ConceptNetError | None, Any], Any]
"""Completion handler, called once with ``(error, data)``."""

O = TypeVar("O")


class Operation(str, Enum):
    """Public operations of the client."""

    LOOKUP = "lookup"
    RESOLVE_TEXT_TO_URI = "resolve_text_to_uri"
    SEARCH = "search"
    ASSOCIATE = "associate"
    RELATEDNESS = "relatedness"


# === Request Options ===

@dataclass(frozen=True, slots=True)
class LookupOptions:
    """Options for looking up a concept by URI."""

    limit: int = DEFAULT_LOOKUP_LIMIT
    offset: int = DEFAULT_OFFSET
    filter: str | None = None


@dataclass(frozen=True, slots=True)
class UriOptions:
    """Options for resolving free text to a concept URI."""

    language: str = DEFAULT_LANGUAGE


@dataclass(frozen=True, slots=True)
class AssociationOptions:
    """Options for association and relatedness queries."""

    limit: int = DEFAULT_ASSOCIATION_LIMIT
    filter: str | None = None


# === Resolved Calls ===

@dataclass(frozen=True, slots=True)
class ResolvedCall(Generic[O]):
    """Canonical form of a validated call, ready for path building.

    ``primary`` is the URI, text or input path; for search it is the
    parameter mapping, which also becomes ``options``.
    """

    operation: Operation
    primary: Any
    options: O
    callback: Callback | None = None
