"""Classification of concept URIs and term-list paths.

Both grammars are checked with search semantics: a string passes when a
valid URI or path appears anywhere inside it, so prefixed or suffixed
strings (full URLs, paths with trailing query strings) are accepted.

Concept URI::

    concept_uri    = "/" relation "/" language "/" token
    relation       = "a" | "c" | "d" | "e" | "l" | "r" | "s" | "and" | "or"
    language       = 2 * ASCII letter
    token          = 1* ( ASCII letter | digit | "_" )

Term-list path::

    term_list_path = "/list/" language "/" weighted_term *( "," weighted_term )
    weighted_term  = token [ "@" signed_float ]
    signed_float   = [ "+" | "-" ] *digit [ "." ] 1*digit
"""

from __future__ import annotations

import re
from typing import Any

RELATIONS: tuple[str, ...] = ("a", "c", "d", "e", "l", "r", "s", "and", "or")

_LANGUAGE = r"[a-zA-Z]{2}"
_TOKEN = r"\w+"
_RELATION = r"(?:[acdelrs]|and|or)"
_SIGNED_FLOAT = r"[-+]?[0-9]*\.?[0-9]+"
_WEIGHTED_TERM = rf"{_TOKEN}(?:@{_SIGNED_FLOAT})?"

CONCEPT_URI_PATTERN = re.compile(rf"/{_RELATION}/{_LANGUAGE}/{_TOKEN}", re.ASCII)
TERM_LIST_PATTERN = re.compile(
    rf"/list/{_LANGUAGE}/{_WEIGHTED_TERM}(?:,{_WEIGHTED_TERM})*", re.ASCII
)


def is_concept_uri(value: Any) -> bool:
    """Return True if ``value`` contains a concept URI such as ``/c/en/toast``."""
    if not isinstance(value, str):
        return False
    return CONCEPT_URI_PATTERN.search(value) is not None


def is_term_list_path(value: Any) -> bool:
    """Return True if ``value`` contains a path such as ``/list/en/toast@0.5,cereal``."""
    if not isinstance(value, str):
        return False
    return TERM_LIST_PATTERN.search(value) is not None
