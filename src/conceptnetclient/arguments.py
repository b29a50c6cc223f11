"""Argument resolution for the public client operations.

Every resolver turns loosely-typed caller input into a ``ResolvedCall`` with
all options defaulted, or raises ``ArgumentError``/``ValidationError``. Nothing
here touches the network, so an invalid call never produces a request.

Option defaults use or-default semantics: an explicit falsy value such as
``0`` or ``""`` is replaced by the key's default, just like a missing key.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from .config import (
    DEFAULT_ASSOCIATION_LIMIT,
    DEFAULT_LANGUAGE,
    DEFAULT_LOOKUP_LIMIT,
    DEFAULT_OFFSET,
    FilterPolicy,
)
from .errors import ArgumentError, ValidationError
from .grammar import is_concept_uri, is_term_list_path
from .types import (
    AssociationOptions,
    Callback,
    LookupOptions,
    Operation,
    ResolvedCall,
    UriOptions,
)


class _Missing:
    """Marker for an argument the caller did not supply."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def _require_primary(value: Any, expected: type) -> None:
    if value is MISSING:
        raise ArgumentError("insufficient arguments")
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ArgumentError("invalid type: primary input")


def _split_callback(options: Any, callback: Any) -> tuple[Any, Any]:
    """Support the two-argument ``(primary, callback)`` call form."""
    if callback is None and callable(options) and not isinstance(options, Mapping):
        return None, options
    return options, callback


def _as_mapping(options: Any, struct: type) -> Mapping[str, Any]:
    if options is None:
        return {}
    if isinstance(options, struct):
        return {f.name: getattr(options, f.name) for f in fields(options)}
    if isinstance(options, Mapping):
        return options
    raise ArgumentError("invalid type: options")


def _check_callback(callback: Any) -> Callback | None:
    if callback is not None and not callable(callback):
        raise ArgumentError("invalid type: completion handler")
    return callback


def _int_option(options: Mapping[str, Any], key: str, default: int, *, minimum: int) -> int:
    value = options.get(key) or default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArgumentError(f"invalid type: {key}")
    if value < minimum:
        qualifier = "positive" if minimum > 0 else "non-negative"
        raise ValidationError(f"{key} must be a {qualifier} integer")
    return value


def _str_option(options: Mapping[str, Any], key: str, default: str | None) -> str | None:
    value = options.get(key) or default
    if value is not None and not isinstance(value, str):
        raise ArgumentError(f"invalid type: {key}")
    return value


def resolve_lookup(
    uri: Any = MISSING,
    options: Any = None,
    callback: Any = None,
) -> ResolvedCall[LookupOptions]:
    """Resolve ``lookup(uri, [options], [callback])``."""
    _require_primary(uri, str)
    options, callback = _split_callback(options, callback)
    raw = _as_mapping(options, LookupOptions)
    callback = _check_callback(callback)

    return ResolvedCall(
        operation=Operation.LOOKUP,
        primary=uri,
        options=LookupOptions(
            limit=_int_option(raw, "limit", DEFAULT_LOOKUP_LIMIT, minimum=1),
            offset=_int_option(raw, "offset", DEFAULT_OFFSET, minimum=0),
            filter=_str_option(raw, "filter", None),
        ),
        callback=callback,
    )


def resolve_text_to_uri(
    text: Any = MISSING,
    options: Any = None,
    callback: Any = None,
) -> ResolvedCall[UriOptions]:
    """Resolve ``resolve_text_to_uri(text, [language | options], [callback])``."""
    _require_primary(text, str)
    options, callback = _split_callback(options, callback)
    if isinstance(options, str):
        options = {"language": options}
    raw = _as_mapping(options, UriOptions)
    callback = _check_callback(callback)

    return ResolvedCall(
        operation=Operation.RESOLVE_TEXT_TO_URI,
        primary=text,
        options=UriOptions(language=_str_option(raw, "language", DEFAULT_LANGUAGE)),
        callback=callback,
    )


def resolve_search(params: Any = MISSING, callback: Any = None) -> ResolvedCall[dict[str, Any]]:
    """Resolve ``search(params, [callback])``; every key becomes a query parameter."""
    _require_primary(params, Mapping)
    callback = _check_callback(callback)
    query = dict(params)
    return ResolvedCall(
        operation=Operation.SEARCH,
        primary=query,
        options=query,
        callback=callback,
    )


def resolve_association(
    input_path: Any = MISSING,
    options: Any = None,
    callback: Any = None,
    *,
    operation: Operation = Operation.ASSOCIATE,
    filter_policy: FilterPolicy = FilterPolicy.STRICT,
) -> ResolvedCall[AssociationOptions]:
    """Resolve ``associate``/``relatedness(input, [options], [callback])``.

    The input must be a concept URI or a term-list path. Under the strict
    filter policy a supplied ``filter`` must itself be a concept URI.
    """
    _require_primary(input_path, str)
    options, callback = _split_callback(options, callback)
    raw = _as_mapping(options, AssociationOptions)
    callback = _check_callback(callback)

    limit = _int_option(raw, "limit", DEFAULT_ASSOCIATION_LIMIT, minimum=1)
    filter_uri = _str_option(raw, "filter", None)

    if not is_concept_uri(input_path) and not is_term_list_path(input_path):
        raise ValidationError("primary input must be a concept URI or term-list path")
    if filter_uri and filter_policy is FilterPolicy.STRICT and not is_concept_uri(filter_uri):
        raise ValidationError("filter must be a valid concept URI")

    return ResolvedCall(
        operation=operation,
        primary=input_path,
        options=AssociationOptions(limit=limit, filter=filter_uri),
        callback=callback,
    )
