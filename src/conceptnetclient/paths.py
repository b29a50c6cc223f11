"""Request path construction.

Pure functions of ``(config, primary, options)``. Callers must pass options
that went through ``conceptnetclient.arguments``; nothing here validates.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, unquote, urlencode

from .config import ClientConfig, PathLayout
from .types import AssociationOptions, LookupOptions, Operation, ResolvedCall, UriOptions

_WHITESPACE = re.compile(r"\s+")


def _prefix(config: ClientConfig) -> str:
    if config.layout is PathLayout.VERSIONED:
        return f"/data/{config.api_version}"
    return ""


def normalize_text(text: str) -> str:
    """Collapse each run of whitespace into a single underscore."""
    return _WHITESPACE.sub("_", text)


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return [_query_value(v) for v in value]
    return value


def build_query_string(params: Mapping[str, Any], *, unescape: bool = False) -> str:
    """Serialize every key of ``params``; repeated keys for sequences."""
    pairs = {key: _query_value(value) for key, value in params.items()}
    query = urlencode(pairs, doseq=True, quote_via=quote)
    return unquote(query) if unescape else query


def build_lookup_path(config: ClientConfig, uri: str, options: LookupOptions) -> str:
    # Slashes stay literal; full component encoding would send %2F instead.
    path = f"{_prefix(config)}{quote(uri, safe='/')}"
    path += f"?limit={options.limit}&offset={options.offset}"
    if options.filter == "core":
        path += "&filter=core"
    return path


def build_text_to_uri_path(config: ClientConfig, text: str, options: UriOptions) -> str:
    encoded = quote(normalize_text(text), safe="")
    if config.layout is PathLayout.VERSIONED:
        return f"{_prefix(config)}/uri?language={options.language}&text={encoded}"
    return f"/c/{options.language}/{encoded}"


def build_search_path(config: ClientConfig, params: Mapping[str, Any]) -> str:
    if config.layout is PathLayout.VERSIONED:
        return f"{_prefix(config)}/search?{build_query_string(params, unescape=True)}"
    return f"/query?{build_query_string(params)}"


def _association_path(endpoint: str, input_path: str, options: AssociationOptions) -> str:
    path = f"{endpoint}{input_path}"
    if options.filter:
        path += f"?filter={options.filter}&limit={options.limit}"
    return path


def build_association_path(config: ClientConfig, input_path: str, options: AssociationOptions) -> str:
    if config.layout is PathLayout.VERSIONED:
        endpoint = f"{_prefix(config)}/assoc"
    else:
        endpoint = "/related"
    return _association_path(endpoint, input_path, options)


def build_relatedness_path(config: ClientConfig, input_path: str, options: AssociationOptions) -> str:
    return _association_path(f"{_prefix(config)}/relatedness", input_path, options)


def build_path(config: ClientConfig, call: ResolvedCall[Any]) -> str:
    """Build the request path for any resolved call."""
    if call.operation is Operation.LOOKUP:
        return build_lookup_path(config, call.primary, call.options)
    if call.operation is Operation.RESOLVE_TEXT_TO_URI:
        return build_text_to_uri_path(config, call.primary, call.options)
    if call.operation is Operation.SEARCH:
        return build_search_path(config, call.options)
    if call.operation is Operation.ASSOCIATE:
        return build_association_path(config, call.primary, call.options)
    if call.operation is Operation.RELATEDNESS:
        return build_relatedness_path(config, call.primary, call.options)
    raise ValueError(f"Unknown operation: {call.operation}")
