"""
conceptnetclient - Python client library for the ConceptNet knowledge graph

Usage:
    from conceptnetclient import ConceptNetClient

    client = ConceptNetClient()  # legacy deployment: conceptnet5.media.mit.edu, API 5.4

    # Look up a concept
    result = await client.lookup("/c/en/toast", {"limit": 2, "filter": "core"})
    if result.is_ok():
        print(result.value["numFound"])
    else:
        print(f"Error: {result.error}")

    # Text to concept URI
    result = await client.resolve_text_to_uri("ground beef")

    # Associations for a concept or a weighted term list
    result = await client.associate("/list/en/toast@0.5,cereal", {"filter": "/c/en/breakfast"})

    # Current deployment (api.conceptnet.io, 5.8.1)
    client = ConceptNetClient(deployment="current")
"""

from .client import ConceptNetClient
from .config import (
    CURRENT,
    DEPLOYMENTS,
    LEGACY,
    ClientConfig,
    Deployment,
    FilterPolicy,
    PathLayout,
)
from .errors import (
    ArgumentError,
    ConceptNetError,
    DecodeError,
    ErrorKind,
    TransportError,
    ValidationError,
)
from .executor import HttpxTransport, PendingRequest, RequestState, Transport, decode_json
from .grammar import is_concept_uri, is_term_list_path
from .result import Err, Ok, Result
from .types import AssociationOptions, LookupOptions, Operation, UriOptions

__all__ = [
    # Client
    "ConceptNetClient",
    "PendingRequest",
    "RequestState",
    # Configuration
    "ClientConfig",
    "Deployment",
    "DEPLOYMENTS",
    "LEGACY",
    "CURRENT",
    "FilterPolicy",
    "PathLayout",
    # Options
    "LookupOptions",
    "UriOptions",
    "AssociationOptions",
    "Operation",
    # Grammar
    "is_concept_uri",
    "is_term_list_path",
    # Transport
    "Transport",
    "HttpxTransport",
    "decode_json",
    # Errors
    "ConceptNetError",
    "ArgumentError",
    "ValidationError",
    "TransportError",
    "DecodeError",
    "ErrorKind",
    # Result
    "Result",
    "Ok",
    "Err",
]

__version__ = "1.0.0"
