"""ConceptNet API client implementation."""

from __future__ import annotations

import logging
from typing import Any

from .arguments import (
    MISSING,
    resolve_association,
    resolve_lookup,
    resolve_search,
    resolve_text_to_uri,
)
from .config import ClientConfig, Deployment, FilterPolicy
from .executor import Decoder, PendingRequest, RequestExecutor, Transport
from .paths import build_path
from .types import Operation, ResolvedCall

logger = logging.getLogger(__name__)


class ConceptNetClient:
    """Client for the ConceptNet knowledge-graph API.

    Every operation validates its arguments immediately, raising
    ``ArgumentError`` or ``ValidationError`` for bad input, and returns a
    ``PendingRequest``. Awaiting it sends the request and yields a Result;
    network and JSON failures come back as ``Err`` values, never as exceptions.

    Usage:
        client = ConceptNetClient()  # conceptnet5.media.mit.edu, API 5.4

        result = await client.lookup("/c/en/toast", {"limit": 2, "filter": "core"})
        if result.is_ok():
            for edge in result.value["edges"]:
                print(edge["surfaceText"])
        else:
            print(f"Error: {result.error}")

        # Callback style, two-argument form; sent at once inside a running loop
        client.associate("/list/en/toast,cereal", lambda err, data: print(data))

        # Synchronous code
        result = client.resolve_text_to_uri("ground beef").wait()
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | str | None = None,
        api_version: str | None = None,
        *,
        deployment: str | Deployment | None = None,
        filter_policy: FilterPolicy | str | None = None,
        timeout: float | None = None,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        decoder: Decoder | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            host: Service hostname. Defaults to the deployment's host.
            port: Service port. Defaults to 80.
            api_version: API version for versioned paths. Defaults to the deployment's.
            deployment: "legacy" (default) or "current", or a Deployment.
            filter_policy: Override whether association filters must be concept URIs.
            timeout: Transport timeout in seconds.
            config: Prebuilt config; when given, the connection arguments are ignored.
            transport: Replacement transport (defaults to HttpxTransport).
            decoder: Replacement body decoder (defaults to JSON).
        """
        config = config or ClientConfig.create(
            host,
            port,
            api_version,
            deployment=deployment,
            filter_policy=filter_policy,
            timeout=timeout,
        )
        self._config = config
        self._executor = RequestExecutor(config, transport, decoder)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: Transport | None = None,
        decoder: Decoder | None = None,
    ) -> ConceptNetClient:
        """Create a client around an existing config, e.g. ``ClientConfig.from_env()``."""
        return cls(config=config, transport=transport, decoder=decoder)

    def __repr__(self) -> str:
        return (
            f"ConceptNetClient(host={self.host!r}, port={self.port}, "
            f"api_version={self.api_version!r})"
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def api_version(self) -> str:
        return self._config.api_version

    def _dispatch(self, call: ResolvedCall[Any]) -> PendingRequest:
        path = build_path(self._config, call)
        logger.debug(f"{call.operation.value}: built path {path}")
        return self._executor.submit(path, call.callback)

    def lookup(
        self,
        uri: str = MISSING,
        options: Any = None,
        callback: Any = None,
    ) -> PendingRequest:
        """Find a ConceptNet object by its URI.

        Args:
            uri: Concept URI, e.g. "/c/en/toast"
            options: LookupOptions or mapping with limit (50), offset (0), filter
                ("core" restricts results to core sources)
            callback: Optional handler called once with (error, data)
        """
        return self._dispatch(resolve_lookup(uri, options, callback))

    def resolve_text_to_uri(
        self,
        text: str = MISSING,
        options: Any = None,
        callback: Any = None,
    ) -> PendingRequest:
        """Find the concept URI for free text.

        Args:
            text: Input text; whitespace runs become underscores
            options: Language code string, or UriOptions/mapping with language ("en")
            callback: Optional handler called once with (error, data)
        """
        return self._dispatch(resolve_text_to_uri(text, options, callback))

    def search(self, params: Any = MISSING, callback: Any = None) -> PendingRequest:
        """Search edges; every key of ``params`` becomes a query parameter."""
        return self._dispatch(resolve_search(params, callback))

    def associate(
        self,
        input_path: str = MISSING,
        options: Any = None,
        callback: Any = None,
    ) -> PendingRequest:
        """Find concepts similar to a concept URI or a ``/list/<lang>/<terms>`` path.

        Args:
            input_path: Concept URI or term-list path
            options: AssociationOptions or mapping with limit (10) and filter
            callback: Optional handler called once with (error, data)
        """
        call = resolve_association(
            input_path,
            options,
            callback,
            operation=Operation.ASSOCIATE,
            filter_policy=self._config.filter_policy,
        )
        return self._dispatch(call)

    def relatedness(
        self,
        input_path: str = MISSING,
        options: Any = None,
        callback: Any = None,
    ) -> PendingRequest:
        """Relatedness variant of ``associate``, served by the relatedness endpoint."""
        call = resolve_association(
            input_path,
            options,
            callback,
            operation=Operation.RELATEDNESS,
            filter_policy=self._config.filter_policy,
        )
        return self._dispatch(call)
