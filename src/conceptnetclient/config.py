"""Connection configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Self

from .errors import ArgumentError

DEFAULT_TIMEOUT = 30.0

# Option defaults
DEFAULT_LOOKUP_LIMIT = 50
DEFAULT_ASSOCIATION_LIMIT = 10
DEFAULT_OFFSET = 0
DEFAULT_LANGUAGE = "en"

# Environment overrides read by ClientConfig.from_env()
HOST_ENV_VAR = "CONCEPTNET_HOST"
PORT_ENV_VAR = "CONCEPTNET_PORT"
API_VERSION_ENV_VAR = "CONCEPTNET_API_VERSION"
DEPLOYMENT_ENV_VAR = "CONCEPTNET_DEPLOYMENT"
FILTER_POLICY_ENV_VAR = "CONCEPTNET_FILTER_POLICY"
TIMEOUT_ENV_VAR = "CONCEPTNET_TIMEOUT"


class PathLayout(str, Enum):
    """Endpoint layout served by a deployment."""

    VERSIONED = "versioned"  # /data/<version>/...
    ROOT = "root"


class FilterPolicy(str, Enum):
    """How association filters are checked before sending."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class Deployment:
    """Named set of connection defaults for one service deployment."""

    name: str
    host: str
    port: int
    api_version: str
    layout: PathLayout
    filter_policy: FilterPolicy


LEGACY = Deployment(
    name="legacy",
    host="conceptnet5.media.mit.edu",
    port=80,
    api_version="5.4",
    layout=PathLayout.VERSIONED,
    filter_policy=FilterPolicy.STRICT,
)

CURRENT = Deployment(
    name="current",
    host="api.conceptnet.io",
    port=80,
    api_version="5.8.1",
    layout=PathLayout.ROOT,
    filter_policy=FilterPolicy.PERMISSIVE,
)

DEPLOYMENTS: dict[str, Deployment] = {d.name: d for d in (LEGACY, CURRENT)}

DEFAULT_HOST = LEGACY.host
DEFAULT_PORT = LEGACY.port
DEFAULT_API_VERSION = LEGACY.api_version


def get_deployment(deployment: str | Deployment | None) -> Deployment:
    """Look up a deployment by name; ``None`` means the legacy default."""
    if deployment is None:
        return LEGACY
    if isinstance(deployment, Deployment):
        return deployment
    try:
        return DEPLOYMENTS[deployment.lower()]
    except KeyError:
        raise ArgumentError(
            f"unknown deployment: {deployment!r} (expected one of {', '.join(DEPLOYMENTS)})"
        ) from None


def _parse_filter_policy(policy: FilterPolicy | str) -> FilterPolicy:
    if isinstance(policy, FilterPolicy):
        return policy
    try:
        return FilterPolicy(str(policy).lower())
    except ValueError:
        raise ArgumentError(f"unknown filter policy: {policy!r}") from None


def _parse_port(port: int | str) -> int:
    if isinstance(port, bool):
        raise ArgumentError("invalid type: port")
    try:
        return int(port)
    except (TypeError, ValueError):
        raise ArgumentError("invalid type: port") from None


def _parse_timeout(timeout: float | str) -> float:
    if isinstance(timeout, bool):
        raise ArgumentError("invalid type: timeout")
    try:
        return float(timeout)
    except (TypeError, ValueError):
        raise ArgumentError("invalid type: timeout") from None


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable connection settings owned by one client."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    api_version: str = DEFAULT_API_VERSION
    layout: PathLayout = PathLayout.VERSIONED
    filter_policy: FilterPolicy = FilterPolicy.STRICT
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def create(
        cls,
        host: str | None = None,
        port: int | str | None = None,
        api_version: str | None = None,
        *,
        deployment: str | Deployment | None = None,
        filter_policy: FilterPolicy | str | None = None,
        timeout: float | str | None = None,
    ) -> Self:
        """Build a config, defaulting each falsy field on its own.

        Args:
            host: Service hostname (deployment default if omitted)
            port: Service port; numeric strings are accepted
            api_version: API version used in versioned paths
            deployment: Deployment name or object supplying the defaults
            filter_policy: Override for the deployment's filter policy
            timeout: Transport timeout in seconds
        """
        base = get_deployment(deployment)
        return cls(
            host=host or base.host,
            port=_parse_port(port or base.port),
            api_version=api_version or base.api_version,
            layout=base.layout,
            filter_policy=_parse_filter_policy(filter_policy) if filter_policy else base.filter_policy,
            timeout=_parse_timeout(timeout or DEFAULT_TIMEOUT),
        )

    @classmethod
    def from_env(
        cls,
        host: str | None = None,
        port: int | str | None = None,
        api_version: str | None = None,
        *,
        deployment: str | Deployment | None = None,
        filter_policy: FilterPolicy | str | None = None,
        timeout: float | None = None,
    ) -> Self:
        """Build a config from explicit values, then CONCEPTNET_* env vars."""
        return cls.create(
            host=host or os.environ.get(HOST_ENV_VAR),
            port=port or os.environ.get(PORT_ENV_VAR),
            api_version=api_version or os.environ.get(API_VERSION_ENV_VAR),
            deployment=deployment or os.environ.get(DEPLOYMENT_ENV_VAR),
            filter_policy=filter_policy or os.environ.get(FILTER_POLICY_ENV_VAR),
            timeout=timeout or os.environ.get(TIMEOUT_ENV_VAR),
        )

    @property
    def scheme(self) -> str:
        return "https" if self.port == 443 else "http"

    @property
    def base_url(self) -> str:
        if (self.scheme, self.port) in (("http", 80), ("https", 443)):
            return f"{self.scheme}://{self.host}"
        return f"{self.scheme}://{self.host}:{self.port}"
