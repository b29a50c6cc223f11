"""ConceptNet CLI implementation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape

from .client import ConceptNetClient
from .config import DEPLOYMENTS, ClientConfig, FilterPolicy
from .errors import ConceptNetError
from .executor import PendingRequest

console = Console()
err_console = Console(stderr=True)


def _parse_params(pairs: list[str]) -> dict[str, Any]:
    """Turn KEY=VALUE arguments into search parameters; repeated keys become lists."""
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {pair!r}")
        if key in params:
            existing = params[key]
            params[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conceptnet",
        description="ConceptNet - knowledge graph API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m conceptnetclient lookup /c/en/toast --limit 2 --core
    python -m conceptnetclient uri "ground beef"
    python -m conceptnetclient uri 車 --language ja
    python -m conceptnetclient search start=/c/en/donut
    python -m conceptnetclient assoc /list/en/toast,cereal --filter /c/en/breakfast
    python -m conceptnetclient --deployment current relatedness /c/en/tea

Environment:
    CONCEPTNET_HOST, CONCEPTNET_PORT, CONCEPTNET_API_VERSION,
    CONCEPTNET_DEPLOYMENT, CONCEPTNET_FILTER_POLICY, CONCEPTNET_TIMEOUT
        """,
    )
    parser.add_argument("--host", help="Service hostname")
    parser.add_argument("--port", help="Service port")
    parser.add_argument("--api-version", help="API version for versioned paths")
    parser.add_argument(
        "--deployment",
        choices=list(DEPLOYMENTS.keys()),
        help="Connection defaults to use (default: legacy)",
    )
    parser.add_argument(
        "--permissive",
        action="store_true",
        help="Send association filters without checking they are concept URIs",
    )
    parser.add_argument("-j", "--json", action="store_true", help="Output raw JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests to stderr")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # lookup command
    lookup_parser = subparsers.add_parser("lookup", help="Look up a concept by URI")
    lookup_parser.add_argument("uri", help="Concept URI, e.g. /c/en/toast")
    lookup_parser.add_argument("-l", "--limit", type=int, help="Number of results (default: 50)")
    lookup_parser.add_argument("-o", "--offset", type=int, help="Results to skip (default: 0)")
    lookup_parser.add_argument("--core", action="store_true", help="Only core sources")

    # uri command
    uri_parser = subparsers.add_parser("uri", help="Find the concept URI for text")
    uri_parser.add_argument("text", help="Input text")
    uri_parser.add_argument("--language", default="en", help="Language code (default: en)")

    # search command
    search_parser = subparsers.add_parser("search", help="Search edges")
    search_parser.add_argument("params", nargs="+", help="Query parameters as KEY=VALUE")

    # assoc / relatedness commands
    for name, help_text in (
        ("assoc", "Find associated concepts"),
        ("relatedness", "Find related concepts"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", help="Concept URI or /list/<lang>/<terms> path")
        sub.add_argument("-l", "--limit", type=int, help="Number of results (default: 10)")
        sub.add_argument("-f", "--filter", help="Only results starting with this URI")

    return parser


def _build_request(client: ConceptNetClient, args: argparse.Namespace) -> PendingRequest:
    if args.command == "lookup":
        options = {"limit": args.limit, "offset": args.offset, "filter": "core" if args.core else None}
        return client.lookup(args.uri, options)
    if args.command == "uri":
        return client.resolve_text_to_uri(args.text, args.language)
    if args.command == "search":
        return client.search(_parse_params(args.params))
    options = {"limit": args.limit, "filter": args.filter}
    if args.command == "assoc":
        return client.associate(args.input, options)
    return client.relatedness(args.input, options)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = ClientConfig.from_env(
            args.host,
            args.port,
            args.api_version,
            deployment=args.deployment,
            filter_policy=FilterPolicy.PERMISSIVE if args.permissive else None,
        )
        client = ConceptNetClient.from_config(config)
        pending = _build_request(client, args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except ConceptNetError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    result = pending.wait()
    if result.is_err():
        err_console.print(f"[red]Error ({result.error.kind.value}):[/red] {escape(str(result.error))}")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.value))
    else:
        console.print_json(data=result.value)


if __name__ == "__main__":
    main()
