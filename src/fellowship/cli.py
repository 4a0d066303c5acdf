"""CLI entrypoint for the Fellowship SDK."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Type

from fellowship.api.client import FellowshipClient
from fellowship.config.loader import DEFAULT_CONFIG_PATH, get_api_settings, get_log_level, load_config
from fellowship.filters.filter import Filter, FilterOperator
from fellowship.models.resources import Movie, Quote, WireModel
from fellowship.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

OPERATOR_CHOICES = [op.value for op in FilterOperator]
VALUELESS_OPERATORS = (FilterOperator.EXISTS, FilterOperator.NOT_EXISTS)


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _to_wire(items: Sequence[WireModel]) -> List[Dict[str, Any]]:
    return [item.model_dump(by_alias=True) for item in items]


def parse_filters(model: Type[WireModel], raw_filters: Optional[List[List[str]]]) -> List[Filter]:
    """
    Turn ``--filter FIELD OP [VALUE]`` triples into Filters.

    Raises:
        ValueError: If the argument count doesn't fit the operator
    """
    filters: List[Filter] = []
    for raw in raw_filters or []:
        if len(raw) not in (2, 3):
            raise ValueError(f"--filter expects FIELD OP [VALUE], got: {' '.join(raw)}")
        field_name, op_name = raw[0], raw[1]
        value = raw[2] if len(raw) == 3 else None
        filter_ = Filter.on(model, field_name, op_name, value)
        if filter_.operator in VALUELESS_OPERATORS and value is not None:
            raise ValueError(f"Operator '{op_name}' takes no value")
        if filter_.operator not in VALUELESS_OPERATORS and value is None:
            raise ValueError(f"Operator '{op_name}' requires a value")
        filters.append(filter_)
    return filters


def build_client(args: argparse.Namespace) -> FellowshipClient:
    """Create a client from --api-key, or from the config file and environment."""
    config: Dict[str, Any] = {}
    config_path = Path(args.config) if args.config else DEFAULT_CONFIG_PATH
    if config_path.exists():
        config = load_config(config_path)
    elif args.config:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    if args.api_key:
        config = {**config, "api": {**(config.get("api") or {}), "api_key": args.api_key}}
        settings = get_api_settings(config, env={})
    else:
        settings = get_api_settings(config)
    return FellowshipClient.from_settings(settings)


def cmd_movies_list(args: argparse.Namespace) -> int:
    filters = parse_filters(Movie, args.filter)
    with build_client(args) as client:
        movies = client.movies.get_all(limit=args.limit, page=args.page, filters=filters)
    _dump(_to_wire(movies))
    return 0


def cmd_movies_get(args: argparse.Namespace) -> int:
    with build_client(args) as client:
        movie = client.movies.get_by_id(args.id)
    _dump(movie.model_dump(by_alias=True) if movie else None)
    return 0 if movie else 1


def cmd_movies_quotes(args: argparse.Namespace) -> int:
    with build_client(args) as client:
        quotes = client.movies.get_quotes_for_movie(args.id, limit=args.limit, page=args.page)
    _dump(_to_wire(quotes))
    return 0


def cmd_quotes_list(args: argparse.Namespace) -> int:
    filters = parse_filters(Quote, args.filter)
    with build_client(args) as client:
        quotes = client.quotes.get_all(limit=args.limit, page=args.page, filters=filters)
    _dump(_to_wire(quotes))
    return 0


def cmd_quotes_get(args: argparse.Namespace) -> int:
    with build_client(args) as client:
        quote = client.quotes.get_by_id(args.id)
    _dump(quote.model_dump(by_alias=True) if quote else None)
    return 0 if quote else 1


def cmd_demo(args: argparse.Namespace) -> int:
    """Walk through a few typical queries."""
    with build_client(args) as client:
        print("=== Fellowship SDK Demo ===\n")

        print("1. Getting movies with runtime >= 160 minutes...")
        long_movies = client.movies.get_all(
            filters=[Filter.on(Movie, lambda m: m.runtime_in_minutes, FilterOperator.GREATER_THAN_OR_EQUAL, "160")]
        )
        print(f"Found {len(long_movies)} long movies\n")

        print("2. Getting all movies...")
        all_movies = client.movies.get_all()
        print(f"Found {len(all_movies)} total movies\n")

        print("3. Getting quotes mentioning 'ring'...")
        ring_quotes = client.quotes.get_all(
            limit=2,
            page=2,
            filters=[Filter.on(Quote, lambda q: q.dialog, FilterOperator.REGEX, "/ring/i")],
        )
        print(f"Found {len(ring_quotes)} quotes about rings\n")

        print("4. Sample quotes:")
        _dump(_to_wire(ring_quotes[:3]))
    return 0


def _add_paging_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--limit", type=int, help="Page size")
    parser.add_argument("--page", type=int, help="Page number")


def _add_filter_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--filter",
        nargs="+",
        action="append",
        metavar="ARG",
        help=f"FIELD OP [VALUE]; OP is one of: {', '.join(OPERATOR_CHOICES)}. Repeatable.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fellowship",
        description="Query The One API movie and quote resources",
    )
    parser.add_argument("--config", type=str, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--api-key", type=str, help="API key (overrides config and environment)")
    parser.add_argument("--log-level", type=str, help="Log level, e.g. DEBUG or INFO")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # movies
    movies_parser = subparsers.add_parser("movies", help="Movie resources")
    movies_sub = movies_parser.add_subparsers(dest="movies_command")

    movies_list = movies_sub.add_parser("list", help="List movies")
    _add_paging_args(movies_list)
    _add_filter_arg(movies_list)
    movies_list.set_defaults(func=cmd_movies_list)

    movies_get = movies_sub.add_parser("get", help="Get a movie by ID")
    movies_get.add_argument("id", type=str, help="Movie ID")
    movies_get.set_defaults(func=cmd_movies_get)

    movies_quotes = movies_sub.add_parser("quotes", help="List quotes for a movie")
    movies_quotes.add_argument("id", type=str, help="Movie ID")
    _add_paging_args(movies_quotes)
    movies_quotes.set_defaults(func=cmd_movies_quotes)

    # quotes
    quotes_parser = subparsers.add_parser("quotes", help="Quote resources")
    quotes_sub = quotes_parser.add_subparsers(dest="quotes_command")

    quotes_list = quotes_sub.add_parser("list", help="List quotes")
    _add_paging_args(quotes_list)
    _add_filter_arg(quotes_list)
    quotes_list.set_defaults(func=cmd_quotes_list)

    quotes_get = quotes_sub.add_parser("get", help="Get a quote by ID")
    quotes_get.add_argument("id", type=str, help="Quote ID")
    quotes_get.set_defaults(func=cmd_quotes_get)

    # demo
    demo_parser = subparsers.add_parser("demo", help="Run the demo queries")
    demo_parser.set_defaults(func=cmd_demo)

    return parser


def _resolve_log_level(args: argparse.Namespace) -> str:
    if args.log_level:
        return args.log_level
    config_path = Path(args.config) if args.config else DEFAULT_CONFIG_PATH
    if config_path.exists():
        return get_log_level(load_config(config_path))
    return get_log_level()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    configure_logging(_resolve_log_level(args))

    try:
        return args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    sys.exit(main())
