"""
Command-line interface for exercising the ProcessOut API.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Iterable, Sequence, TextIO, Tuple

import requests

from .api import create_client
from .core import (
    AuthorizationRequest,
    ConfigError,
    ProcessOutClient,
    ProcessOutError,
    RequestOptions,
    load_client_config,
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="processout",
        description="Call the ProcessOut API from the command line",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PROCESSOUT_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--expand",
        action="append",
        default=None,
        metavar="RELATION",
        help="Expand a related resource in the response (repeatable)",
    )
    parser.add_argument(
        "--idempotency-key",
        help="Idempotency-Key header sent with the request",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    find_request = commands.add_parser(
        "find-authorization-request", help="Find an authorization request by ID"
    )
    find_request.add_argument("authorization_request_id")

    create_request = commands.add_parser(
        "create-authorization-request",
        help="Create an authorization request for a customer",
    )
    create_request.add_argument("--customer-id", required=True)
    create_request.add_argument("--name", required=True)
    create_request.add_argument("--currency", required=True)
    create_request.add_argument("--return-url")
    create_request.add_argument("--cancel-url")
    create_request.add_argument("--custom")

    find_customer = commands.add_parser("find-customer", help="Find a customer by ID")
    find_customer.add_argument("customer_id")

    commands.add_parser("list-customers", help="List the project's customers")
    return parser


def _dispatch(
    client: ProcessOutClient,
    args: argparse.Namespace,
    options: RequestOptions,
) -> Any:
    if args.command == "find-authorization-request":
        record = client.authorization_requests.find(
            args.authorization_request_id, options=options
        )
        return record.raw
    if args.command == "create-authorization-request":
        draft = AuthorizationRequest(
            name=args.name,
            currency=args.currency,
            return_url=args.return_url,
            cancel_url=args.cancel_url,
            custom=args.custom,
        )
        record = client.authorization_requests.create(
            draft, args.customer_id, options=options
        )
        logging.info("Authorization request %s available at %s", record.id, record.url)
        return record.raw
    if args.command == "find-customer":
        return client.customers.find(args.customer_id, options=options).raw
    if args.command == "list-customers":
        return [customer.raw for customer in client.customers.all(options=options)]
    raise ValueError(f"Unknown command '{args.command}'")


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    session: requests.Session | None = None,
    stdout: TextIO | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    options = RequestOptions(
        expand=tuple(args.expand or ()),
        idempotency_key=args.idempotency_key,
    )

    with create_client(config=config, session=session or requests.Session()) as client:
        try:
            result = _dispatch(client, args, options)
        except ProcessOutError as exc:
            logging.error("Request failed: %s", exc)
            return 1
        except requests.RequestException as exc:
            logging.error("Transport error: %s", exc)
            return 1

    out = stdout or sys.stdout
    out.write(json.dumps(result, indent=2, sort_keys=True) + "\n")
    return 0


def main() -> None:
    sys.exit(run_cli())
