"""
Minimal script that uses the public API to start a customer authorization flow.
"""

from __future__ import annotations

import argparse
import logging
import sys

from processout import (
    APIError,
    AuthorizationRequest,
    ConfigError,
    Customer,
    RequestOptions,
    create_client,
    load_client_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a customer and an authorization request for them"
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PROCESSOUT_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--project-id", help="Override the ProcessOut project ID")
    parser.add_argument("--project-secret", help="Override the ProcessOut project secret")
    parser.add_argument("--email", required=True, help="Email of the new customer")
    parser.add_argument("--currency", default="USD")
    parser.add_argument("--name", default="Card authorization")
    parser.add_argument("--return-url", default="https://example.com/return")
    parser.add_argument("--cancel-url", default="https://example.com/cancel")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(
            env_file=args.env_file,
            project_id=args.project_id,
            project_secret=args.project_secret,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_client(config=config) as client:
        try:
            customer = client.customers.create(
                Customer(email=args.email, currency=args.currency)
            )
            logging.info("Created customer %s", customer.id)

            authorization_request = client.authorization_requests.create(
                AuthorizationRequest(
                    name=args.name,
                    currency=args.currency,
                    return_url=args.return_url,
                    cancel_url=args.cancel_url,
                ),
                customer.id,
                options=RequestOptions(expand=("customer",)),
            )
        except APIError as exc:
            logging.error("ProcessOut rejected the request: %s", exc)
            return 1

    logging.info(
        "Redirect the customer to %s to authorize %s",
        authorization_request.url,
        authorization_request.id,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
