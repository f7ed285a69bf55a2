"""
Minimal script that initializes a Monnify checkout and, optionally, confirms it.
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid

from monnify_payments import (
    ConfigError,
    MonnifyFailedRequestError,
    PaymentMethod,
    create_monnify_client,
    load_monnify_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Start a Monnify checkout using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing MONNIFY_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--amount", default="100.00", help="Amount to charge")
    parser.add_argument("--customer-name", default="Jane Doe")
    parser.add_argument("--customer-email", default="jane@example.com")
    parser.add_argument(
        "--redirect-url",
        default="https://example.com/monnify/return",
        help="Where Monnify sends the customer after payment",
    )
    parser.add_argument(
        "--card-only",
        action="store_true",
        help="Only offer card payments on the checkout page",
    )
    parser.add_argument(
        "--confirm",
        metavar="TRANSACTION_REFERENCE",
        help="Look up an existing transaction instead of starting a new one",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_monnify_config(env_file=args.env_file)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_monnify_client(config=config)

    if args.confirm:
        try:
            status = client.get_transaction_status(args.confirm)
        except MonnifyFailedRequestError as exc:
            logging.error("Status lookup failed [%s]: %s", exc.code, exc.message)
            return 1
        logging.info("Transaction %s is %s", args.confirm, status.get("paymentStatus"))
        return 0

    reference = f"ORDER-{uuid.uuid4().hex[:12].upper()}"
    try:
        checkout = client.initialize_transaction(
            amount=args.amount,
            customer_name=args.customer_name,
            customer_email=args.customer_email,
            payment_reference=reference,
            payment_description=f"Payment for {reference}",
            redirect_url=args.redirect_url,
            payment_methods=[PaymentMethod.CARD] if args.card_only else None,
        )
    except MonnifyFailedRequestError as exc:
        logging.error("Checkout failed [%s]: %s", exc.code, exc.message)
        return 1

    logging.info(
        "Checkout ready for %s. Transaction reference: %s",
        reference,
        checkout.get("transactionReference"),
    )
    logging.info("Send the customer to %s", checkout.get("checkoutUrl"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
