"""
Public, high-level helpers for working with the Monnify client.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from .core.client import MonnifyClient
from .core.config import MonnifyConfig, MonnifyParameters, load_monnify_config
from .core.notifications import TransactionNotification
from .core.notifications import calculate_transaction_hash as _calculate_transaction_hash
from .core.notifications import verify_transaction_hash as _verify_transaction_hash

__all__ = [
    "calculate_notification_hash",
    "create_monnify_client",
    "verify_notification",
]


def create_monnify_client(
    *,
    config: Optional[MonnifyConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[MonnifyParameters] = None,
    api_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    contract_code: Optional[str] = None,
    default_currency_code: Optional[str] = None,
    environment: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> MonnifyClient:
    """
    Construct a :class:`MonnifyClient`.

    Callers can either supply a ready-made :class:`MonnifyConfig` or let the
    helper assemble one from environment data and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            api_key,
            secret_key,
            contract_code,
            default_currency_code,
            environment,
            base_url,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built MonnifyConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_monnify_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            api_key=api_key,
            secret_key=secret_key,
            contract_code=contract_code,
            default_currency_code=default_currency_code,
            environment=environment,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )
    return MonnifyClient(cfg, session=session)


def calculate_notification_hash(
    secret_key: str,
    notification: Mapping[str, Any],
) -> str:
    """Recompute the ``transactionHash`` of a raw notification body."""
    parsed = TransactionNotification.from_payload(notification)
    return _calculate_transaction_hash(
        secret_key,
        parsed.payment_reference,
        parsed.amount_paid,
        parsed.paid_on,
        parsed.transaction_reference,
    )


def verify_notification(
    secret_key: str,
    notification: Mapping[str, Any],
    *,
    expected_hash: Optional[str] = None,
) -> bool:
    """
    Return whether a raw notification body carries a valid hash.

    ``expected_hash`` defaults to the body's own ``transactionHash``; pass it
    explicitly when the hash arrives out of band (for example in a header).
    """
    parsed = TransactionNotification.from_payload(notification)
    candidate = expected_hash if expected_hash is not None else parsed.transaction_hash
    if not candidate:
        return False
    return _verify_transaction_hash(
        candidate,
        secret_key,
        parsed.payment_reference,
        parsed.amount_paid,
        parsed.paid_on,
        parsed.transaction_reference,
    )
