"""
Authentication of Monnify transaction notifications (webhooks).

Monnify signs each notification with a SHA-512 hash over::

    secretKey|paymentReference|amountPaid|paidOn|transactionReference

Recompute it with :func:`calculate_transaction_hash` and only honor the
notification when it matches. A match is a first filter: before updating
records, confirm the transaction with
:meth:`monnify_payments.core.client.MonnifyClient.get_transaction_status`.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import Any, Mapping, Optional

__all__ = [
    "TransactionNotification",
    "calculate_transaction_hash",
    "verify_transaction_hash",
]


def calculate_transaction_hash(
    secret_key: str,
    payment_reference: str,
    amount_paid: Any,
    paid_on: str,
    transaction_reference: str,
) -> str:
    """
    Return the lowercase hex SHA-512 digest Monnify sends as ``transactionHash``.

    ``amount_paid`` is formatted with ``str()``; pass it exactly as it appeared
    in the notification (``"100.00"`` and ``100.0`` hash differently).
    ``paid_on`` uses Monnify's ``dd/mm/yyyy hh:mm:ss`` format.
    """
    message = f"{secret_key}|{payment_reference}|{amount_paid}|{paid_on}|{transaction_reference}"
    return hashlib.sha512(message.encode("utf-8")).hexdigest()


def verify_transaction_hash(
    expected_hash: str,
    secret_key: str,
    payment_reference: str,
    amount_paid: Any,
    paid_on: str,
    transaction_reference: str,
) -> bool:
    """Constant-time comparison of ``expected_hash`` with the recomputed digest."""
    computed = calculate_transaction_hash(
        secret_key, payment_reference, amount_paid, paid_on, transaction_reference
    )
    candidate = (expected_hash or "").strip().lower()
    return hmac.compare_digest(computed.encode("ascii"), candidate.encode("utf-8"))


@dataclass(frozen=True)
class TransactionNotification:
    payment_reference: str
    amount_paid: str
    paid_on: str
    transaction_reference: str
    transaction_hash: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TransactionNotification":
        """Read the camelCase fields of a notification body."""
        try:
            return cls(
                payment_reference=str(payload["paymentReference"]),
                amount_paid=str(payload["amountPaid"]),
                paid_on=str(payload["paidOn"]),
                transaction_reference=str(payload["transactionReference"]),
                transaction_hash=payload.get("transactionHash"),
            )
        except KeyError as exc:
            raise ValueError(f"Notification is missing field {exc.args[0]!r}") from exc

    def calculate_hash(self, secret_key: str) -> str:
        return calculate_transaction_hash(
            secret_key,
            self.payment_reference,
            self.amount_paid,
            self.paid_on,
            self.transaction_reference,
        )

    def is_authentic(self, secret_key: str) -> bool:
        if not self.transaction_hash:
            return False
        return verify_transaction_hash(
            self.transaction_hash,
            secret_key,
            self.payment_reference,
            self.amount_paid,
            self.paid_on,
            self.transaction_reference,
        )
