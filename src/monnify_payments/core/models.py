"""
Value objects passed into transaction requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

__all__ = [
    "IncomeSplit",
    "IncomeSplitConfig",
    "PaymentMethod",
    "payment_methods_payload",
]

Number = Union[Decimal, float, int, str]


class PaymentMethod(str, Enum):
    CARD = "CARD"
    ACCOUNT_TRANSFER = "ACCOUNT_TRANSFER"
    USSD = "USSD"
    PHONE_NUMBER = "PHONE_NUMBER"


def payment_methods_payload(
    methods: Iterable[Union[PaymentMethod, str]],
) -> List[str]:
    """Return the unique method names in the order given."""
    names: List[str] = []
    for method in methods:
        if isinstance(method, PaymentMethod):
            name = method.value
        else:
            name = PaymentMethod(method.strip().upper()).value
        if name not in names:
            names.append(name)
    return names


def _number(value: Number) -> float:
    return float(Decimal(str(value)))


@dataclass(frozen=True)
class IncomeSplit:
    """How much of a payment one sub account receives."""

    sub_account_code: str
    fee_percentage: Optional[Number] = None
    split_amount: Optional[Number] = None
    split_percentage: Optional[Number] = None
    fee_bearer: Optional[bool] = None

    def as_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"subAccountCode": self.sub_account_code.strip()}
        if self.fee_percentage is not None:
            payload["feePercentage"] = _number(self.fee_percentage)
        if self.split_amount is not None:
            payload["splitAmount"] = _number(self.split_amount)
        if self.split_percentage is not None:
            payload["splitPercentage"] = _number(self.split_percentage)
        if self.fee_bearer is not None:
            payload["feeBearer"] = bool(self.fee_bearer)
        return payload


class IncomeSplitConfig:
    """Ordered collection of :class:`IncomeSplit` entries for one transaction."""

    def __init__(self, splits: Sequence[IncomeSplit]) -> None:
        if not splits:
            raise ValueError("IncomeSplitConfig needs at least one split")
        self.splits: Tuple[IncomeSplit, ...] = tuple(splits)

    def as_payload(self) -> List[Dict[str, Any]]:
        return [split.as_payload() for split in self.splits]

    def __len__(self) -> int:
        return len(self.splits)

    def __repr__(self) -> str:
        return f"IncomeSplitConfig({list(self.splits)!r})"
