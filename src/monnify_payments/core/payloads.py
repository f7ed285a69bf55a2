"""
Helpers for constructing the URLs and bodies sent to Monnify.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Mapping, Optional, Union
from urllib.parse import quote

from .config import MonnifyConfig
from .models import IncomeSplitConfig, Number, PaymentMethod, payment_methods_payload

__all__ = [
    "PreparedCall",
    "build_bank_transfer_request",
    "build_charge_card_request",
    "build_initialize_transaction_request",
    "build_search_request",
    "build_transaction_status_request",
]

SEARCH_PATH = "transactions/search"
INIT_TRANSACTION_PATH = "merchant/transactions/init-transaction"
CHARGE_CARD_TOKEN_PATH = "merchant/cards/charge-card-token"
TRANSACTION_STATUS_PATH = "transactions/{reference}"
BANK_TRANSFER_PATH = "merchant/bank-transfer/init-payment"


@dataclass(frozen=True)
class PreparedCall:
    """Everything needed to dispatch one operation, minus authentication."""

    method: str
    url: str
    params: Optional[Dict[str, Any]] = None
    json: Optional[Dict[str, Any]] = None


def _amount(value: Number) -> float:
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"amount must be a number, got {value!r}") from exc
    if not amount.is_finite() or amount <= 0:
        raise ValueError(f"amount must be greater than zero, got {value!r}")
    return float(amount)


def _required(value: str, name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{name} must not be empty")
    return value


def _currency(config: MonnifyConfig, currency_code: Optional[str]) -> str:
    if currency_code is None or not currency_code.strip():
        return config.credentials.default_currency_code
    return currency_code.strip().upper()


def _customer_fields(
    config: MonnifyConfig,
    *,
    amount: Number,
    customer_name: str,
    customer_email: str,
    payment_reference: str,
    payment_description: str,
    currency_code: Optional[str],
    income_split_config: Optional[IncomeSplitConfig],
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "amount": _amount(amount),
        "customerName": customer_name.strip(),
        "customerEmail": customer_email.strip(),
        "paymentReference": _required(payment_reference, "payment_reference"),
        "paymentDescription": payment_description.strip(),
        "currencyCode": _currency(config, currency_code),
        "contractCode": config.credentials.contract_code,
    }
    if income_split_config is not None:
        body["incomeSplitConfig"] = income_split_config.as_payload()
    return body


def build_search_request(
    config: MonnifyConfig,
    query_params: Optional[Mapping[str, Any]] = None,
) -> PreparedCall:
    params = {
        key: value for key, value in (query_params or {}).items() if value is not None
    }
    return PreparedCall(method="GET", url=config.v1_url(SEARCH_PATH), params=params)


def build_initialize_transaction_request(
    config: MonnifyConfig,
    *,
    amount: Number,
    customer_name: str,
    customer_email: str,
    payment_reference: str,
    payment_description: str,
    redirect_url: str,
    payment_methods: Optional[Iterable[Union[PaymentMethod, str]]] = None,
    income_split_config: Optional[IncomeSplitConfig] = None,
    currency_code: Optional[str] = None,
) -> PreparedCall:
    """
    Build the ``init-transaction`` call.

    ``payment_methods`` left as ``None`` lets Monnify offer every method
    enabled on the contract.
    """
    body = _customer_fields(
        config,
        amount=amount,
        customer_name=customer_name,
        customer_email=customer_email,
        payment_reference=payment_reference,
        payment_description=payment_description,
        currency_code=currency_code,
        income_split_config=income_split_config,
    )
    body["redirectUrl"] = redirect_url.strip()
    if payment_methods is not None:
        body["paymentMethods"] = payment_methods_payload(payment_methods)
    return PreparedCall(
        method="POST", url=config.v1_url(INIT_TRANSACTION_PATH), json=body
    )


def build_charge_card_request(
    config: MonnifyConfig,
    *,
    amount: Number,
    customer_name: str,
    customer_email: str,
    payment_reference: str,
    payment_description: str,
    card_token: str,
    income_split_config: Optional[IncomeSplitConfig] = None,
    currency_code: Optional[str] = None,
) -> PreparedCall:
    body = {"cardToken": _required(card_token, "card_token")}
    body.update(
        _customer_fields(
            config,
            amount=amount,
            customer_name=customer_name,
            customer_email=customer_email,
            payment_reference=payment_reference,
            payment_description=payment_description,
            currency_code=currency_code,
            income_split_config=income_split_config,
        )
    )
    body["apiKey"] = config.credentials.api_key
    return PreparedCall(
        method="POST", url=config.v1_url(CHARGE_CARD_TOKEN_PATH), json=body
    )


def build_transaction_status_request(
    config: MonnifyConfig,
    transaction_reference: str,
) -> PreparedCall:
    reference = quote(_required(transaction_reference, "transaction_reference"), safe="")
    return PreparedCall(
        method="GET",
        url=config.v2_url(TRANSACTION_STATUS_PATH.format(reference=reference)),
    )


def build_bank_transfer_request(
    config: MonnifyConfig,
    transaction_reference: str,
    bank_code: str,
) -> PreparedCall:
    body = {
        "transactionReference": _required(transaction_reference, "transaction_reference"),
        "bankCode": bank_code.strip(),
    }
    return PreparedCall(method="POST", url=config.v1_url(BANK_TRANSFER_PATH), json=body)
