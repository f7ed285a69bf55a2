"""
HTTP client for the Monnify transaction endpoints.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

import requests
from requests.auth import AuthBase

from .auth import BasicAuthStrategy, OAuth2Strategy
from .config import MonnifyConfig
from .errors import MonnifyFailedRequestError, MonnifyTransportError
from .models import IncomeSplitConfig, Number, PaymentMethod
from .notifications import TransactionNotification, calculate_transaction_hash
from .payloads import (
    PreparedCall,
    build_bank_transfer_request,
    build_charge_card_request,
    build_initialize_transaction_request,
    build_search_request,
    build_transaction_status_request,
)
from .responses import GatewayFailure, OperationResult, normalize_response

__all__ = ["MonnifyClient"]


class MonnifyClient:
    """
    Transaction operations against one Monnify merchant account.

    A client may be shared between threads. Every operation returns the
    ``responseBody`` of Monnify's envelope and raises a
    :class:`~monnify_payments.core.errors.MonnifyFailedRequestError` subclass
    on any failure. Nothing is retried.
    """

    def __init__(
        self,
        config: MonnifyConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self._basic_auth = BasicAuthStrategy(config.credentials)
        self._oauth2 = OAuth2Strategy(config, self.session)

    def with_basic_auth(self) -> BasicAuthStrategy:
        return self._basic_auth

    def with_oauth2(self) -> OAuth2Strategy:
        return self._oauth2

    def dispatch(
        self,
        call: PreparedCall,
        auth: AuthBase,
        *,
        timeout: Optional[float] = None,
    ) -> OperationResult:
        """
        Send ``call`` with ``auth`` and normalize the outcome without raising.
        """
        logging.info("Sending %s request to %s", call.method, call.url)
        timeout = timeout or self.config.timeout_seconds
        try:
            if isinstance(auth, OAuth2Strategy):
                # A token exchange triggered by this call gets the same timeout.
                auth.token(timeout=timeout)
            response = self.session.request(
                call.method,
                call.url,
                params=call.params,
                json=call.json,
                auth=auth,
                timeout=timeout,
                headers={"Accept": "application/json"},
            )
        except MonnifyFailedRequestError as exc:
            # Raised by the OAuth2 strategy while exchanging credentials.
            return OperationResult.failed(GatewayFailure.from_exception(exc))
        except requests.Timeout as exc:
            return OperationResult.failed(
                GatewayFailure(
                    message=f"Request to {call.url} timed out: {exc}",
                    code="TIMEOUT",
                    error_class=MonnifyTransportError,
                )
            )
        except requests.RequestException as exc:
            return OperationResult.failed(
                GatewayFailure(
                    message=f"Request to {call.url} failed: {exc}",
                    code="TRANSPORT_ERROR",
                    error_class=MonnifyTransportError,
                )
            )
        return normalize_response(response)

    def search_transactions(
        self,
        query_params: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = None,
        **filters: Any,
    ) -> Any:
        """
        Return a page of the merchant's transactions.

        Filters (``page``, ``size``, ``paymentReference``, ``from``, ``to``,
        ...) may be passed as a mapping, keyword arguments, or both.
        """
        params = dict(query_params or {})
        params.update(filters)
        call = build_search_request(self.config, params)
        return self.dispatch(call, self.with_oauth2(), timeout=timeout).unwrap()

    def initialize_transaction(
        self,
        amount: Number,
        customer_name: str,
        customer_email: str,
        payment_reference: str,
        payment_description: str,
        redirect_url: str,
        payment_methods: Optional[Iterable[Union[PaymentMethod, str]]] = None,
        income_split_config: Optional[IncomeSplitConfig] = None,
        currency_code: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Start a transaction and return Monnify's checkout details.

        The response body carries ``checkoutUrl``, which can be loaded in a
        browser to show the payment form, and the ``transactionReference``
        Monnify assigned.
        """
        call = build_initialize_transaction_request(
            self.config,
            amount=amount,
            customer_name=customer_name,
            customer_email=customer_email,
            payment_reference=payment_reference,
            payment_description=payment_description,
            redirect_url=redirect_url,
            payment_methods=payment_methods,
            income_split_config=income_split_config,
            currency_code=currency_code,
        )
        return self.dispatch(call, self.with_basic_auth(), timeout=timeout).unwrap()

    def charge_card_token(
        self,
        amount: Number,
        customer_name: str,
        customer_email: str,
        payment_reference: str,
        payment_description: str,
        card_token: str,
        income_split_config: Optional[IncomeSplitConfig] = None,
        currency_code: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
    ) -> Any:
        """Charge a card token saved from an earlier card payment."""
        call = build_charge_card_request(
            self.config,
            amount=amount,
            customer_name=customer_name,
            customer_email=customer_email,
            payment_reference=payment_reference,
            payment_description=payment_description,
            card_token=card_token,
            income_split_config=income_split_config,
            currency_code=currency_code,
        )
        return self.dispatch(call, self.with_oauth2(), timeout=timeout).unwrap()

    def get_transaction_status(
        self,
        transaction_reference: str,
        *,
        timeout: Optional[float] = None,
    ) -> Any:
        call = build_transaction_status_request(self.config, transaction_reference)
        return self.dispatch(call, self.with_oauth2(), timeout=timeout).unwrap()

    def pay_with_bank_transfer(
        self,
        transaction_reference: str,
        bank_code: str,
        *,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Get the account details a customer should transfer to for an
        initialized transaction, so the merchant can render its own
        payment screen.
        """
        call = build_bank_transfer_request(self.config, transaction_reference, bank_code)
        return self.dispatch(call, self.with_basic_auth(), timeout=timeout).unwrap()

    def calculate_transaction_hash(
        self,
        payment_reference: str,
        amount_paid: Any,
        paid_on: str,
        transaction_reference: str,
    ) -> str:
        return calculate_transaction_hash(
            self.config.credentials.secret_key,
            payment_reference,
            amount_paid,
            paid_on,
            transaction_reference,
        )

    def verify_notification(
        self,
        notification: Union[TransactionNotification, Mapping[str, Any]],
    ) -> bool:
        """
        Check a notification's ``transactionHash`` against this merchant's key.

        Only a first filter: confirm with :meth:`get_transaction_status`
        before acting on the notification.
        """
        if not isinstance(notification, TransactionNotification):
            notification = TransactionNotification.from_payload(notification)
        return notification.is_authentic(self.config.credentials.secret_key)
