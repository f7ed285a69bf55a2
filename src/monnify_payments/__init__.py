"""
Public facade for the Monnify payments client package.

The module re-exports the most useful pieces for integrators so they can
``from monnify_payments import ...`` without navigating the package.
"""

from .api import calculate_notification_hash, create_monnify_client, verify_notification
from .core import (
    AccessToken,
    BasicAuthStrategy,
    ConfigError,
    GatewayFailure,
    IncomeSplit,
    IncomeSplitConfig,
    MonnifyAuthenticationError,
    MonnifyClient,
    MonnifyConfig,
    MonnifyCredentials,
    MonnifyEnvironment,
    MonnifyError,
    MonnifyFailedRequestError,
    MonnifyMalformedResponseError,
    MonnifyParameters,
    MonnifyTransportError,
    OAuth2Strategy,
    OperationResult,
    PaymentMethod,
    TransactionNotification,
    build_environment,
    calculate_transaction_hash,
    load_env_file,
    load_monnify_config,
    normalize_response,
    verify_transaction_hash,
)

__all__ = (
    "AccessToken",
    "BasicAuthStrategy",
    "ConfigError",
    "GatewayFailure",
    "IncomeSplit",
    "IncomeSplitConfig",
    "MonnifyAuthenticationError",
    "MonnifyClient",
    "MonnifyConfig",
    "MonnifyCredentials",
    "MonnifyEnvironment",
    "MonnifyError",
    "MonnifyFailedRequestError",
    "MonnifyMalformedResponseError",
    "MonnifyParameters",
    "MonnifyTransportError",
    "OAuth2Strategy",
    "OperationResult",
    "PaymentMethod",
    "TransactionNotification",
    "build_environment",
    "calculate_notification_hash",
    "calculate_transaction_hash",
    "create_monnify_client",
    "load_env_file",
    "load_monnify_config",
    "normalize_response",
    "verify_notification",
    "verify_transaction_hash",
)
