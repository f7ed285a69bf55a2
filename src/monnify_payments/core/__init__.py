"""
Core primitives behind the Monnify transaction client.
"""

from .auth import AccessToken, BasicAuthStrategy, OAuth2Strategy
from .client import MonnifyClient
from .config import (
    MonnifyConfig,
    MonnifyCredentials,
    MonnifyParameters,
    load_monnify_config,
)
from .environment import MonnifyEnvironment, build_environment, load_env_file
from .errors import (
    ConfigError,
    MonnifyAuthenticationError,
    MonnifyError,
    MonnifyFailedRequestError,
    MonnifyMalformedResponseError,
    MonnifyTransportError,
)
from .models import IncomeSplit, IncomeSplitConfig, PaymentMethod
from .notifications import (
    TransactionNotification,
    calculate_transaction_hash,
    verify_transaction_hash,
)
from .payloads import PreparedCall
from .responses import GatewayFailure, OperationResult, normalize_response

__all__ = [
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
    "PreparedCall",
    "TransactionNotification",
    "build_environment",
    "calculate_transaction_hash",
    "load_env_file",
    "load_monnify_config",
    "normalize_response",
    "verify_transaction_hash",
]
