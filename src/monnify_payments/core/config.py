"""
Configuration objects and helpers for the Monnify client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import ConfigError

__all__ = [
    "BASE_URLS",
    "ConfigError",
    "MonnifyConfig",
    "MonnifyCredentials",
    "MonnifyParameters",
    "load_monnify_config",
]

BASE_URLS = {
    "sandbox": "https://sandbox.monnify.com",
    "live": "https://api.monnify.com",
}

V1_PREFIX = "/api/v1/"
V2_PREFIX = "/api/v2/"

_PARAMETER_TO_ENV_KEY = {
    "api_key": "MONNIFY_API_KEY",
    "secret_key": "MONNIFY_SECRET_KEY",
    "contract_code": "MONNIFY_CONTRACT_CODE",
    "default_currency_code": "MONNIFY_DEFAULT_CURRENCY_CODE",
    "environment": "MONNIFY_ENVIRONMENT",
    "base_url": "MONNIFY_BASE_URL",
    "timeout_seconds": "MONNIFY_TIMEOUT_SECONDS",
}


@dataclass(frozen=True)
class MonnifyParameters:
    """
    Explicit parameter bundle for constructing :class:`MonnifyConfig`.

    Anything left as ``None`` falls back to the environment.
    """

    api_key: Optional[str] = None
    secret_key: Optional[str] = None
    contract_code: Optional[str] = None
    default_currency_code: Optional[str] = None
    environment: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = str(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[MonnifyParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown Monnify parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _require(values: Mapping[str, str], key: str) -> str:
    value = (values.get(key) or "").strip()
    if not value:
        raise ConfigError(f"{key} must be provided")
    return value


@dataclass(frozen=True)
class MonnifyCredentials:
    """
    Merchant credentials issued by Monnify.

    The API key and secret key are left out of ``repr`` so the object can be
    logged safely.
    """

    api_key: str = field(repr=False)
    secret_key: str = field(repr=False)
    contract_code: str
    default_currency_code: str = "NGN"


@dataclass(frozen=True)
class MonnifyConfig:
    credentials: MonnifyCredentials
    base_url: str = BASE_URLS["sandbox"]
    environment: str = "sandbox"
    timeout_seconds: float = 30.0

    def v1_url(self, path: str) -> str:
        return f"{self.base_url}{V1_PREFIX}{path.lstrip('/')}"

    def v2_url(self, path: str) -> str:
        return f"{self.base_url}{V2_PREFIX}{path.lstrip('/')}"

    @property
    def token_url(self) -> str:
        return self.v1_url("auth/login")

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "MonnifyConfig":
        credentials = MonnifyCredentials(
            api_key=_require(values, "MONNIFY_API_KEY"),
            secret_key=_require(values, "MONNIFY_SECRET_KEY"),
            contract_code=_require(values, "MONNIFY_CONTRACT_CODE"),
            default_currency_code=(
                values.get("MONNIFY_DEFAULT_CURRENCY_CODE") or "NGN"
            ).strip().upper(),
        )

        environment = (values.get("MONNIFY_ENVIRONMENT") or "sandbox").strip().lower()
        if environment not in BASE_URLS:
            raise ConfigError(
                f"MONNIFY_ENVIRONMENT must be one of {sorted(BASE_URLS)}, got '{environment}'"
            )

        base_url = (values.get("MONNIFY_BASE_URL") or "").strip() or BASE_URLS[environment]

        timeout_raw = values.get("MONNIFY_TIMEOUT_SECONDS", "30")
        try:
            timeout_seconds = float(timeout_raw)
        except ValueError as exc:
            raise ConfigError(
                f"MONNIFY_TIMEOUT_SECONDS must be a number, got '{timeout_raw}'"
            ) from exc
        if timeout_seconds <= 0:
            raise ConfigError("MONNIFY_TIMEOUT_SECONDS must be greater than zero")

        return cls(
            credentials=credentials,
            base_url=base_url.rstrip("/"),
            environment=environment,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[MonnifyParameters] = None,
        **explicit: Any,
    ) -> "MonnifyConfig":
        parameter_overrides = _collect_parameter_overrides(parameters, explicit)
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_monnify_config(
    *,
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
) -> MonnifyConfig:
    """
    Convenience wrapper around :meth:`MonnifyConfig.from_env`.

    Settings may come from ``MONNIFY_*`` environment variables, a ``.env``
    file, keyword arguments, or any combination of the three.
    """
    return MonnifyConfig.from_env(
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
