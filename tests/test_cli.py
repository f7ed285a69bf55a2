import json
from unittest import mock

import pytest

from monnify_payments import MonnifyFailedRequestError, calculate_transaction_hash
from monnify_payments.cli import build_parser, run_cli

SETTINGS = [
    "--env-file",
    "does-not-exist.env",
    "--set",
    "MONNIFY_API_KEY=MK_TEST_KEY",
    "--set",
    "MONNIFY_SECRET_KEY=SK_TEST_KEY",
    "--set",
    "MONNIFY_CONTRACT_CODE=4934121686",
]
HASH_ARGS = [
    "hash",
    "--payment-reference",
    "REF123",
    "--amount-paid",
    "100.00",
    "--paid-on",
    "01/01/2021 10:00:00",
    "--transaction-reference",
    "TRX987",
]
EXPECTED_HASH = calculate_transaction_hash("SK_TEST_KEY", "REF123", "100.00", "01/01/2021 10:00:00", "TRX987")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("MONNIFY_API_KEY", "MONNIFY_SECRET_KEY", "MONNIFY_CONTRACT_CODE"):
        monkeypatch.delenv(key, raising=False)


def test_hash_command_prints_digest(capsys):
    assert run_cli(SETTINGS + HASH_ARGS) == 0
    assert capsys.readouterr().out.strip() == EXPECTED_HASH


def test_hash_command_checks_expected_hash():
    assert run_cli(SETTINGS + HASH_ARGS + ["--expected", EXPECTED_HASH]) == 0
    assert run_cli(SETTINGS + HASH_ARGS + ["--expected", "0" * 128]) == 1


def test_missing_configuration_fails():
    assert run_cli(["--env-file", "does-not-exist.env"] + HASH_ARGS) == 1


def test_status_command_prints_json(capsys):
    client = mock.Mock()
    client.get_transaction_status.return_value = {"paymentStatus": "PAID"}
    with mock.patch("monnify_payments.cli.create_monnify_client", return_value=client):
        assert run_cli(SETTINGS + ["status", "MNFY|1"]) == 0
    client.get_transaction_status.assert_called_once_with("MNFY|1")
    assert json.loads(capsys.readouterr().out) == {"paymentStatus": "PAID"}


def test_search_command_passes_params():
    client = mock.Mock()
    client.search_transactions.return_value = {"content": []}
    with mock.patch("monnify_payments.cli.create_monnify_client", return_value=client):
        assert run_cli(SETTINGS + ["search", "--param", "page=1", "--param", "size=5"]) == 0
    client.search_transactions.assert_called_once_with({"page": "1", "size": "5"})


def test_request_failure_returns_one():
    client = mock.Mock()
    client.pay_with_bank_transfer.side_effect = MonnifyFailedRequestError("Invalid reference", "99")
    with mock.patch("monnify_payments.cli.create_monnify_client", return_value=client):
        assert run_cli(SETTINGS + ["bank-transfer", "BAD", "057"]) == 1


def test_init_command_collects_payment_methods():
    args = build_parser().parse_args(
        [
            "init",
            "--amount",
            "500",
            "--customer-name",
            "Jane Doe",
            "--customer-email",
            "jane@example.com",
            "--reference",
            "ORDER-1",
            "--description",
            "Tickets",
            "--redirect-url",
            "https://merchant.example/return",
            "--payment-method",
            "CARD",
            "--payment-method",
            "USSD",
        ]
    )
    assert args.payment_method == ["CARD", "USSD"]
    assert args.currency is None
