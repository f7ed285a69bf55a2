import hashlib

import pytest

from monnify_payments import (
    TransactionNotification,
    calculate_notification_hash,
    calculate_transaction_hash,
    verify_notification,
    verify_transaction_hash,
)

FIELDS = ("SK_TEST_KEY", "REF123", "100.00", "01/01/2021 10:00:00", "TRX987")


def test_hash_matches_sha512_of_pipe_joined_fields():
    expected = hashlib.sha512(
        b"SK_TEST_KEY|REF123|100.00|01/01/2021 10:00:00|TRX987"
    ).hexdigest()
    assert calculate_transaction_hash(*FIELDS) == expected


def test_hash_is_deterministic_lowercase_hex():
    first = calculate_transaction_hash(*FIELDS)
    assert first == calculate_transaction_hash(*FIELDS)
    assert len(first) == 128
    assert first == first.lower()
    int(first, 16)


@pytest.mark.parametrize("index", range(5))
def test_changing_any_field_changes_hash(index):
    changed = list(FIELDS)
    changed[index] = changed[index] + "1"
    assert calculate_transaction_hash(*changed) != calculate_transaction_hash(*FIELDS)


def test_amount_is_hashed_as_given():
    assert calculate_transaction_hash("SK", "R", "100.00", "d", "T") != calculate_transaction_hash(
        "SK", "R", 100.0, "d", "T"
    )


def test_verify_accepts_matching_hash_in_any_case():
    digest = calculate_transaction_hash(*FIELDS)
    assert verify_transaction_hash(digest, *FIELDS)
    assert verify_transaction_hash(digest.upper(), *FIELDS)


def test_verify_rejects_other_secret_and_empty_hash():
    digest = calculate_transaction_hash("OTHER_KEY", *FIELDS[1:])
    assert not verify_transaction_hash(digest, *FIELDS)
    assert not verify_transaction_hash("", *FIELDS)


def _payload(**extra):
    body = {
        "paymentReference": "REF123",
        "amountPaid": "100.00",
        "paidOn": "01/01/2021 10:00:00",
        "transactionReference": "TRX987",
        "paymentStatus": "PAID",
    }
    body.update(extra)
    return body


def test_notification_from_payload_is_authentic():
    digest = calculate_transaction_hash(*FIELDS)
    notification = TransactionNotification.from_payload(_payload(transactionHash=digest))
    assert notification.calculate_hash("SK_TEST_KEY") == digest
    assert notification.is_authentic("SK_TEST_KEY")
    assert not notification.is_authentic("SK_WRONG")


def test_notification_without_hash_is_not_authentic():
    notification = TransactionNotification.from_payload(_payload())
    assert not notification.is_authentic("SK_TEST_KEY")


def test_notification_missing_field_raises_value_error():
    body = _payload()
    del body["paidOn"]
    with pytest.raises(ValueError, match="paidOn"):
        TransactionNotification.from_payload(body)


def test_api_helpers_accept_out_of_band_hash():
    digest = calculate_notification_hash("SK_TEST_KEY", _payload())
    assert digest == calculate_transaction_hash(*FIELDS)
    assert verify_notification("SK_TEST_KEY", _payload(), expected_hash=digest)
    assert not verify_notification("SK_TEST_KEY", _payload())
