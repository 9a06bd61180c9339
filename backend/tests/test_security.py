import time

from vidshare.core.security import SessionSigner, hash_password, verify_password


def test_hash_is_salted_and_verifiable():
    first = hash_password("correct horse", rounds=4)
    second = hash_password("correct horse", rounds=4)

    assert first != "correct horse"
    assert first != second
    assert verify_password("correct horse", first)
    assert verify_password("correct horse", second)
    assert not verify_password("wrong horse", first)


def test_malformed_hash_never_verifies():
    assert not verify_password("anything", "not-a-bcrypt-hash")


def test_session_token_carries_claims():
    signer = SessionSigner("secret", max_age_seconds=60)
    token = signer.issue({"id": "abc123", "email": "a@example.com"})

    claims = signer.verify(token)
    assert claims["id"] == "abc123"
    assert claims["email"] == "a@example.com"


def test_session_expiry_is_fixed_at_signing_time():
    signer = SessionSigner("secret", max_age_seconds=3600)
    before = int(time.time())
    token = signer.issue({"id": "abc123"})
    after = int(time.time())

    expires = signer.verify(token)["expires"]
    assert before + 3600 <= expires <= after + 3600
    assert signer.verify(token)["expires"] == expires


def test_session_token_rejects_tampering_and_foreign_keys():
    signer = SessionSigner("secret", max_age_seconds=60)
    token = signer.issue({"id": "abc123"})

    assert signer.verify(token[:-2] + "xx") is None
    assert SessionSigner("other-secret", max_age_seconds=60).verify(token) is None
    assert signer.verify(None) is None
    assert signer.verify("") is None


def test_session_token_expires():
    signer = SessionSigner("secret", max_age_seconds=-1)
    assert signer.verify(signer.issue({"id": "abc123"})) is None


def test_session_token_requires_user_id():
    signer = SessionSigner("secret", max_age_seconds=60)
    assert signer.verify(signer.issue({"email": "a@example.com"})) is None
