import pytest

from vidshare.core.database import ConnectionCache
from vidshare.core.exceptions import AuthenticationError, BadRequestError
from vidshare.services.auth import CredentialVerifier
from vidshare.services.users import UserRepository


@pytest.fixture
async def registered(cache):
    db = await cache.acquire()
    return await UserRepository(db).create("member@example.com", "open-sesame")


async def test_valid_credentials_return_identity(cache, registered):
    identity = await CredentialVerifier(cache).authenticate("member@example.com", "open-sesame")

    assert identity.id == registered.id
    assert identity.email == "member@example.com"
    assert not hasattr(identity, "password")


@pytest.mark.parametrize(
    "email,password",
    [
        ("member@example.com", "wrong-password"),
        ("nobody@example.com", "open-sesame"),
        ("MEMBER@example.com", "open-sesame"),
    ],
)
async def test_failures_are_indistinguishable(cache, registered, email, password):
    with pytest.raises(AuthenticationError) as excinfo:
        await CredentialVerifier(cache).authenticate(email, password)

    assert type(excinfo.value) is AuthenticationError
    assert excinfo.value.detail == "Failed to log in"


@pytest.mark.parametrize("email,password", [("", "pw"), ("a@example.com", ""), (None, None)])
async def test_missing_credentials_rejected_before_lookup(email, password):
    async def connect():
        raise AssertionError("should not connect")

    with pytest.raises(BadRequestError) as excinfo:
        await CredentialVerifier(ConnectionCache(connect)).authenticate(email, password)
    assert excinfo.value.detail == "Missing email or password"


async def test_connection_failure_is_reported_as_login_failure():
    async def connect():
        raise ConnectionRefusedError("mongo down")

    with pytest.raises(AuthenticationError) as excinfo:
        await CredentialVerifier(ConnectionCache(connect)).authenticate("a@example.com", "pw")
    assert excinfo.value.detail == "Failed to log in"


@pytest.mark.parametrize(
    "document",
    [
        {"email": "broken@example.com", "password": None},
        {"email": "broken@example.com"},
    ],
)
async def test_malformed_user_record_is_a_login_failure(cache, document):
    db = await cache.acquire()
    await db["users"].insert_one(document)

    with pytest.raises(AuthenticationError) as excinfo:
        await CredentialVerifier(cache).authenticate("broken@example.com", "whatever")

    assert type(excinfo.value) is AuthenticationError
    assert excinfo.value.detail == "Failed to log in"
