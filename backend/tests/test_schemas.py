import pytest
from pydantic import ValidationError

from catalog.schemas.user import Identity, SignupRequest


@pytest.mark.parametrize("email", [
    "not-an-email",
    "a@.",
    "a@b.",
    "a@@b.c",
    "a@b..c",
    "<script>@x.y",
    "alice@",
    "@example.com",
])
def test_signup_rejects_malformed_email(email):
    with pytest.raises(ValidationError):
        SignupRequest(username="alice", email=email, password="pw123")


def test_signup_lowercases_email():
    signup = SignupRequest(username="alice", email="Alice@Example.COM", password="pw123")
    assert signup.email == "alice@example.com"


def test_signup_rejects_email_longer_than_column():
    with pytest.raises(ValidationError):
        SignupRequest(username="alice", email="a@" + "b" * 60 + "." + "c" * 40 + ".com", password="pw123")


def test_identity_has_role():
    identity = Identity(id=1, username="alice", email="a@x.com", roles=["ROLE_USER"])
    assert identity.has_role("ROLE_USER")
    assert not identity.has_role("ROLE_ADMIN")
