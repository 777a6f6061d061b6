from datetime import datetime, timedelta, timezone

from jose import jwt

from app.core.config import settings
from app.routers.auth_deps import bearer_token
from app.schemas.auth import Identity
from app.services import auth as auth_service


def test_missing_token_resolves_to_anonymous():
    identity = auth_service.resolve_identity(None)
    assert identity.authenticated is False
    assert identity.groups == []
    assert identity.actor == "anonymous"


def test_garbage_token_resolves_to_anonymous():
    assert auth_service.resolve_identity("not-a-jwt").authenticated is False


def test_expired_token_resolves_to_anonymous():
    token = auth_service.create_access_token("user-1", groups=["HR_ADMIN"], expires_minutes=-5)
    assert auth_service.resolve_identity(token).authenticated is False


def test_token_signed_with_another_key_is_rejected():
    token = jwt.encode(
        {"sub": "user-1", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "some-other-secret",
        algorithm=settings.auth.algorithm,
    )
    assert auth_service.resolve_identity(token).authenticated is False


def test_token_without_subject_is_rejected():
    token = jwt.encode(
        {settings.auth.groups_claim: ["SUPER_ADMIN"], "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.auth.secret_key,
        algorithm=settings.auth.algorithm,
    )
    assert auth_service.resolve_identity(token).authenticated is False


def test_valid_token_carries_groups_and_profile():
    token = auth_service.create_access_token(
        "user-42", groups=["HR_OFFICER", "HR_ADMIN"], name="Sam Lee", email="sam@acme.io"
    )
    identity = auth_service.resolve_identity(token)
    assert identity.authenticated is True
    assert identity.subject == "user-42"
    assert identity.name == "Sam Lee"
    assert identity.groups == ["HR_OFFICER", "HR_ADMIN"]
    assert identity.actor == "sam@acme.io"


def test_single_string_group_claim_is_accepted():
    token = jwt.encode(
        {"sub": "user-7", settings.auth.groups_claim: "HR_ADMIN",
         "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.auth.secret_key,
        algorithm=settings.auth.algorithm,
    )
    assert auth_service.resolve_identity(token).groups == ["HR_ADMIN"]


def test_role_label_follows_precedence():
    assert Identity(groups=["HR_OFFICER", "SUPER_ADMIN"], authenticated=True).role == "SUPER_ADMIN"
    assert Identity(groups=["HR_OFFICER"], authenticated=True).role == "HR_OFFICER"
    assert Identity(groups=[], authenticated=True).role == "EMPLOYEE"


def test_role_flags():
    identity = Identity(groups=["HR_ADMIN"], authenticated=True)
    assert identity.is_hr_admin is True
    assert identity.is_super_admin is False
    assert identity.is_hr_officer is False


def test_actor_falls_back_to_subject():
    assert Identity(subject="abc-123", authenticated=True).actor == "abc-123"


def test_bearer_token_parsing():
    assert bearer_token("Bearer abc.def") == "abc.def"
    assert bearer_token("bearer abc.def") == "abc.def"
    assert bearer_token("Basic dXNlcjpwYXNz") is None
    assert bearer_token("Bearer ") is None
    assert bearer_token(None) is None


def test_non_string_profile_claims_fall_back_to_defaults():
    """A signed token with odd name/email claims still resolves without raising."""
    token = jwt.encode(
        {"sub": "u1", "name": {"given": "Ana"}, "email": 42,
         settings.auth.groups_claim: ["HR_OFFICER"],
         "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.auth.secret_key,
        algorithm=settings.auth.algorithm,
    )
    identity = auth_service.resolve_identity(token)
    assert identity.authenticated is True
    assert identity.name == "User"
    assert identity.email == ""
    assert identity.actor == "u1"
    assert identity.groups == ["HR_OFFICER"]


def test_session_endpoint_survives_odd_profile_claims(client):
    token = jwt.encode(
        {"sub": "u1", "name": ["A", "B"], "email": {"primary": "a@acme.io"},
         "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.auth.secret_key,
        algorithm=settings.auth.algorithm,
    )
    response = client.get("/api/session", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["authenticated"] is True
