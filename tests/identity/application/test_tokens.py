from types import SimpleNamespace

import pytest
from identity.auth.dependencies import bearer_token
from identity.auth.tokens import issue_token, resolve_principal
from jose import jwt
from shared.errors import Unauthenticated
from shared.principal import Role


@pytest.fixture()
def seller_user():
    return SimpleNamespace(id="user-042", role="seller", email="sal@example.com", full_name="Sal Seller")


class TestTokens:
    def test_round_trip_claims(self, seller_user):
        principal = resolve_principal(issue_token(seller_user))

        assert principal.user_id == "user-042"
        assert principal.role == Role.SELLER
        assert principal.email == "sal@example.com"
        assert principal.full_name == "Sal Seller"

    def test_registered_user_token(self, registered_buyer):
        principal = resolve_principal(issue_token(registered_buyer))
        assert principal == registered_buyer.to_principal()

    def test_missing_token(self):
        with pytest.raises(Unauthenticated) as exc:
            resolve_principal(None)
        assert exc.value.message == "Access token required"

    def test_expired_token(self, seller_user):
        token = issue_token(seller_user, expires_minutes=-1)
        with pytest.raises(Unauthenticated) as exc:
            resolve_principal(token)
        assert exc.value.message == "Token has expired"

    def test_tampered_token(self, seller_user):
        token = issue_token(seller_user)
        forged = jwt.encode(jwt.get_unverified_claims(token) | {"role": "buyer"}, "wrong-secret", algorithm="HS256")
        with pytest.raises(Unauthenticated) as exc:
            resolve_principal(forged)
        assert exc.value.message == "Invalid token"

    def test_unknown_role_claim(self, seller_user):
        seller_user.role = "admin"
        with pytest.raises(Unauthenticated):
            resolve_principal(issue_token(seller_user))


class TestBearerToken:
    def test_extracts_token(self):
        assert bearer_token("Bearer abc.def") == "abc.def"

    def test_missing_header(self):
        assert bearer_token(None) is None

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Token abc"])
    def test_malformed_header(self, header):
        with pytest.raises(Unauthenticated):
            bearer_token(header)
