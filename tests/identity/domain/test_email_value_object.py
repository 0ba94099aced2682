import pytest
from identity.shared.email import EmailAddress
from protean.exceptions import ValidationError


class TestEmailAddress:
    @pytest.mark.parametrize(
        "address",
        ["jane@example.com", "jane.doe+shop@mail.example.co.uk", "j_d-1@sub-domain.example.org"],
    )
    def test_valid_addresses(self, address):
        assert EmailAddress(address=address).address == address

    @pytest.mark.parametrize(
        "address",
        [
            "plainaddress",
            "two@@example.com",
            "a@b@example.com",
            "@example.com",
            "jane@",
            "jane@localhost",
            "jane@.example.com",
            "jane@example.com.",
            ".jane@example.com",
            "jane.@example.com",
            "jane..doe@example.com",
            "jane@-example.com",
            "jane@example-.com",
            "jane doe@example.com",
            "jane;doe@example.com",
        ],
    )
    def test_invalid_addresses(self, address):
        with pytest.raises(ValidationError):
            EmailAddress(address=address)

    def test_normalize_strips_and_lowercases(self):
        assert EmailAddress.normalize("  Jane.Doe@Example.COM ") == "jane.doe@example.com"

    def test_normalize_rejects_empty(self):
        with pytest.raises(ValidationError):
            EmailAddress.normalize(None)
