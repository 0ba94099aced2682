"""EmailAddress value object for validated account emails."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


@identity.value_object
class EmailAddress:
    """A structurally valid, lower-cased email address.

    Exactly one @, non-empty local and domain parts, a dotted domain whose
    labels do not start or end with a hyphen, no consecutive dots and none
    of the characters that would need quoting.
    """

    address: String(required=True, max_length=254, sanitize=False)

    @classmethod
    def normalize(cls, raw):
        """Strip and lower-case ``raw`` and return it once it validates."""
        return cls(address=(raw or "").strip().lower()).address

    @invariant.post
    def verify_email_address(self):
        email = self.address

        def reject():
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            reject()

        local_part, domain_part = email.split("@", 1)
        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            reject()
        if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            reject()
        if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
            reject()
        if ".." in email or any(ch in email for ch in _FORBIDDEN):
            reject()
