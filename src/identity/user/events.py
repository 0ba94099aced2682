"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A buyer or seller account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True, sanitize=False)
    role: String(required=True)
    full_name: String(required=True, sanitize=False)
    registered_at: DateTime(required=True)
