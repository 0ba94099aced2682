"""User registration and login — command, handler and operations."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain
from shared.errors import InvalidArgument, NotFound, Unauthenticated
from shared.logging import get_logger
from shared.principal import Principal

from identity.auth.passwords import hash_password, verify_password
from identity.domain import identity
from identity.shared.email import EmailAddress
from identity.user.user import User, UserRole

logger = get_logger(__name__)

DEFAULT_PASSWORD_MIN_LENGTH = 6


@identity.command(part_of="User")
class RegisterUser:
    """Create a buyer or seller account. Carries the password hash, never the password."""

    email: String(required=True, max_length=254, sanitize=False)
    password_hash: String(required=True, max_length=255)
    role: String(required=True, choices=UserRole)
    full_name: String(required=True, max_length=255, sanitize=False)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise InvalidArgument("User with this email already exists", field="email")

        user = User.register(
            email=command.email,
            password_hash=command.password_hash,
            role=command.role,
            full_name=command.full_name,
        )
        repo.add(user)
        return str(user.id)


def _password_min_length():
    custom = current_domain.config.get("custom") or {}
    return int(custom.get("PASSWORD_MIN_LENGTH", DEFAULT_PASSWORD_MIN_LENGTH))


def register_user(email, password, role, full_name) -> User:
    """Validate the registration form and create the account.

    Raises:
        InvalidArgument: a field is missing, the role is not buyer or seller,
            the email is malformed or already taken, or the password is too short.
    """
    missing = [
        name
        for name, value in (("email", email), ("password", password), ("userType", role), ("fullName", full_name))
        if not value or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise InvalidArgument("All fields are required", missing=missing)

    try:
        role = UserRole(str(role).strip().lower()).value
    except ValueError:
        raise InvalidArgument("User type must be buyer or seller", field="userType")

    try:
        email = EmailAddress.normalize(email)
    except ValidationError:
        raise InvalidArgument("Invalid email address", field="email")

    if len(password) < _password_min_length():
        raise InvalidArgument(
            f"Password must be at least {_password_min_length()} characters",
            field="password",
        )

    user_id = current_domain.process(
        RegisterUser(
            email=email,
            password_hash=hash_password(password),
            role=role,
            full_name=full_name.strip(),
        ),
        asynchronous=False,
    )
    logger.info("user_registered", user_id=user_id, role=role)
    return current_domain.repository_for(User).get(user_id)


def authenticate(email, password) -> User:
    """Return the user whose credentials match.

    The error does not say which of email or password was wrong.
    """
    if not email or not password:
        raise InvalidArgument("Email and password are required")

    user = current_domain.repository_for(User).find_by_email(str(email).strip().lower())
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("login_failed")
        raise Unauthenticated("Invalid email or password")
    return user


def user_for_principal(principal: Principal) -> User:
    try:
        return current_domain.repository_for(User).get(principal.user_id)
    except ObjectNotFoundError:
        raise NotFound("User not found")
