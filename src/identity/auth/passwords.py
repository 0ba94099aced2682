"""Password hashing with passlib.

PBKDF2-SHA256 is used rather than bcrypt: passlib's bcrypt backend is not
compatible with current releases of the ``bcrypt`` package.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    return pwd_context.verify(password, password_hash)
