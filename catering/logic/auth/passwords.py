"""Password policy and salted hashing."""
import re
from typing import List

from passlib.context import CryptContext

from catering.utilities.constants import PASSWORD_MIN_LENGTH

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_SPECIAL = re.compile(r'[!@#$%^&*()_+\-=\[\]{};\':"\\|,.<>/?]')


def password_errors(password: str) -> List[str]:
    """Return every policy rule the password breaks (empty list when it is acceptable)."""
    errors = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f'Password must be at least {PASSWORD_MIN_LENGTH} characters long')
    if not re.search(r'[A-Z]', password):
        errors.append('Password must contain at least one uppercase letter')
    if not re.search(r'[a-z]', password):
        errors.append('Password must contain at least one lowercase letter')
    if not re.search(r'\d', password):
        errors.append('Password must contain at least one number')
    if not _SPECIAL.search(password):
        errors.append('Password must contain at least one special character')
    return errors


def hash_password(password: str) -> str:
    return str(pwd_context.hash(password))


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bool(pwd_context.verify(password, hashed_password))
    except (TypeError, ValueError):
        # unrecognised or corrupt hash
        return False
