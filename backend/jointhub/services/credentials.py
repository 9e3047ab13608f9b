"""
Credential store: user registration and password verification.
"""
from tortoise.exceptions import IntegrityError

from jointhub.core.errors import DuplicateUser, InvalidCredentials, InvalidInput
from jointhub.core.security import Identity, hash_password, verify_password
from jointhub.models.user import User


async def register(username: str, password: str) -> User:
    """
    Create an account.

    Raises:
        InvalidInput: username or password is blank
        DuplicateUser: the username is taken
    """
    username = (username or "").strip()
    if not username or not password:
        raise InvalidInput("username/password required")
    if await User.filter(username=username).exists():
        raise DuplicateUser()
    try:
        return await User.create(username=username, password_hash=hash_password(password))
    except IntegrityError:
        # Lost a race with a concurrent registration; the unique index decides
        raise DuplicateUser()


async def verify(username: str, password: str) -> Identity:
    """
    Check a username/password pair.

    Raises:
        InvalidCredentials: for an unknown user and a wrong password alike
    """
    user = await User.get_or_none(username=(username or "").strip())
    if not user or not password or not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return Identity(id=str(user.id), username=user.username)
