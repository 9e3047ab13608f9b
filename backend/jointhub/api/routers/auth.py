from fastapi import APIRouter, Depends, status

from jointhub.api.deps import require_db
from jointhub.core.security import issue_token
from jointhub.schemas.auth import Credentials, LoginResponse, RegisterResponse
from jointhub.services import credentials

router = APIRouter(prefix="/auth", tags=["auth"], dependencies=[Depends(require_db)])

@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
async def register(body: Credentials):
    """
    Register a new user account.

    Errors:
        400 INVALID_INPUT: username or password blank
        400 USERNAME_EXISTS: username already taken
        503 DB_DISCONNECTED: datastore unreachable
    """
    await credentials.register(body.username, body.password)
    return {"message": "User registered"}

@router.post("/login", response_model=LoginResponse)
async def login(body: Credentials):
    """
    Authenticate and issue a bearer token.

    Unknown usernames and wrong passwords both answer
    401 AUTH_INVALID_CREDENTIALS with the same body.
    """
    identity = await credentials.verify(body.username, body.password)
    return {"token": issue_token(identity), "username": identity.username}
