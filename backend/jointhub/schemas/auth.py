"""
Pydantic schemas for authentication endpoints.
"""
from pydantic import BaseModel

class Credentials(BaseModel):
    """
    Request model for both register and login.
    Blank values are rejected by the credential store, not here, so both
    endpoints report them the same way.
    """
    username: str
    password: str  # Plain text, hashed server-side

class RegisterResponse(BaseModel):
    message: str

class LoginResponse(BaseModel):
    """Token for the Authorization header plus the name to display."""
    token: str
    username: str
