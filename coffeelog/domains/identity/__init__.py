from coffeelog.domains.identity.entities import User
from coffeelog.domains.identity.schemas import (
    UserCreate, UserLogin, UserResponse, LoginResponse, SessionResponse
)
from coffeelog.domains.identity.services import IdentityService

__all__ = [
    "User",
    "UserCreate", "UserLogin", "UserResponse", "LoginResponse", "SessionResponse",
    "IdentityService"
]
