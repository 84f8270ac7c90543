from fintrack.domains.identity.schemas import (
    PasswordChange,
    ProfileUpdate,
    UserDeletion,
    UserLogin,
    UserRegistration,
)
from fintrack.domains.identity.services import IdentityService

__all__ = [
    "UserRegistration",
    "UserLogin",
    "PasswordChange",
    "ProfileUpdate",
    "UserDeletion",
    "IdentityService"
]
