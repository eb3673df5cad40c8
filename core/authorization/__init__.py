from .privileges import Privilege, PrivilegeType, UserRole
from .service import AuthorizationService

__all__ = ["AuthorizationService", "Privilege", "PrivilegeType", "UserRole"]
