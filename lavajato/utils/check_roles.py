from fastapi import Depends, HTTPException, status
from lavajato.constants.permissions import can_access
from lavajato.utils.get_user import get_current_user
from lavajato.utils.logger import get_logger
from lavajato.models.users.user_models import User

logger = get_logger("auth.permissions")


def require_permission(permission: str):
    async def permission_checker(user: User = Depends(get_current_user)):
        if not can_access(user.role, permission):
            logger.warning(
                "Permission denied",
                extra={"user_id": user.id, "role": user.role, "permission": permission},
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Permission denied"
            )
        return user
    return permission_checker
