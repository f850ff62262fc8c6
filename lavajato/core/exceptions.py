from fastapi import HTTPException
from lavajato.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class InvalidStatusTransition(AppException):
    def __init__(self, current, target):
        current_value = getattr(current, "value", current)
        target_value = getattr(target, "value", target)
        super().__init__(
            400,
            f"Cannot change status from {current_value} to {target_value}",
            ErrorCode.ORDER_INVALID_TRANSITION,
            {"current_status": current_value, "target_status": target_value},
        )
        self.current = current
        self.target = target


class OrderVersionConflict(AppException):
    def __init__(self, order_id: int, expected: int, actual: int):
        super().__init__(
            409,
            "Order was modified by another user. Reload and try again.",
            ErrorCode.ORDER_VERSION_CONFLICT,
            {"order_id": order_id, "requested_version": expected, "current_version": actual},
        )


class NotificationNotAllowed(AppException):
    def __init__(self, message: str):
        super().__init__(400, message, ErrorCode.ORDER_NOTIFICATION_NOT_ALLOWED)
