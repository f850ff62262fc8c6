from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- AUTH / TEAM ----------------
    CAR_WASH_SLUG_EXISTS = "CAR_WASH_SLUG_EXISTS"
    USER_EMAIL_EXISTS = "USER_EMAIL_EXISTS"
    USER_ROLE_INVALID = "USER_ROLE_INVALID"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # ---------------- CUSTOMERS / VEHICLES ----------------
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    CUSTOMER_VERSION_CONFLICT = "CUSTOMER_VERSION_CONFLICT"
    LOYALTY_INSUFFICIENT_POINTS = "LOYALTY_INSUFFICIENT_POINTS"
    VEHICLE_NOT_FOUND = "VEHICLE_NOT_FOUND"
    VEHICLE_PLATE_EXISTS = "VEHICLE_PLATE_EXISTS"

    # ---------------- CATALOGUE / INVENTORY ----------------
    SERVICE_NOT_FOUND = "SERVICE_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"

    # ---------------- APPOINTMENTS ----------------
    APPOINTMENT_NOT_FOUND = "APPOINTMENT_NOT_FOUND"
    APPOINTMENT_INVALID_STATE = "APPOINTMENT_INVALID_STATE"

    # ---------------- SERVICE ORDERS ----------------
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    ORDER_CODE_EXISTS = "ORDER_CODE_EXISTS"
    ORDER_INVALID_TRANSITION = "ORDER_INVALID_TRANSITION"
    ORDER_VERSION_CONFLICT = "ORDER_VERSION_CONFLICT"
    ORDER_NOTIFICATION_NOT_ALLOWED = "ORDER_NOTIFICATION_NOT_ALLOWED"

    # ---------------- SEO ----------------
    SEO_CONTENT_INVALID = "SEO_CONTENT_INVALID"
