import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    ATTENDANT = "attendant"
    SENIOR_WASHER = "senior_washer"
    JUNIOR_WASHER = "junior_washer"
