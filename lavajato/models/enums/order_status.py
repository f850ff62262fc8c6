import enum


class OrderStatus(str, enum.Enum):
    AWAITING = "AWAITING"
    WASHING = "WASHING"
    FINISHING = "FINISHING"
    READY = "READY"
    DELIVERED = "DELIVERED"
