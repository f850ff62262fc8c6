from enum import Enum


class ActivityCode(str, Enum):
    # ---------------- AUTH ----------------
    REGISTER_CAR_WASH = "REGISTER_CAR_WASH"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"

    # ---------------- TEAM ----------------
    CREATE_TEAM_MEMBER = "CREATE_TEAM_MEMBER"
    UPDATE_TEAM_MEMBER = "UPDATE_TEAM_MEMBER"

    # ---------------- CUSTOMERS / VEHICLES ----------------
    CREATE_CUSTOMER = "CREATE_CUSTOMER"
    UPDATE_CUSTOMER = "UPDATE_CUSTOMER"
    REDEEM_LOYALTY = "REDEEM_LOYALTY"
    CREATE_VEHICLE = "CREATE_VEHICLE"

    # ---------------- CATALOGUE / INVENTORY ----------------
    CREATE_SERVICE = "CREATE_SERVICE"
    UPDATE_SERVICE = "UPDATE_SERVICE"
    CREATE_PRODUCT = "CREATE_PRODUCT"
    ADJUST_STOCK = "ADJUST_STOCK"

    # ---------------- APPOINTMENTS ----------------
    CREATE_APPOINTMENT = "CREATE_APPOINTMENT"
    UPDATE_APPOINTMENT_STATUS = "UPDATE_APPOINTMENT_STATUS"

    # ---------------- SERVICE ORDERS ----------------
    CREATE_ORDER = "CREATE_ORDER"
    UPDATE_ORDER_STATUS = "UPDATE_ORDER_STATUS"
    DELETE_ORDER = "DELETE_ORDER"
