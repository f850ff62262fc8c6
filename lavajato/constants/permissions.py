from lavajato.models.enums.user_role import UserRole

ADMIN = UserRole.ADMIN.value
MANAGER = UserRole.MANAGER.value
ATTENDANT = UserRole.ATTENDANT.value
SENIOR_WASHER = UserRole.SENIOR_WASHER.value
JUNIOR_WASHER = UserRole.JUNIOR_WASHER.value

ALL_ROLES = {ADMIN, MANAGER, ATTENDANT, SENIOR_WASHER, JUNIOR_WASHER}

PERMISSIONS: dict[str, set[str]] = {
    # Team
    "TEAM_VIEW": {ADMIN, MANAGER},
    "TEAM_MANAGE": {ADMIN},

    # Kanban: everybody on the floor can move cars
    "KANBAN_MOVE": ALL_ROLES,

    # Appointments
    "APPOINTMENTS_VIEW": ALL_ROLES,
    "APPOINTMENTS_MANAGE": {ADMIN, MANAGER, ATTENDANT, SENIOR_WASHER},

    # Service orders
    "ORDERS_VIEW": ALL_ROLES,
    "ORDERS_CREATE": {ADMIN, MANAGER, ATTENDANT, SENIOR_WASHER},
    "ORDERS_DELETE": {ADMIN, MANAGER},

    # Customers and vehicles
    "CUSTOMERS_MANAGE": {ADMIN, MANAGER, ATTENDANT},
    "LOYALTY_REDEEM": {ADMIN, MANAGER, ATTENDANT},
    "VEHICLES_MANAGE": {ADMIN, MANAGER, ATTENDANT, SENIOR_WASHER},

    # Catalogue and inventory
    "SERVICES_MANAGE": {ADMIN, MANAGER},
    "STOCK_MANAGE": {ADMIN, MANAGER},

    # Reports
    "DASHBOARD_VIEW": {ADMIN, MANAGER},

    # Audit trail
    "ACTIVITY_VIEW": {ADMIN, MANAGER},

    # Platform content
    "SEO_MANAGE": {ADMIN},
}


def can_access(role: str, permission: str) -> bool:
    return role.lower() in PERMISSIONS.get(permission, set())
