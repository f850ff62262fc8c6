from lavajato.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- AUTH ----------------
    ActivityCode.REGISTER_CAR_WASH:
        "{actor_email} registered car wash {target_name}",

    ActivityCode.LOGIN:
        "{actor_role} ({actor_email}) logged in",

    ActivityCode.LOGOUT:
        "{actor_role} ({actor_email}) logged out",

    # ---------------- TEAM ----------------
    ActivityCode.CREATE_TEAM_MEMBER:
        "{actor_role} ({actor_email}) added {target_email} to the team as {target_role}",

    ActivityCode.UPDATE_TEAM_MEMBER:
        "{actor_role} ({actor_email}) updated team member {target_email}: {changes}",

    # ---------------- CUSTOMERS / VEHICLES ----------------
    ActivityCode.CREATE_CUSTOMER:
        "{actor_role} ({actor_email}) created customer {target_name}",

    ActivityCode.UPDATE_CUSTOMER:
        "{actor_role} ({actor_email}) updated customer {target_name}: {changes}",

    ActivityCode.REDEEM_LOYALTY:
        "{actor_role} ({actor_email}) redeemed {points} loyalty points for {target_name}",

    ActivityCode.CREATE_VEHICLE:
        "{actor_role} ({actor_email}) registered vehicle {plate} for {target_name}",

    # ---------------- CATALOGUE / INVENTORY ----------------
    ActivityCode.CREATE_SERVICE:
        "{actor_role} ({actor_email}) created service {target_name} at {price}",

    ActivityCode.UPDATE_SERVICE:
        "{actor_role} ({actor_email}) updated service {target_name}: {changes}",

    ActivityCode.CREATE_PRODUCT:
        "{actor_role} ({actor_email}) created product {target_name}",

    ActivityCode.ADJUST_STOCK:
        "{actor_role} ({actor_email}) adjusted stock of {target_name} by {delta}{unit} ({reason})",

    # ---------------- APPOINTMENTS ----------------
    ActivityCode.CREATE_APPOINTMENT:
        "{actor_role} ({actor_email}) booked appointment #{target_id} for {target_name}",

    ActivityCode.UPDATE_APPOINTMENT_STATUS:
        "{actor_role} ({actor_email}) changed appointment #{target_id} status {old_status} → {new_status}",

    # ---------------- SERVICE ORDERS ----------------
    ActivityCode.CREATE_ORDER:
        "{actor_role} ({actor_email}) opened service order #{order_code} for {plate}",

    ActivityCode.UPDATE_ORDER_STATUS:
        "{actor_role} ({actor_email}) moved service order #{order_code} {old_status} → {new_status}",

    ActivityCode.DELETE_ORDER:
        "{actor_role} ({actor_email}) deleted service order #{order_code}",
}
