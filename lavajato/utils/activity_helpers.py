from sqlalchemy.ext.asyncio import AsyncSession
from lavajato.models.support.activity_models import UserActivity
from lavajato.constants.activity_templates import ACTIVITY_TEMPLATES
from lavajato.constants.activity_codes import ActivityCode


async def emit_activity(
    db: AsyncSession,
    *,
    actor,
    code: ActivityCode,
    **context,
):
    """Queue an audit row on the caller's transaction; the caller commits."""
    template = ACTIVITY_TEMPLATES.get(code)
    if not template:
        raise ValueError(f"No activity template for code {code}")

    context.setdefault("actor_role", actor.role.replace("_", " ").capitalize())
    context.setdefault("actor_email", actor.username)

    try:
        message = template.format(**context)
    except KeyError as e:
        raise ValueError(
            f"Missing activity context key: {e.args[0]} for {code}"
        )

    db.add(
        UserActivity(
            car_wash_id=actor.car_wash_id,
            user_id=actor.id,
            username_snapshot=actor.username,
            activity_code=ActivityCode(code).value,
            order_code=context.get("order_code"),
            message=message,
        )
    )
