"""
Customer notifications for service orders.

Nothing is sent from the server: these helpers only build a wa.me deep link
that a staff member opens and confirms in their own WhatsApp.
"""

import re
from urllib.parse import quote

from lavajato.core.exceptions import NotificationNotAllowed
from lavajato.models.enums.order_status import OrderStatus

WHATSAPP_BASE_URL = "https://wa.me/"
DEFAULT_COUNTRY_CODE = "55"

STATUS_LABELS = {
    OrderStatus.AWAITING: "Aguardando",
    OrderStatus.WASHING: "Em lavagem",
    OrderStatus.FINISHING: "Finalizando",
    OrderStatus.READY: "Pronto para retirada",
    OrderStatus.DELIVERED: "Entregue",
}


def first_name(full_name: str) -> str:
    return (full_name or "").strip().split(" ")[0]


def digits_only(phone: str) -> str:
    return re.sub(r"\D", "", phone or "")


def format_brl(value) -> str:
    formatted = f"{float(value):,.2f}"
    # 1,234.50 -> 1.234,50
    return "R$ " + formatted.replace(",", "_").replace(".", ",").replace("_", ".")


def vehicle_label(vehicle) -> str:
    return f"{vehicle.model} {vehicle.color or ''}".strip()


def build_whatsapp_link(phone: str, text: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    digits = digits_only(phone)
    if not digits:
        raise NotificationNotAllowed("Customer has no phone number")
    return f"{WHATSAPP_BASE_URL}{country_code}{digits}?text={quote(text, safe='')}"


def build_ready_message(order) -> str:
    return (
        f"✅ Olá {first_name(order.customer.name)}! "
        f"Seu veículo {vehicle_label(order.vehicle)}, placa {order.vehicle.plate}, "
        "está PRONTO! Pode vir buscar quando quiser. Obrigado pela preferência! 🙏"
    )


def ready_notification_link(order, country_code: str = DEFAULT_COUNTRY_CODE) -> tuple[str, str]:
    """Return (url, message) for an order waiting for pick-up."""
    if order.status != OrderStatus.READY:
        raise NotificationNotAllowed(
            f"Customer can only be notified when the order is READY (current: {OrderStatus(order.status).value})"
        )

    message = build_ready_message(order)
    return build_whatsapp_link(order.customer.phone, message, country_code), message


def build_order_summary_message(order, car_wash_name: str | None = None) -> str:
    services = "\n".join(f"• {item.service_name}" for item in order.items)
    entered = order.entered_at.strftime("%d/%m/%Y às %H:%M")

    lines = [
        f"🚗 *ORDEM DE SERVIÇO #{order.code}*",
        "",
        f"📅 *Data:* {entered}",
        "",
        f"👤 *Cliente:* {order.customer.name}",
        f"🚘 *Veículo:* {order.vehicle.model}",
        f"🔖 *Placa:* {order.vehicle.plate}",
    ]
    if order.vehicle.color:
        lines.append(f"🎨 *Cor:* {order.vehicle.color}")

    lines += [
        "",
        "🧽 *Serviços:*",
        services,
        "",
        f"💰 *Total:* {format_brl(order.total)}",
        "",
        f"✅ *Status:* {STATUS_LABELS[OrderStatus(order.status)]}",
        "",
        f"_{car_wash_name or 'Lava Jato'}_",
    ]
    return "\n".join(lines)


def summary_notification_link(
    order,
    car_wash_name: str | None = None,
    country_code: str = DEFAULT_COUNTRY_CODE,
) -> tuple[str, str]:
    message = build_order_summary_message(order, car_wash_name)
    return build_whatsapp_link(order.customer.phone, message, country_code), message
