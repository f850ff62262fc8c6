from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from urllib.parse import quote, unquote

import pytest

from lavajato.core.exceptions import NotificationNotAllowed
from lavajato.models.enums.order_status import OrderStatus
from lavajato.services.orders.notification_service import (
    build_order_summary_message,
    build_ready_message,
    build_whatsapp_link,
    first_name,
    format_brl,
    ready_notification_link,
    summary_notification_link,
)


def make_order(status=OrderStatus.READY, phone="(11) 98765-4321", name="Maria Aparecida Souza"):
    return SimpleNamespace(
        code=7,
        status=status,
        total=Decimal("1234.50"),
        entered_at=datetime(2026, 3, 14, 9, 30),
        customer=SimpleNamespace(name=name, phone=phone),
        vehicle=SimpleNamespace(plate="ABC1D23", model="Onix", color="Branco"),
        items=[
            SimpleNamespace(service_name="Lavagem completa"),
            SimpleNamespace(service_name="Cera"),
        ],
    )


class TestReadyMessage:
    def test_contains_first_name_and_plate(self):
        message = build_ready_message(make_order())

        assert "Maria" in message
        assert "Aparecida" not in message
        assert "ABC1D23" in message

    def test_first_name_is_text_before_first_space(self):
        assert first_name("  José Carlos ") == "José"
        assert first_name("Ana") == "Ana"

    def test_link_uses_country_code_and_digits_only(self):
        url, message = ready_notification_link(make_order())

        assert url.startswith("https://wa.me/5511987654321?text=")
        assert url.endswith(quote(message, safe=""))
        assert "Maria" in unquote(url)
        assert "ABC1D23" in url

    @pytest.mark.parametrize(
        "status",
        [OrderStatus.AWAITING, OrderStatus.WASHING, OrderStatus.FINISHING, OrderStatus.DELIVERED],
    )
    def test_only_ready_orders_can_be_notified(self, status):
        with pytest.raises(NotificationNotAllowed):
            ready_notification_link(make_order(status=status))

    def test_missing_phone_is_rejected(self):
        with pytest.raises(NotificationNotAllowed):
            ready_notification_link(make_order(phone=None))


class TestSummaryMessage:
    def test_summary_lists_services_and_total(self):
        message = build_order_summary_message(make_order(), "Lava Centro")

        assert "#7" in message
        assert "• Lavagem completa" in message
        assert "• Cera" in message
        assert "R$ 1.234,50" in message
        assert "14/03/2026" in message
        assert message.endswith("_Lava Centro_")

    def test_summary_allowed_in_any_status(self):
        url, _ = summary_notification_link(make_order(status=OrderStatus.WASHING))
        assert url.startswith("https://wa.me/55")


def test_format_brl():
    assert format_brl(Decimal("45")) == "R$ 45,00"
    assert format_brl(1000000.5) == "R$ 1.000.000,50"


def test_whatsapp_link_custom_country_code():
    assert build_whatsapp_link("+1 (555) 010-0000", "hi", country_code="") == "https://wa.me/15550100000?text=hi"
