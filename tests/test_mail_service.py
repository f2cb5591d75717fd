from datetime import date

from app.services.mail_service import MailService


async def test_disabled_without_smtp_host(monkeypatch):
    service = MailService(host="")

    def fail(*args, **kwargs):
        raise AssertionError("should not deliver")

    monkeypatch.setattr(service, "_deliver", fail)

    assert service.enabled is False
    assert await service.send("jane@example.com", "Hi", "Body") is False


async def test_skips_without_recipient():
    service = MailService(host="smtp.example.com")
    assert await service.send(None, "Hi", "Body") is False


async def test_delivers_through_smtp_when_configured(monkeypatch):
    service = MailService(host="smtp.example.com", sender="noreply@example.com")
    delivered = []
    monkeypatch.setattr(service, "_deliver", lambda to, message: delivered.append((to, message)))

    sent = await service.send_booking_confirmation(
        to_email="jane@example.com",
        customer_name="Jane",
        booking_date=date(2025, 6, 1),
        preferred_time="09:00",
        address="12 Harbour Road",
        service_type="Bin Cleaning",
    )

    assert sent is True
    to, message = delivered[0]
    assert to == "jane@example.com"
    assert message["From"] == "noreply@example.com"
    assert "2025-06-01" in message["Subject"]
