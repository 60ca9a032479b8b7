"""
Tests para backend/app/services/email_content.py
"""
from dataclasses import replace

from backend.app.services.email_content import (
    CONFIRMATION_SUBJECT,
    build_business_notification,
    build_customer_confirmation,
    message_to_html,
)
from backend.app.services.validate import validate_contact_payload


def _record(submission):
    return validate_contact_payload(submission).record


class TestBusinessNotification:
    """Tests para build_business_notification."""

    def test_subject_has_website_prefix(self, valid_submission):
        content = build_business_notification(_record(valid_submission))
        assert content.subject == "[Website] Offerte APK"

    def test_text_lists_every_field(self, valid_submission):
        text = build_business_notification(_record(valid_submission)).text
        assert text.startswith("Nieuwe contactaanvraag\n")
        assert "Voornaam: Jan" in text
        assert "Achternaam: de Vries" in text
        assert "Bedrijfsnaam/Particulier: particulier" in text
        assert "Kenteken: AB-12-CD (raw: AB12CD)" in text
        assert "Chassisnummer (VIN): WVWZZZ1JZXW000001" in text
        assert "Telefoon: 06 12345678" in text
        assert "E-mail: jan@example.nl" in text
        assert "Onderwerp: Offerte APK" in text

    def test_text_keeps_message_line_breaks(self, valid_submission):
        text = build_business_notification(_record(valid_submission)).text
        assert text.endswith("\n\nGraag een offerte.\nAuto maakt geluid bij remmen.")

    def test_html_converts_line_breaks(self, valid_submission):
        html = build_business_notification(_record(valid_submission)).html
        assert "Graag een offerte.<br/>Auto maakt geluid bij remmen." in html
        assert "<strong>Kenteken</strong>" in html
        assert "AB-12-CD" in html and "(raw: AB12CD)" in html

    def test_html_escapes_user_input(self, valid_submission):
        valid_submission["message"] = "<script>alert(1)</script>\nok"
        valid_submission["company"] = 'Garage "A&B"'
        html = build_business_notification(_record(valid_submission)).html
        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;<br/>ok" in html
        assert "Garage &#34;A&amp;B&#34;" in html

    def test_empty_message_still_renders(self, valid_submission):
        record = replace(_record(valid_submission), message="")
        content = build_business_notification(record)
        assert content.text.endswith("Onderwerp: Offerte APK\n\n")
        assert "<td><strong>Bericht</strong></td><td></td>" in content.html


class TestCustomerConfirmation:
    """Tests para build_customer_confirmation."""

    def test_addressed_to_full_name(self, valid_submission):
        content = build_customer_confirmation(_record(valid_submission))
        assert content.subject == CONFIRMATION_SUBJECT
        assert content.text.startswith("Beste Jan de Vries,")
        assert "<p>Beste Jan de Vries,</p>" in content.html

    def test_does_not_repeat_vehicle_details(self, valid_submission):
        content = build_customer_confirmation(_record(valid_submission))
        for fragment in ("AB-12-CD", "AB12CD", "WVWZZZ1JZXW000001", "Graag een offerte"):
            assert fragment not in content.text
            assert fragment not in content.html

    def test_signed_with_business_name(self, valid_submission):
        content = build_customer_confirmation(_record(valid_submission), business_name="Garage Noord")
        assert content.text.endswith("Met vriendelijke groet,\nGarage Noord")
        assert "Garage Noord</p>" in content.html


def test_message_to_html_handles_windows_line_endings():
    assert message_to_html("a\r\nb\rc") == "a<br/>b<br/>c"
