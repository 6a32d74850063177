"""Upload notification template: context -> (subject, HTML body) via Jinja."""

from __future__ import annotations

from jinja2 import Environment, Template

_SUBJECT_TEMPLATE = "Upload abgeschlossen - Vorgang #{{ process_number }}"

_BODY_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #333; text-align: center;">Upload erfolgreich abgeschlossen</h1>
  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h2 style="color: #28a745; margin-top: 0;">Vorgang #{{ process_number }}</h2>
    <p><strong>Kategorie:</strong> {{ category_name }}</p>
    <p><strong>Anzahl Dateien:</strong> {{ file_count }}</p>
    {% if note %}<p><strong>Notiz:</strong> {{ note }}</p>{% endif %}
    <p><strong>Zeitpunkt:</strong> {{ timestamp }}</p>
  </div>
  <div style="background-color: #e9ecef; padding: 15px; border-radius: 8px; margin: 20px 0;">
    <p style="margin: 0; color: #6c757d; font-size: 14px;">
      Diese E-Mail wurde automatisch generiert, um Sie über den erfolgreichen Upload zu informieren.
      Ihre Dateien wurden sicher in unserem System gespeichert.
    </p>
  </div>
</div>
"""


class UploadNotificationRenderer:
    """Renders the post-upload e-mail. Free text is autoescaped by Jinja."""

    def __init__(
        self,
        subject_template: str = _SUBJECT_TEMPLATE,
        body_template: str = _BODY_TEMPLATE,
    ) -> None:
        self._env = Environment(autoescape=True)
        self._subject: Template = self._env.from_string(subject_template)
        self._body: Template = self._env.from_string(body_template)

    def render(
        self,
        *,
        process_number: int,
        category_name: str,
        file_count: int,
        timestamp: str,
        note: str | None = None,
    ) -> tuple[str, str]:
        """Return (subject, html)."""
        ctx = {
            "process_number": process_number,
            "category_name": category_name,
            "file_count": file_count,
            "note": note or None,
            "timestamp": timestamp,
        }
        return self._subject.render(**ctx), self._body.render(**ctx)
