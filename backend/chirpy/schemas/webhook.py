"""Billing webhook payloads."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validates_schema

USER_UPGRADED = "user.upgraded"


class WebhookDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(required=True)


class WebhookEventSchema(Schema):
    """``{"event": "...", "data": {"user_id": "..."}}``.

    ``data`` is only required for events that are acted upon.
    """

    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(WebhookDataSchema, load_default=None)

    @validates_schema
    def _require_data(self, payload, **kwargs):
        if payload.get("event") == USER_UPGRADED and payload.get("data") is None:
            raise ValidationError("Missing data for user.upgraded.", field_name="data")
