"""User Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserSchema(Schema):
    """Serialized representation of a user. Never includes the hash."""

    id = fields.UUID(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
    email = fields.Email(required=True)
    is_chirpy_red = fields.Boolean(required=True)


class UserCredentialsSchema(Schema):
    """Email and password used for registration and credential updates."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
