"""Chirp Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class ChirpSchema(Schema):
    id = fields.UUID(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
    body = fields.String(required=True)
    user_id = fields.UUID(required=True)


class ChirpCreateSchema(Schema):
    """Input payload for posting a chirp. The author comes from the token."""

    class Meta:
        unknown = EXCLUDE

    body = fields.String(required=True, validate=validate.Length(min=1))


class ChirpListQuerySchema(Schema):
    """Query-string filters for listing chirps."""

    class Meta:
        unknown = EXCLUDE

    author_id = fields.UUID(load_default=None)
    sort = fields.String(load_default="asc", validate=validate.OneOf(["asc", "desc"]))
