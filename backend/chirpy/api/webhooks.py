"""Inbound billing webhooks."""

from __future__ import annotations

import logging

from flask import Blueprint, request

from chirpy.api.deps import empty_response, require_api_key, timing
from chirpy.schemas import USER_UPGRADED, WebhookEventSchema
from chirpy.services.users.service import UserService

log = logging.getLogger(__name__)

bp = Blueprint("webhooks", __name__, url_prefix="/polka")

event_schema = WebhookEventSchema()


@bp.post("/webhooks")
@require_api_key("POLKA_KEY")
@timing
def polka_webhook():
    """Apply a membership event. Unhandled event types are acknowledged."""

    payload = event_schema.load(request.get_json(silent=True) or {})
    if payload["event"] != USER_UPGRADED:
        log.info("webhook.ignored", extra={"event": payload["event"]})
        return empty_response()

    UserService().upgrade_to_red(payload["data"]["user_id"])
    return empty_response()
