"""Parse ``Authorization`` headers into typed credentials."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from chirpy.services._shared.errors import MalformedCredentialError, MissingCredentialError

AUTHORIZATION_HEADER = "Authorization"


class Scheme(str, Enum):
    """Recognised authorization schemes (case-sensitive on the wire)."""

    BEARER = "Bearer"
    API_KEY = "ApiKey"


@dataclass(frozen=True, slots=True)
class Credential:
    """A scheme tag plus the raw token/key. Transient, never stored."""

    scheme: Scheme
    value: str


class CredentialExtractor:
    """
    Extract Bearer tokens and API keys from request headers.

    The header must be exactly ``"<Scheme> <value>"``: two tokens separated by a
    single space, scheme matched case-sensitively.
    """

    def bearer_token(self, headers: Mapping[str, str]) -> str:
        """
        :raises MissingCredentialError: No ``Authorization`` header.
        :raises MalformedCredentialError: Not ``Bearer <token>``.
        """
        return self._parse(headers, Scheme.BEARER).value

    def api_key(self, headers: Mapping[str, str]) -> str:
        """
        :raises MissingCredentialError: No ``Authorization`` header.
        :raises MalformedCredentialError: Not ``ApiKey <key>``.
        """
        return self._parse(headers, Scheme.API_KEY).value

    def extract(self, headers: Mapping[str, str]) -> Credential:
        """Return the credential under whichever recognised scheme is present."""
        raw = self._raw_header(headers)
        for scheme in Scheme:
            if raw.startswith(f"{scheme.value} "):
                return self._split(raw, scheme)
        raise MalformedCredentialError("Unsupported authorization scheme")

    # ------------------------------------------------------------------ #

    def _parse(self, headers: Mapping[str, str], scheme: Scheme) -> Credential:
        return self._split(self._raw_header(headers), scheme)

    @staticmethod
    def _raw_header(headers: Mapping[str, str]) -> str:
        raw = headers.get(AUTHORIZATION_HEADER)
        if raw is None or raw == "":
            raise MissingCredentialError()
        return raw

    @staticmethod
    def _split(raw: str, scheme: Scheme) -> Credential:
        parts = raw.split(" ")
        if len(parts) != 2 or parts[0] != scheme.value or not parts[1]:
            raise MalformedCredentialError(f"Expected '{scheme.value} <credential>'")
        return Credential(scheme=scheme, value=parts[1])
