"""Built-in credential extractors for the ``pem`` and ``token`` modes.

Secret field names map to protocol keys as follows:

==========================  =========================  =====================
Secret field                PEM status key             Token status key
==========================  =========================  =====================
``client-certificate-data``  ``clientCertificateData``  --
``client-key-data``          ``clientKeyData``          --
``token``                    --                         ``token``
``expirationTimestamp``      --                         ``expirationTimestamp``
==========================  =========================  =====================

All four fields are stored base64-encoded in the entry.
"""

from __future__ import annotations

from kubepass.auth.base import CredentialExtractor
from kubepass.models import AuthMode, CredentialBundle, PemCredentials, TokenCredentials

CLIENT_CERTIFICATE_KEY = "client-certificate-data"
CLIENT_KEY_KEY = "client-key-data"
TOKEN_KEY = "token"
EXPIRATION_KEY = "expirationTimestamp"


class PemExtractor(CredentialExtractor):
    """Extract a client certificate and key. Both fields are mandatory."""

    @property
    def mode(self) -> AuthMode:
        return AuthMode.PEM

    @property
    def required_fields(self) -> tuple[str, ...]:
        return (CLIENT_CERTIFICATE_KEY, CLIENT_KEY_KEY)

    def build(self, values: dict[str, str]) -> CredentialBundle | None:
        certificate = values[CLIENT_CERTIFICATE_KEY]
        key = values[CLIENT_KEY_KEY]
        if not certificate or not key:
            return None
        return PemCredentials(client_certificate_data=certificate, client_key_data=key)


class TokenExtractor(CredentialExtractor):
    """Extract a bearer token and its optional expiry.

    Only the token itself is mandatory; a missing ``expirationTimestamp``
    yields an empty string and the Kubernetes client treats the token as
    non-expiring.
    """

    @property
    def mode(self) -> AuthMode:
        return AuthMode.TOKEN

    @property
    def required_fields(self) -> tuple[str, ...]:
        return (TOKEN_KEY, EXPIRATION_KEY)

    def build(self, values: dict[str, str]) -> CredentialBundle | None:
        token = values[TOKEN_KEY]
        if not token:
            return None
        return TokenCredentials(token=token, expiration_timestamp=values[EXPIRATION_KEY])


_EXTRACTORS: dict[AuthMode, CredentialExtractor] = {
    AuthMode.PEM: PemExtractor(),
    AuthMode.TOKEN: TokenExtractor(),
}


def get_extractor(mode: str | AuthMode) -> CredentialExtractor:
    """Return the built-in extractor for *mode*.

    Raises:
        UnknownModeError: If *mode* is not ``pem`` or ``token``.
    """
    return _EXTRACTORS[AuthMode.parse(mode)]


def extract(document: str, mode: str | AuthMode, strict: bool = False) -> CredentialBundle:
    """Extract the credential bundle for *mode* from a decrypted entry.

    Args:
        document: Decrypted password-store entry text.
        mode: ``pem``/``token`` or the corresponding :class:`AuthMode`.
        strict: Use strict ``key:`` matching instead of line prefixes.

    Returns:
        :class:`~kubepass.models.PemCredentials` or
        :class:`~kubepass.models.TokenCredentials`.

    Raises:
        UnknownModeError: If *mode* is not recognised.
        MissingFieldsError: If a mandatory field is absent or empty.
        SecretFormatError: If a field is not valid base64 text.
    """
    return get_extractor(mode).extract(document, strict=strict)
