"""Canonical Pydantic models shared across kubepass modules.

The models fall into two groups:

**Credential models** -- built from a decrypted secret and serialised into
the exec-credential response:
    :class:`AuthMode`, :class:`PemCredentials`, :class:`TokenCredentials`
    and :class:`ExecCredential`.

**Configuration models** -- loaded from the user's config directory:
    :class:`KubepassConfig`.

Credential models use Python field names internally and the
protocol-mandated camelCase names as aliases, so ``model_dump(by_alias=True)``
yields exactly the keys the Kubernetes client expects.
"""

from __future__ import annotations

import enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from kubepass.exceptions import UnknownModeError

EXEC_CREDENTIAL_API_VERSION = "client.authentication.k8s.io/v1beta1"
EXEC_CREDENTIAL_KIND = "ExecCredential"


# --- Auth mode ---


class AuthMode(str, enum.Enum):
    """Credential flavour requested by the ``auth`` sub-command."""

    PEM = "pem"
    TOKEN = "token"

    @classmethod
    def parse(cls, value: str | AuthMode) -> AuthMode:
        """Return the mode named by *value*.

        Raises:
            UnknownModeError: If *value* is neither ``pem`` nor ``token``.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownModeError(str(value)) from None


# --- Credential bundles ---


class PemCredentials(BaseModel):
    """Client certificate and private key for TLS client authentication.

    Both values are the decoded PEM text, not base64.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    client_certificate_data: str = Field(
        alias="clientCertificateData",
        min_length=1,
        description="PEM-encoded client certificate",
    )
    client_key_data: str = Field(
        alias="clientKeyData",
        min_length=1,
        description="PEM-encoded private key matching the certificate",
    )

    @property
    def mode(self) -> AuthMode:
        return AuthMode.PEM


class TokenCredentials(BaseModel):
    """Bearer token with an optional RFC 3339 expiry."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    token: str = Field(min_length=1, description="Bearer token")
    expiration_timestamp: str = Field(
        default="",
        alias="expirationTimestamp",
        description="RFC 3339 expiry; empty when the secret carries none",
    )

    @property
    def mode(self) -> AuthMode:
        return AuthMode.TOKEN


CredentialBundle = Union[PemCredentials, TokenCredentials]


class ExecCredential(BaseModel):
    """The ``ExecCredential`` document printed for the Kubernetes client.

    Example::

        ExecCredential(status=TokenCredentials(token="abc123")).model_dump(by_alias=True)
        # {"apiVersion": "client.authentication.k8s.io/v1beta1",
        #  "kind": "ExecCredential",
        #  "status": {"token": "abc123", "expirationTimestamp": ""}}
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    api_version: Literal["client.authentication.k8s.io/v1beta1"] = Field(
        default=EXEC_CREDENTIAL_API_VERSION, alias="apiVersion"
    )
    kind: Literal["ExecCredential"] = EXEC_CREDENTIAL_KIND
    status: CredentialBundle


# --- Configuration ---


class KubepassConfig(BaseModel):
    """Runtime configuration stored as JSON in the config directory.

    Unknown keys are rejected so that typos surface as a
    :class:`~kubepass.exceptions.ConfigError` rather than being ignored.

    Example::

        KubepassConfig(pass_binary="gopass", pass_timeout=30)
    """

    model_config = ConfigDict(extra="forbid")

    pass_binary: str = Field(
        default="pass", min_length=1, description="Password-store executable"
    )
    pass_timeout: float = Field(
        default=10.0, gt=0, description="Seconds to wait for the entry to decrypt"
    )
    password_store_dir: Optional[str] = Field(
        default=None, description="Overrides PASSWORD_STORE_DIR for the pass call"
    )
    strict_keys: bool = Field(
        default=False,
        description="Require the key to be followed by optional spaces and a colon "
        "instead of matching any line that starts with it",
    )
    required_binaries: list[str] = Field(
        default_factory=lambda: ["pass", "gpg"],
        description="Programs that must be on PATH before a secret is read",
    )
