"""Abstract base class for per-mode credential extractors.

Each auth mode (``pem``, ``token``) is handled by a subclass of
:class:`CredentialExtractor` that knows which secret fields the mode
requires and how to assemble them into a credential bundle.

To add a mode, subclass :class:`CredentialExtractor`, set :attr:`mode` and
:attr:`required_fields`, implement :meth:`build`, and register an instance
with :class:`~kubepass.auth.dispatcher.AuthDispatcher`.

See Also:
    :mod:`kubepass.auth.dispatcher` for registration and dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from kubepass.exceptions import MissingFieldsError
from kubepass.models import AuthMode, CredentialBundle
from kubepass.secrets import fetch_key


class CredentialExtractor(ABC):
    """Abstract base class for credential extractors.

    Concrete extractors provide:

    1. A :attr:`mode` property returning the :class:`~kubepass.models.AuthMode`
       they serve.
    2. A :attr:`required_fields` tuple naming the secret keys they read, in
       the order reported by :class:`~kubepass.exceptions.MissingFieldsError`.
    3. A :meth:`build` implementation turning the decoded values into a
       bundle, or returning ``None`` when a required value is empty.
    """

    @property
    @abstractmethod
    def mode(self) -> AuthMode:
        """Return the auth mode this extractor handles."""
        ...

    @property
    @abstractmethod
    def required_fields(self) -> tuple[str, ...]:
        """Return the secret keys this mode reads."""
        ...

    @abstractmethod
    def build(self, values: dict[str, str]) -> CredentialBundle | None:
        """Assemble a bundle from the decoded field values.

        Args:
            values: Decoded value for every key in :attr:`required_fields`;
                absent fields map to ``""``.

        Returns:
            The credential bundle, or ``None`` if a mandatory value is empty.
        """
        ...

    def extract(self, document: str, strict: bool = False) -> CredentialBundle:
        """Read this mode's fields from *document* and build the bundle.

        Args:
            document: Decrypted password-store entry.
            strict: Use strict ``key:`` matching instead of line prefixes.

        Returns:
            A validated credential bundle.

        Raises:
            MissingFieldsError: If a mandatory field is absent or empty.
            SecretFormatError: If a field is not valid base64 text.
        """
        values = {key: fetch_key(document, key, strict=strict) for key in self.required_fields}
        bundle = self.build(values)
        if bundle is None:
            raise MissingFieldsError(self.mode.value, self.required_fields)
        return bundle
