"""Auth dispatcher -- registry of extractors and the credential pipeline.

:class:`AuthDispatcher` maps each :class:`~kubepass.models.AuthMode` to a
:class:`~kubepass.auth.base.CredentialExtractor` and runs the pipeline the
CLI invokes once it holds the decrypted entry text::

    extract fields -> validate -> format ExecCredential JSON

For most use cases, call :func:`create_default_dispatcher` or the
module-level :func:`respond`.

See Also:
    :mod:`kubepass.auth.extractor` -- the built-in extractors.
    :mod:`kubepass.auth.formatter` -- JSON rendering.
"""

from __future__ import annotations

from kubepass.auth.base import CredentialExtractor
from kubepass.auth.formatter import format_exec_credential
from kubepass.exceptions import UnknownModeError
from kubepass.models import AuthMode
from kubepass.output import debug


class AuthDispatcher:
    """Registry and dispatcher for credential extractors.

    Example::

        from kubepass.auth import AuthDispatcher, PemExtractor

        dispatcher = AuthDispatcher()
        dispatcher.register(PemExtractor())
        print(dispatcher.respond("pem", document))
    """

    def __init__(self, strict: bool = False) -> None:
        self._extractors: dict[AuthMode, CredentialExtractor] = {}
        self._strict = strict

    def register(self, extractor: CredentialExtractor) -> None:
        """Register *extractor* for its mode, replacing any previous one."""
        self._extractors[extractor.mode] = extractor

    def get_extractor(self, mode: str | AuthMode) -> CredentialExtractor:
        """Retrieve the extractor registered for *mode*.

        Raises:
            UnknownModeError: If *mode* is not a valid mode or has no
                registered extractor.
        """
        parsed = AuthMode.parse(mode)
        extractor = self._extractors.get(parsed)
        if extractor is None:
            raise UnknownModeError(parsed.value)
        return extractor

    def respond(self, mode: str | AuthMode, document: str) -> str:
        """Turn a decrypted entry into the ``ExecCredential`` JSON document.

        Args:
            mode: ``pem``/``token`` or the corresponding :class:`AuthMode`.
            document: Decrypted password-store entry text.

        Returns:
            The complete JSON document ready for stdout.

        Raises:
            UnknownModeError: If *mode* is not handled.
            MissingFieldsError: If the entry lacks a mandatory field.
            SecretFormatError: If a field is not valid base64 text.
        """
        extractor = self.get_extractor(mode)
        debug(
            f"Extracting {extractor.mode.value} credential "
            f"(fields: {', '.join(extractor.required_fields)}, "
            f"matching: {'strict' if self._strict else 'prefix'})"
        )
        bundle = extractor.extract(document, strict=self._strict)
        debug(f"Formatting ExecCredential for {bundle.mode.value} mode")
        return format_exec_credential(bundle)

    def list_modes(self) -> list[str]:
        """Return the registered mode names, sorted."""
        return sorted(mode.value for mode in self._extractors)


def create_default_dispatcher(strict: bool = False) -> AuthDispatcher:
    """Create an :class:`AuthDispatcher` with the ``pem`` and ``token`` extractors.

    Args:
        strict: Use strict ``key:`` matching instead of line prefixes.
    """
    from kubepass.auth.extractor import PemExtractor, TokenExtractor

    dispatcher = AuthDispatcher(strict=strict)
    dispatcher.register(PemExtractor())
    dispatcher.register(TokenExtractor())
    return dispatcher


def respond(mode: str | AuthMode, document: str, strict: bool = False) -> str:
    """Run the credential pipeline with the default extractors.

    Example::

        >>> doc = "token: YWJjMTIz"
        >>> json.loads(respond("token", doc))["status"]["token"]
        'abc123'
    """
    return create_default_dispatcher(strict=strict).respond(mode, document)
