"""Serialisation of credential bundles into ``ExecCredential`` JSON."""

from __future__ import annotations

import json

from kubepass.models import CredentialBundle, ExecCredential


def build_exec_credential(bundle: CredentialBundle) -> dict[str, object]:
    """Return the ``ExecCredential`` document for *bundle* as a plain dict.

    Keys use the protocol's camelCase names and appear in the order
    ``apiVersion``, ``kind``, ``status``.
    """
    return ExecCredential(status=bundle).model_dump(by_alias=True)


def format_exec_credential(bundle: CredentialBundle) -> str:
    """Render *bundle* as an indented ``ExecCredential`` JSON string.

    Values are escaped by :func:`json.dumps`, so certificates with
    embedded newlines or tokens containing quotes or backslashes still
    produce a parseable document.

    Args:
        bundle: A validated PEM or token bundle.

    Returns:
        The JSON document, without a trailing newline.
    """
    return json.dumps(build_exec_credential(bundle), indent=2, ensure_ascii=False)
