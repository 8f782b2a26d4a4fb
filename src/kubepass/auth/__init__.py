"""Credential extraction and ExecCredential formatting.

The main entry points are:

- :func:`respond` -- the full pipeline: decrypted entry text in,
  ``ExecCredential`` JSON out.
- :class:`AuthDispatcher` -- registry that maps each
  :class:`~kubepass.models.AuthMode` to a :class:`CredentialExtractor`.
- :func:`extract` / :func:`format_exec_credential` -- the two pipeline
  stages, usable on their own.

Typical usage::

    from kubepass.auth import respond

    print(respond("pem", pass_store.show("k8s/prod/admin")))
"""

from kubepass.auth.base import CredentialExtractor
from kubepass.auth.dispatcher import AuthDispatcher, create_default_dispatcher, respond
from kubepass.auth.extractor import PemExtractor, TokenExtractor, extract, get_extractor
from kubepass.auth.formatter import build_exec_credential, format_exec_credential

__all__ = [
    "AuthDispatcher",
    "CredentialExtractor",
    "PemExtractor",
    "TokenExtractor",
    "build_exec_credential",
    "create_default_dispatcher",
    "extract",
    "format_exec_credential",
    "get_extractor",
    "respond",
]
