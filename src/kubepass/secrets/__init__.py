"""Parsing of decrypted password-store entries.

:func:`fetch_key` is the single lookup primitive used by
:mod:`kubepass.auth.extractor`.
"""

from kubepass.secrets.parser import fetch_key, find_raw_value

__all__ = ["fetch_key", "find_raw_value"]
