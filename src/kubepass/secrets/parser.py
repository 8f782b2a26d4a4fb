"""Key lookup in decrypted password-store entries.

A kubepass entry is plain ``key: value`` text, one field per line, where
each value is base64-encoded::

    client-certificate-data: LS0tLS1CRUdJTi...
    client-key-data: LS0tLS1CRUdJTi...

:func:`fetch_key` finds a field, strips every whitespace character from its
value (encoders commonly wrap long base64 at 64 or 76 columns) and returns
the decoded text.

Lookup is by line prefix: the first line that *starts with* the key wins,
so ``tok`` also matches ``token: ...``. Passing ``strict=True`` requires
the key to be followed by optional spaces and the colon instead.
"""

from __future__ import annotations

import base64
import binascii
import re

from kubepass.exceptions import SecretFormatError

_WHITESPACE = re.compile(r"\s+")


def _matches(line: str, key: str, strict: bool) -> bool:
    if not line.startswith(key):
        return False
    if not strict:
        return True
    return line[len(key):].lstrip(" \t").startswith(":")


def find_raw_value(document: str, key: str, strict: bool = False) -> str:
    """Return the undecoded value of *key* with all whitespace removed.

    Lines end at a line feed only; a trailing carriage return is dropped.

    Args:
        document: Decrypted entry text.
        key: Field name to look up.
        strict: Match ``key:`` exactly instead of any line prefix.

    Returns:
        Everything after the first colon of the first matching line, or
        ``""`` when no line matches or the line has no colon.
    """
    for line in document.split("\n"):
        line = line.removesuffix("\r")
        if _matches(line, key, strict):
            _, _, value = line.partition(":")
            return _WHITESPACE.sub("", value)
    return ""


def fetch_key(document: str, key: str, strict: bool = False) -> str:
    """Look up *key* in *document* and return its base64-decoded value.

    Args:
        document: Decrypted entry text.
        key: Field name to look up.
        strict: Match ``key:`` exactly instead of any line prefix.

    Returns:
        The decoded UTF-8 text. An empty string means the field is absent
        or empty; callers must not treat it as a valid credential.

    Raises:
        SecretFormatError: If the value is not valid base64 or does not
            decode to UTF-8 text.

    Example::

        >>> fetch_key("token: YWJjMTIz", "token")
        'abc123'
    """
    raw = find_raw_value(document, key, strict=strict)
    if not raw:
        return ""
    try:
        decoded = base64.b64decode(raw, validate=True)
    except binascii.Error as exc:
        raise SecretFormatError(key, str(exc)) from None
    try:
        return decoded.decode("utf-8")
    except UnicodeDecodeError:
        raise SecretFormatError(key, "decoded bytes are not UTF-8 text") from None
