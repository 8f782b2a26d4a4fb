"""Secret retrieval from ``pass``, the standard Unix password manager.

:class:`PassStore` shells out to ``pass show <entry>`` and hands the
decrypted text to the credential pipeline. Decryption itself (GPG, agent
prompts, pinentry) is entirely the password store's business; kubepass
only sees the resulting text or the failure.

:func:`check_prerequisites` verifies that the programs the store needs are
on ``PATH`` before any decryption is attempted.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from typing import Optional, Sequence

from kubepass.exceptions import PrerequisiteError, SecretUnreadableError
from kubepass.models import KubepassConfig
from kubepass.output import debug


def _decode_stderr(stderr: Optional[bytes]) -> str:
    return (stderr or b"").decode("utf-8", errors="replace").strip()


def find_missing_binaries(binaries: Sequence[str]) -> list[str]:
    """Return the entries of *binaries* that are not found on ``PATH``."""
    return [name for name in binaries if shutil.which(name) is None]


def check_prerequisites(binaries: Sequence[str]) -> None:
    """Ensure every program in *binaries* is on ``PATH``.

    Raises:
        PrerequisiteError: Listing every missing program.
    """
    missing = find_missing_binaries(binaries)
    if missing:
        raise PrerequisiteError(missing)


class PassStore:
    """Read decrypted entries via ``pass show``.

    Args:
        binary: Password-store executable (``pass`` or a compatible tool).
        timeout: Seconds to wait for decryption, including any pinentry
            prompt.
        store_dir: Value for ``PASSWORD_STORE_DIR``; inherited from the
            environment when ``None``.

    Example::

        store = PassStore()
        document = store.show("k8s/prod/admin")
    """

    def __init__(
        self,
        binary: str = "pass",
        timeout: float = 10.0,
        store_dir: Optional[str] = None,
    ) -> None:
        self._binary = binary
        self._timeout = timeout
        self._store_dir = store_dir

    @classmethod
    def from_config(cls, config: KubepassConfig) -> PassStore:
        """Build a store from the resolved configuration."""
        return cls(
            binary=config.pass_binary,
            timeout=config.pass_timeout,
            store_dir=config.password_store_dir,
        )

    @property
    def binary(self) -> str:
        return self._binary

    def _env(self) -> Optional[dict[str, str]]:
        if self._store_dir is None:
            return None
        env = dict(os.environ)
        env["PASSWORD_STORE_DIR"] = os.path.expanduser(self._store_dir)
        return env

    def show(self, entry: str) -> str:
        """Return the decrypted text of *entry*.

        Args:
            entry: Password-store path such as ``k8s/prod/admin``.

        Returns:
            The entry text, never empty.

        Raises:
            PrerequisiteError: If the store executable cannot be found.
            SecretUnreadableError: If the executable cannot be run, or
                decryption fails, times out, or yields no UTF-8 text.
        """
        debug(f"Reading password-store entry '{entry}' with {self._binary}")
        try:
            result = subprocess.run(
                [self._binary, "show", entry],
                capture_output=True,
                check=True,
                timeout=self._timeout,
                env=self._env(),
            )
        except FileNotFoundError:
            raise PrerequisiteError([self._binary]) from None
        except OSError as exc:
            raise SecretUnreadableError(
                f"Cannot run '{self._binary}': {exc.strerror or exc}"
            ) from None
        except subprocess.TimeoutExpired:
            raise SecretUnreadableError(
                f"Timed out after {self._timeout:g}s reading password-store entry '{entry}'"
            ) from None
        except subprocess.CalledProcessError as exc:
            detail = _decode_stderr(exc.stderr)
            message = f"Unable to read password-store entry '{entry}'"
            if detail:
                message += f": {detail}"
            raise SecretUnreadableError(message) from None

        try:
            document = result.stdout.decode("utf-8")
        except UnicodeDecodeError:
            raise SecretUnreadableError(
                f"Password-store entry '{entry}' is not UTF-8 text"
            ) from None
        if not document.strip():
            raise SecretUnreadableError(f"Password-store entry '{entry}' is empty")
        return document
