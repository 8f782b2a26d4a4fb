"""Typer application and CLI entry point for kubepass.

Commands:

* ``kubepass auth <pem|token> <pass-entry>`` -- print an ``ExecCredential``
  document for the Kubernetes client.
* ``kubepass check`` -- verify that the password-store programs are
  installed.

Every failure is reported on stderr and mapped to a distinct exit status
(see :mod:`kubepass.exit_codes`); stdout receives either one complete JSON
document or nothing.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from kubepass import __version__
from kubepass.exceptions import KubepassError, MissingEntryError, MissingModeError
from kubepass.exit_codes import EXIT_GENERIC_FAILURE, EXIT_PREREQUISITE_MISSING
from kubepass.output import debug, error, info, print_data, success

app = typer.Typer(
    name="kubepass",
    help="Kubernetes exec-credential plugin backed by the pass password store.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"kubepass {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    strict_keys: bool = typer.Option(
        False,
        "--strict-keys",
        help="Match secret fields as 'key:' instead of by line prefix.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output on stderr."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~kubepass.output.OutputManager` and stores
    shared options in the Typer context for sub-commands to read via
    ``ctx.obj``.
    """
    from kubepass.output import OutputManager, set_output

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["strict_keys"] = strict_keys


def _run_auth(mode: Optional[str], entry: Optional[str], strict_keys: bool) -> str:
    """Validate arguments, read the entry and return the JSON document."""
    from kubepass.auth import create_default_dispatcher
    from kubepass.config import resolve_config
    from kubepass.models import AuthMode
    from kubepass.store import PassStore, check_prerequisites

    if not mode:
        raise MissingModeError("Missing auth mode: expected 'pem' or 'token'")
    if not entry:
        raise MissingEntryError("Missing password-store entry path")
    auth_mode = AuthMode.parse(mode)

    config = resolve_config(cli_strict_keys=strict_keys)
    check_prerequisites(config.required_binaries)

    document = PassStore.from_config(config).show(entry)
    return create_default_dispatcher(strict=config.strict_keys).respond(auth_mode, document)


@app.command("auth")
def auth_command(
    ctx: typer.Context,
    mode: Optional[str] = typer.Argument(
        None, help="Credential type: pem or token.", show_default=False
    ),
    entry: Optional[str] = typer.Argument(
        None, help="Password-store entry, e.g. k8s/prod/admin.", show_default=False
    ),
) -> None:
    """Print an ExecCredential for a password-store entry.

    The entry must hold base64-encoded ``client-certificate-data`` and
    ``client-key-data`` fields (pem), or ``token`` and optionally
    ``expirationTimestamp`` (token), one ``key: value`` pair per line.

    Example::

        kubepass auth pem k8s/prod/admin
    """
    strict_keys = bool((ctx.obj or {}).get("strict_keys", False))
    try:
        document = _run_auth(mode, entry, strict_keys)
    except KubepassError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    print_data(document)


@app.command("check")
def check_command() -> None:
    """Verify that the programs needed to read secrets are installed."""
    from kubepass.config import resolve_config
    from kubepass.store import find_missing_binaries

    try:
        config = resolve_config()
    except KubepassError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    debug(f"Checking for: {', '.join(config.required_binaries)}")
    missing = find_missing_binaries(config.required_binaries)
    for name in config.required_binaries:
        if name in missing:
            error(f"{name}: not found on PATH")
        else:
            info(f"{name}: ok")
    if missing:
        raise typer.Exit(code=EXIT_PREREQUISITE_MISSING)
    success("All prerequisites found.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from kubepass.config import get_logs_dir

    logs_dir = get_logs_dir()
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``kubepass`` console script.

    Unhandled :class:`~kubepass.exceptions.KubepassError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except KubepassError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
