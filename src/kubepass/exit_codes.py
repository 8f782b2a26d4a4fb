"""Numeric process exit codes, one per failure kind.

The Kubernetes client only reports that the plugin failed, so each error
category gets its own status. Shell wrappers and kubeconfig debugging
sessions can tell the failure class apart without parsing stderr.

Example::

    $ kubepass auth pem k8s/prod/admin
    $ echo $?
    6   # EXIT_MISSING_FIELDS -- the entry lacks client-key-data
"""

EXIT_SUCCESS = 0
"""The credential was printed."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_MISSING_MODE = 2
"""No sub-command (``pem`` or ``token``) was given."""

EXIT_MISSING_ENTRY = 3
"""No password-store entry path was given."""

EXIT_SECRET_UNREADABLE = 4
"""The password-store entry could not be decrypted or was empty."""

EXIT_UNKNOWN_MODE = 5
"""The sub-command is neither ``pem`` nor ``token``."""

EXIT_MISSING_FIELDS = 6
"""The entry lacks a field the selected mode requires."""

EXIT_SECRET_FORMAT = 7
"""A field value is not valid base64 or not UTF-8 text."""

EXIT_PREREQUISITE_MISSING = 8
"""A required external binary is not on ``PATH``."""

EXIT_CONFIG_ERROR = 9
"""The configuration file or an environment override is invalid."""
