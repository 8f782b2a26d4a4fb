"""kubepass -- Kubernetes exec-credential plugin backed by ``pass``.

The Kubernetes client invokes ``kubepass`` through the
``client.authentication.k8s.io`` exec-credential protocol. The plugin
decrypts an entry from the standard Unix password store, pulls the
client certificate/key pair or bearer token out of it, and prints a
single ``ExecCredential`` JSON document on stdout.

Typical kubeconfig stanza::

    users:
    - name: prod-admin
      user:
        exec:
          apiVersion: client.authentication.k8s.io/v1beta1
          command: kubepass
          args: ["auth", "pem", "k8s/prod/admin"]

Modules:
    app: Typer application and the ``kubepass`` console script.
    models: Pydantic models for credentials and configuration.
    config: XDG-aware configuration with environment overrides.
    store: ``pass`` retrieval and prerequisite checks.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes, one per failure kind.
    output: stdout/stderr discipline with Rich diagnostics.
"""

__version__ = "0.1.0"
