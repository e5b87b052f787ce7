"""Content-addressed kubeconfig files.

Callers that receive a kubeconfig as a string (e.g. from an API) need a
file path for ``kubernetes_asyncio.config.load_kube_config``. The file is
named by the SHA-1 of its content, so the same content always maps to the
same path and is only written once.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from kubewait.observability.logging import get_logger

_log = get_logger("kubeconfig")

_DEFAULT_DIR = Path.home() / ".kubewait" / "kubeconfig"


def kubeconfig_dir(base_dir: str | Path | None = None) -> Path:
    return Path(base_dir) if base_dir else _DEFAULT_DIR


def get_or_gen_kubeconfig_path(content: str, base_dir: str | Path | None = None) -> Path:
    """Return the path of the file holding *content*, writing it if needed."""
    digest = hashlib.sha1(content.encode("utf-8")).hexdigest()  # noqa: S324 - naming only
    path = kubeconfig_dir(base_dir) / digest

    if path.is_file() and path.read_text(encoding="utf-8"):
        return path

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    path.chmod(0o600)
    _log.debug("kubeconfig written", path=str(path))
    return path
