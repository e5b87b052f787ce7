"""Entry point for `python -m kubewait`.

Usage:
    python -m kubewait pod -n default -l app=web --for condition=Ready
"""

from __future__ import annotations

from kubewait.cli.main import cli

cli()
