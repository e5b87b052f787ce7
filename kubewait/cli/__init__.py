"""kubewait command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``kubewait`` script).
"""

from kubewait.cli.main import cli

__all__ = ["cli"]
