"""Allow ``python -m cratectl`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m cratectl`` behaves identically to the ``cratectl`` console
script.  The privilege helper relaunches through this module.
"""

from __future__ import annotations

from cratectl.cli.app import cli

if __name__ == "__main__":
    cli()
