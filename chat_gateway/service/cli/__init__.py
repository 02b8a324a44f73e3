"""Gateway developer CLI (package entrypoint).

This package wires argument parsing to action handlers kept in small, focused
modules. It performs no provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

from typing import Optional

import httpx

from ...base.logging import configure_logger
from .cli_actions import handle_providers, run_action
from .cli_parser import build_parser


def main(
    argv: Optional[list[str]] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    transport: Optional[httpx.AsyncBaseTransport]
        Transport override forwarded to the adapter (tests only).

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    args = build_parser().parse_args(argv)
    if args.log_level:
        configure_logger(level=args.log_level)
    if args.cmd == "providers":
        return handle_providers(args)
    return run_action(args, transport=transport)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
