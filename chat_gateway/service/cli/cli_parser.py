"""CLI parser construction for chat-gateway-cli.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ...base.factory import AdapterFactory


def _add_provider(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--provider",
        required=True,
        type=str.lower,
        choices=AdapterFactory.get_supported_providers(),
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``providers``, ``models``, ``validate`` and ``chat``
        subcommands. No I/O happens here.
    """
    p = argparse.ArgumentParser(
        prog="chat-gateway-cli", description="Exercise chat provider adapters from the shell"
    )
    p.add_argument("--log-level", default=None, help="Override CHAT_GATEWAY_LOG_LEVEL for this run")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_providers = sub.add_parser("providers", help="List provider ids accepted by the factory")
    p_providers.add_argument("--json", action="store_true", help="Emit the ids as a JSON array")

    p_models = sub.add_parser("models", help="List models available for a provider")
    _add_provider(p_models)
    p_models.add_argument("--json", action="store_true", help="Emit the ids as a JSON array")

    p_validate = sub.add_parser("validate", help="Check whether the configured API key is accepted")
    _add_provider(p_validate)

    p_chat = sub.add_parser("chat", help="Send one prompt and print the completion")
    _add_provider(p_chat)
    p_chat.add_argument("--model", required=True)
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--system", default=None)
    p_chat.add_argument("--temperature", type=float, default=None)
    p_chat.add_argument("--max-tokens", dest="max_tokens", type=int, default=None)
    p_chat.add_argument("--stream", action="store_true", help="Print deltas as they arrive")
    p_chat.add_argument("--json", action="store_true", help="Emit the normalized response as JSON")

    return p


__all__ = ["build_parser"]
