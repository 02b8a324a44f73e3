"""CLI action handlers.

Purpose
-------
Subcommand handlers for the gateway CLI, keeping the entrypoint minimal. This
module has no top-level side effects and is safe to import in tests.

External Dependencies
---------------------
- Provider adapters issue HTTP requests through ``httpx``. Handlers accept an
  optional ``transport`` so tests can run them against ``httpx.MockTransport``.

Error Semantics
---------------
- Adapter failures print ``CODE: message`` to stderr and return ``1``.
- Missing or invalid configuration (e.g. no API key) prints the reason and
  returns ``2``.
- API keys are never printed.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from ...base.adapter import BaseAdapter
from ...base.errors import AdapterError
from ...base.factory import AdapterFactory
from ...base.interfaces import ChatAdapter
from ...base.models import ChatMessage, ChatRequest
from ...config import load_adapter_config
from ...config.env import get_env_var_candidates

EXIT_OK = 0
EXIT_ADAPTER_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _emit(payload: Any, as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, ensure_ascii=False))
    elif isinstance(payload, list):
        for item in payload:
            print(item)
    else:
        print(payload)


def build_adapter(provider: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> BaseAdapter:
    """Create an adapter for ``provider`` from the configuration layer.

    Raises
    ------
    pydantic.ValidationError
        When no API key is configured for ``provider``.
    """
    return AdapterFactory.create_adapter(provider, load_adapter_config(provider), transport=transport)


def build_request(args: argparse.Namespace) -> ChatRequest:
    messages: List[ChatMessage] = []
    if args.system:
        messages.append(ChatMessage(role="system", content=args.system))
    messages.append(ChatMessage(role="user", content=args.prompt))
    return ChatRequest(
        model=args.model,
        messages=messages,
        temperature=args.temperature,
        max_tokens=args.max_tokens,
    )


def handle_providers(args: argparse.Namespace) -> int:
    _emit(AdapterFactory.get_supported_providers(), args.json)
    return EXIT_OK


async def _run_models(adapter: ChatAdapter) -> List[str]:
    return await adapter.list_models()


async def _run_validate(adapter: BaseAdapter) -> bool:
    return await adapter.validate_api_key(adapter.api_key)


async def _run_chat(adapter: ChatAdapter, request: ChatRequest, stream: bool, as_json: bool) -> None:
    if not stream:
        response = await adapter.chat(request)
        _emit(response.to_dict() if as_json else response.content, as_json)
        return
    parts: List[str] = []
    async for delta in adapter.chat_stream(request):
        parts.append(delta)
        if not as_json:
            sys.stdout.write(delta)
            sys.stdout.flush()
    if as_json:
        _emit({"content": "".join(parts), "deltas": len(parts)}, True)
    else:
        sys.stdout.write("\n")


def _config_error(provider: str, exc: ValidationError) -> int:
    fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
    hint = " or ".join(get_env_var_candidates(provider))
    print(f"configuration error for '{provider}': invalid {fields or 'settings'}", file=sys.stderr)
    if hint and "api_key" in fields:
        print(f"set {hint}", file=sys.stderr)
    return EXIT_CONFIG_ERROR


def run_action(args: argparse.Namespace, transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    """Execute one provider-backed subcommand (``models``, ``validate``, ``chat``).

    Returns
    -------
    int
        Process exit code.
    """
    try:
        adapter = build_adapter(args.provider, transport)
    except ValidationError as exc:
        return _config_error(args.provider, exc)

    try:
        if args.cmd == "models":
            _emit(asyncio.run(_run_models(adapter)), args.json)
        elif args.cmd == "validate":
            ok = asyncio.run(_run_validate(adapter))
            print("valid" if ok else "invalid")
            return EXIT_OK if ok else EXIT_ADAPTER_ERROR
        else:
            asyncio.run(_run_chat(adapter, build_request(args), args.stream, args.json))
    except AdapterError as exc:
        print(f"{exc.code.value}: {exc.message}", file=sys.stderr)
        return EXIT_ADAPTER_ERROR
    return EXIT_OK


__all__ = [
    "EXIT_OK",
    "EXIT_ADAPTER_ERROR",
    "EXIT_CONFIG_ERROR",
    "build_adapter",
    "build_request",
    "handle_providers",
    "run_action",
]
