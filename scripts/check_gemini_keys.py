#!/usr/bin/env python3
"""Probe every configured Gemini API key against one model.

Keys are printed only as fingerprints. Exit status is 0 when every key answers.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path


def _bootstrap_backend(env: str | None) -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_path = repo_root / "src" / "backend"
    if str(backend_path) not in sys.path:
        sys.path.insert(0, str(backend_path))

    env_file = repo_root / "config" / "environments" / f"{env or 'development'}.env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))


async def probe(model: str | None) -> int:
    from feedback_ai.core.config import get_settings
    from feedback_ai.services.credentials import build_credential_pool
    from feedback_ai.services.failure_classifier import classify_exception
    from feedback_ai.services.llm_providers import GeminiClient
    from feedback_ai.services.rotation import fingerprint

    settings = get_settings()
    pool = build_credential_pool(settings)
    target_model = model or settings.gemini_models[0]
    client = GeminiClient(
        endpoint=settings.gemini_endpoint,
        timeout=settings.llm_attempt_timeout_seconds,
        temperature=settings.llm_temperature,
        transport_retries=settings.llm_transport_retries,
    )

    if not len(pool):
        print("No Gemini API keys configured (set GEMINI_API_KEYS or GEMINI_API_KEY).")
        return 1

    print(f"Probing {len(pool)} key(s) against {target_model}")
    passed = 0
    for credential in pool.credentials:
        label = fingerprint(credential)
        try:
            reply = await client.generate(credential, target_model, 'Say "test successful" in 2 words')
        except Exception as exc:
            print(f"  {label}  FAIL  [{classify_exception(exc).value}] {exc}")
            continue
        passed += 1
        print(f"  {label}  OK    {reply.strip()[:40]}")

    print(f"Passed: {passed}/{len(pool)}")
    return 0 if passed == len(pool) else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Check configured Gemini API keys.")
    parser.add_argument("--model", help="Model identifier to probe (default: first configured model).")
    parser.add_argument("--env", help="Environment name used to locate config/environments/<env>.env.")
    args = parser.parse_args()

    _bootstrap_backend(args.env)
    sys.exit(asyncio.run(probe(args.model)))


if __name__ == "__main__":
    main()
