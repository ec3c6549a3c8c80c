from __future__ import annotations

import logging

from feedback_ai.core.config import Settings
from feedback_ai.core.logging import register_secrets
from feedback_ai.services.rotation import CredentialPool
from feedback_ai.services.secrets import SecretsError, SecretsManager, get_secrets_manager

logger = logging.getLogger(__name__)


def collect_credentials(settings: Settings, manager: SecretsManager | None = None) -> list[str]:
    """Gather Gemini keys in priority order: env list, single env key, AWS secret."""
    keys = list(settings.configured_api_keys)
    if settings.secrets_provider != "aws":
        return keys

    try:
        manager = manager or get_secrets_manager()
        keys.extend(manager.get_list(settings.gemini_api_keys_secret))
    except (SecretsError, ImportError) as exc:
        logger.error("Unable to load Gemini keys from %s secrets: %s", settings.secrets_provider, exc)
    return keys


def build_credential_pool(settings: Settings, manager: SecretsManager | None = None) -> CredentialPool:
    pool = CredentialPool(collect_credentials(settings, manager))
    register_secrets(pool.credentials)
    if not len(pool):
        logger.warning("No Gemini API keys configured; analysis will use the lexical fallback")
    else:
        logger.info("Loaded %d Gemini API key(s)", len(pool))
    return pool
