from __future__ import annotations

import base64
import logging
from functools import lru_cache
from typing import Any

from feedback_ai.core.config import Settings, get_settings, parse_string_list

logger = logging.getLogger(__name__)


class SecretsError(RuntimeError):
    """Secret backend could not be reached or returned an error."""


class SecretsManager:
    """Read-through cache over AWS Secrets Manager."""

    def __init__(self, settings: Settings, client: Any = None) -> None:
        prefix = settings.secrets_aws_prefix or ""
        if prefix and not prefix.endswith("/"):
            prefix = f"{prefix}/"
        self.prefix = prefix
        self._cache: dict[str, str] = {}

        if client is None:
            import boto3  # installed with the "aws" extra

            client = boto3.client("secretsmanager", region_name=settings.aws_region)
        self._client = client

    def secret_id(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def get_secret(self, name: str) -> str | None:
        if not name:
            raise ValueError("Secret name must be provided.")
        if name in self._cache:
            return self._cache[name]

        from botocore.exceptions import BotoCoreError, ClientError

        secret_id = self.secret_id(name)
        try:
            response = self._client.get_secret_value(SecretId=secret_id)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
                logger.warning("AWS secret %s not found", secret_id)
                return None
            logger.error("Error fetching secret %s: %s", secret_id, exc)
            raise SecretsError("Secrets service failure.") from exc
        except BotoCoreError as exc:  # pragma: no cover - network errors
            logger.error("AWS Secrets Manager error for %s: %s", secret_id, exc)
            raise SecretsError("Secrets service failure.") from exc

        value = response.get("SecretString")
        if value is None and response.get("SecretBinary") is not None:
            value = base64.b64decode(response["SecretBinary"]).decode("utf-8")
        if value is not None:
            self._cache[name] = value
        return value

    def get_list(self, name: str) -> list[str]:
        """Secret value split as a comma-separated or JSON string list."""
        return parse_string_list(self.get_secret(name))


@lru_cache(maxsize=1)
def get_secrets_manager() -> SecretsManager:
    return SecretsManager(get_settings())
