"""
Service-layer helpers used by the API routes and embedding applications.
"""

from .feedback_analyzer import FeedbackAnalyzer, get_feedback_analyzer, reset_feedback_analyzer  # noqa: F401
from .secrets import SecretsError, SecretsManager, get_secrets_manager  # noqa: F401
