"""Credential pool and per-request rotation cursors"""
from __future__ import annotations

import hashlib
import threading
from dataclasses import dataclass, field
from typing import Collection, Iterable, Sequence

PLACEHOLDER_CREDENTIALS = frozenset(
    {
        "your_api_key_here",
        "your-api-key-here",
        "your_gemini_api_key",
        "changeme",
        "placeholder",
    }
)


def is_placeholder(credential: str) -> bool:
    value = credential.strip().lower()
    return not value or value in PLACEHOLDER_CREDENTIALS or value.startswith("your-")


def fingerprint(credential: str) -> str:
    """Short stable identifier for logs; never the key itself."""
    digest = hashlib.sha256(credential.encode("utf-8")).hexdigest()
    return f"key-{digest[:8]}"


@dataclass(slots=True)
class RotationCursor:
    """Search position for a single logical request."""

    credential_index: int
    model_index: int = 0
    attempted: set[int] = field(default_factory=set)


class CredentialPool:
    """Ordered, de-duplicated credentials plus the process-wide exhausted set.

    The credential tuple is immutable after construction. The exhausted set
    only grows and is mutated solely through ``mark_exhausted``.
    """

    def __init__(self, credentials: Iterable[str]) -> None:
        cleaned: list[str] = []
        for credential in credentials:
            value = (credential or "").strip()
            if is_placeholder(value) or value in cleaned:
                continue
            cleaned.append(value)
        self._credentials: tuple[str, ...] = tuple(cleaned)
        self._exhausted: set[str] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._credentials)

    def __getitem__(self, index: int) -> str:
        return self._credentials[index]

    @property
    def credentials(self) -> Sequence[str]:
        return self._credentials

    def is_exhausted(self, credential: str) -> bool:
        return credential in self._exhausted

    def mark_exhausted(self, credential: str) -> bool:
        """Mark a credential failed for the process lifetime.

        Returns True when this call added it.
        """
        with self._lock:
            if credential in self._exhausted:
                return False
            self._exhausted.add(credential)
            return True

    @property
    def exhausted_count(self) -> int:
        return sum(1 for credential in self._credentials if credential in self._exhausted)

    @property
    def available_count(self) -> int:
        return len(self._credentials) - self.exhausted_count

    def next_available(self, after: int, skip: Collection[int] = ()) -> int | None:
        """Index of the next usable credential after ``after``, wrapping once.

        Exhausted credentials and indices in ``skip`` are passed over.
        """
        size = len(self._credentials)
        for offset in range(1, size + 1):
            index = (after + offset) % size
            if index in skip:
                continue
            if self._credentials[index] not in self._exhausted:
                return index
        return None

    def open_cursor(self) -> RotationCursor | None:
        """Fresh cursor at the first usable credential, or None if none remain."""
        if not self._credentials:
            return None
        index = self.next_available(len(self._credentials) - 1)
        if index is None:
            return None
        return RotationCursor(credential_index=index)
