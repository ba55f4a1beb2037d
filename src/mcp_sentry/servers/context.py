from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_sentry.sentry.config import SentryConfig


@dataclass(frozen=True)
class MainAppContext:
    """Context holding the base config shared by every tool invocation."""

    sentry_config: SentryConfig | None = None
