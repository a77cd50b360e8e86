"""BaseService — shared foundation for chronolane services.

Every service receives a :class:`ChronoConfig` at construction time and
never reads settings or the environment itself.
"""

from __future__ import annotations

import logging
from typing import Any

from chronolane.config.models import ChronoConfig
from chronolane.services.telemetry import get_current_span

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class LayoutService(BaseService):
            @traced
            def build(self, source) -> ServiceResult:
                ...
    """

    def __init__(self, config: ChronoConfig | None = None) -> None:
        self._config = config or ChronoConfig()

    @property
    def config(self) -> ChronoConfig:
        return self._config

    def _observe(self, event: str, payload: dict[str, Any]) -> None:
        """Observability hook for pure domain code: debug log + span annotation."""
        logger.debug("%s %s", event, payload)
        span = get_current_span()
        if span is not None:
            span.annotate(event, payload)
