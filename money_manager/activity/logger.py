"""
Activity Logger

Every ledger mutation is logged as a structured event. This gives:
1. Traceability of what the user changed and when
2. Visibility into storage fallbacks (corrupt records, failed writes)
3. Debugging capability without a debugger attached

Events go to the structured local log only.
"""

from typing import Optional

import structlog

from money_manager.models.activity import (
    LedgerEvent,
    LedgerEventBuilder,
    LedgerSeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class ActivityLogger:
    """
    Central activity logging service.

    Wraps a structlog logger and maps event severity onto log levels.
    `recent` keeps the last few events in memory for inspection, e.g.
    from tests or a debugger.
    """

    def __init__(self, name: str = "money_manager", keep_recent: int = 50):
        self._logger = structlog.get_logger(name)
        self._keep_recent = keep_recent
        self.recent: list[LedgerEvent] = []

    def log(self, event: LedgerEvent) -> None:
        """Log a ledger event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == LedgerSeverity.ERROR:
            self._logger.error("ledger_event", **log_dict)
        elif event.severity == LedgerSeverity.WARNING:
            self._logger.warning("ledger_event", **log_dict)
        elif event.severity == LedgerSeverity.DEBUG:
            self._logger.debug("ledger_event", **log_dict)
        else:
            self._logger.info("ledger_event", **log_dict)

        self.recent.append(event)
        if len(self.recent) > self._keep_recent:
            del self.recent[: len(self.recent) - self._keep_recent]

    def log_record_reset(self, key: str, reason: str) -> None:
        """Log that a corrupt stored record was replaced by defaults."""
        self.log(LedgerEventBuilder.record_reset(key=key, reason=reason))

    def log_persist_failed(self, key: str, error_message: str) -> None:
        """Log a failed write-through."""
        self.log(LedgerEventBuilder.persist_failed(key=key, error_message=error_message))

    def log_category_change_ignored(
        self,
        action: str,
        reason: str,
        category_id: Optional[str] = None,
    ) -> None:
        """Log a category mutation that was rejected as a no-op."""
        self.log(LedgerEventBuilder.category_change_ignored(
            action=action,
            reason=reason,
            category_id=category_id,
        ))
