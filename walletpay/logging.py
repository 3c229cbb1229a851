"""Structured JSON logging with completion-attempt context fields."""

import logging
import os
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter


intent_id_ctx: ContextVar[str] = ContextVar("intent_id", default="")


class ContextFilter(logging.Filter):
    """Inject service name and the intent being completed into every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = os.getenv("SERVICE_NAME", "walletpay")
        record.intent_id = intent_id_ctx.get()
        return True


def configure_logging() -> None:
    handler = logging.StreamHandler(sys.stdout)
    context_filter = ContextFilter()
    handler.addFilter(context_filter)
    handler.setFormatter(
        JsonFormatter("%(asctime)s %(levelname)s %(service_name)s %(intent_id)s %(message)s")
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(os.getenv("LOG_LEVEL", "INFO"))
    root.addFilter(context_filter)


logger = logging.getLogger("walletpay")
