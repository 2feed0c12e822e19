"""Observability for the OnApp client: structured logging and Prometheus metrics.

Quick start::

    from onapp_client.observability import configure_logging, metrics_text

    configure_logging()
"""

from .logging import bound_request_id, configure_logging, get_logger, request_id_ctx
from .metrics import metrics_text

__all__ = [
    "bound_request_id",
    "configure_logging",
    "get_logger",
    "metrics_text",
    "request_id_ctx",
]
