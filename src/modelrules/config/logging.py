"""Log routing for modelrules.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers. The CLI calls :func:`configure_logging` once, which
renders every stdlib record through a structlog formatter on stderr:
console lines by default, one JSON object per line with ``--log-json``.

Derivation code wraps its work in :func:`derivation_context`; records
emitted inside carry ``model`` (and ``property``) as structured fields.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

LOGGER_NAME = "modelrules"

# Third-party loggers kept at WARNING even under --verbose
QUIET_LOGGERS = ("sqlalchemy",)


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def build_formatter(*, log_json: bool = False) -> structlog.stdlib.ProcessorFormatter:
    """Return the formatter applied to the stderr handler."""
    renderers: list[structlog.types.Processor]
    if log_json:
        renderers = [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
    )


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and set logger levels.

    Args:
        verbose: Show DEBUG records from ``modelrules``; WARNING otherwise.
        log_json: Render JSON lines instead of console lines.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(build_formatter(log_json=log_json))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def derivation_context(model_class: type, property_name: str | None = None) -> Iterator[None]:
    """Bind the model (and property) being derived to every record logged inside."""
    bindings = {"model": f"{model_class.__module__}.{model_class.__qualname__}"}
    if property_name is not None:
        bindings["property"] = property_name
    with structlog.contextvars.bound_contextvars(**bindings):
        yield
