"""Logging setup."""

import logging
import socket
import sys

import structlog

from servitor.config import Settings


def add_host(host: str):
    """Processor stamping every event with the host name."""

    def processor(logger, method_name, event_dict):
        event_dict.setdefault("host", host)
        return event_dict

    return processor


def build_formatter(settings: Settings) -> structlog.stdlib.ProcessorFormatter:
    """Formatter for records from stdlib loggers: JSON lines or plain console text."""
    pre_chain = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    processors = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if settings.log_json:
        pre_chain.append(add_host(socket.gethostname()))
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return structlog.stdlib.ProcessorFormatter(foreign_pre_chain=pre_chain, processors=processors)


def configure_logging(settings: Settings) -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(settings))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.effective_log_level)
