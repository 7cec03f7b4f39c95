"""
Logging setup for the catalog backend (structlog over stdlib logging).

setup_logging() configures structlog once per process and builds the
LOGGING dict Django applies at startup. Records go to a colored console
and, unless disabled, to logs/django.jsonl as one JSON object per line
(rotated at UTC midnight, 30 days kept).
"""

from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import structlog

# Application loggers that share the configured level
APP_LOGGERS = ('apps.catalog', 'apps.common', 'app_logging')


class DjangoTimedRotatingFileHandler(TimedRotatingFileHandler):
    """
    TimedRotatingFileHandler with a configurable rotated-file suffix, so the
    suffix can come from Django's LOGGING dict.
    """
    def __init__(self, filename, when='h', interval=1, backupCount=0, encoding=None,
                 delay=False, utc=False, atTime=None, suffix=None):
        super().__init__(filename, when, interval, backupCount, encoding, delay, utc, atTime)
        if suffix is not None:
            self.suffix = suffix


def _pre_chain():
    """Processors applied to both structlog events and plain stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]


def _configure_structlog():
    if structlog.is_configured():
        return
    structlog.configure(
        processors=_pre_chain() + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def _file_handler(logs_dir: Path):
    logs_dir.mkdir(parents=True, exist_ok=True)
    return {
        '()': 'app_logging.config.DjangoTimedRotatingFileHandler',
        'filename': str(logs_dir / 'django.jsonl'),
        'when': 'midnight',
        'backupCount': 30,
        'encoding': 'utf-8',
        'utc': True,
        'suffix': '%Y-%m-%d.jsonl',
        'formatter': 'json',
        'level': 'DEBUG',
    }


def setup_logging(base_dir=None, level='INFO', log_to_file=True):
    """
    Configure structlog and return the Django LOGGING dict.

    Safe to call more than once: structlog is configured on the first call
    only, the dict is rebuilt every time.

    Args:
        base_dir: Directory holding logs/ (defaults to the working directory)
        level: Level for the console handler and the application loggers
        log_to_file: Also write JSON lines to logs/django.jsonl

    Returns:
        dict: Django LOGGING configuration
    """
    base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
    level = level.upper()
    _configure_structlog()

    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
            'level': level,
        },
    }
    if log_to_file:
        handlers['file'] = _file_handler(base_dir / 'logs')
    targets = list(handlers)

    loggers = {
        'django': {'handlers': targets, 'level': 'INFO', 'propagate': False},
        # 4xx/5xx access lines; our handler already logs storage failures
        'django.request': {'handlers': targets, 'level': 'WARNING', 'propagate': False},
    }
    loggers.update({
        name: {'handlers': targets, 'level': level, 'propagate': False}
        for name in APP_LOGGERS
    })

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'console': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': structlog.dev.ConsoleRenderer(colors=True),
                'foreign_pre_chain': _pre_chain(),
            },
            'json': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': structlog.processors.JSONRenderer(),
                'foreign_pre_chain': _pre_chain(),
            },
        },
        'handlers': handlers,
        'root': {'handlers': targets, 'level': 'WARNING'},
        'loggers': loggers,
    }
