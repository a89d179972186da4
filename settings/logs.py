import logging
import sys
import time
from typing import Optional

import ujson

from .config import STAND, env

loggers = {
    'environs': {
        'level': 'ERROR',
    },
    'aiosqlite': {
        'level': 'ERROR',
    },
    'passlib': {
        'level': 'ERROR',
    },
    'uvicorn.access': {
        'level': 'WARNING',
    },
}


class JSONFormatter(logging.Formatter):
    default_time_format = '%Y-%m-%d %H:%M:%S{ms} %z'
    msec_format = ',%03d'

    def __init__(self, *args, jsondumps_kwargs: Optional[dict] = None, **kwargs):
        """JSON format implementation of logging formatter."""
        super().__init__(*args, **kwargs)
        self._jsondumps_kwargs = jsondumps_kwargs.copy() if jsondumps_kwargs else {}

    def formatTime(self, record, *args) -> str:  # noqa: N802
        """Format TZ-time with milliseconds as this: 2025-07-04 11:26:07,080 +0200."""
        ct = self.converter(record.created)  # type: ignore
        formatted_ms = self.msec_format % record.msecs
        return time.strftime(self.default_time_format.format(ms=formatted_ms), ct)

    def format(self, record: logging.LogRecord) -> str:
        r"""Serialize a log record to a single JSON line.

        {"time": "2025-07-04 13:26:51,910 +0200", "name": "app.sessions", "lvl": "INFO",
         "msg": "Swept 3 expired sessions", "place": "sessions.sweep_expired:88"}
        """
        record_representation = {
            'time': self.formatTime(record),
            'name': record.name,
            'lvl': record.levelname,
            'msg': record.getMessage(),
            'place': f'{record.module}.{record.funcName}:{record.lineno}',
        }

        if record.exc_info:
            record_representation['exc_info'] = self.formatException(record.exc_info)

        return ujson.dumps(record_representation, **self._jsondumps_kwargs)


def create_logger_config(log_level: str, stand: str, loggers: dict):
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'loggers': {
            **loggers,
            '': {
                'level': log_level,
                'handlers': ['console'],
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'generic' if stand in ('local', 'test') else 'json',
                'stream': sys.stdout,
            },
        },
        'formatters': {
            'generic': {
                'format': '%(asctime)s (%(name)s)[%(levelname)s] %(message)s',
                'datefmt': '[%Y-%m-%d %H:%M:%S %z]',
                'class': 'logging.Formatter',
            },
            'json': {
                '()': JSONFormatter,
                'jsondumps_kwargs': {
                    'ensure_ascii': False,
                },
            },
        },
    }


class LogsConfig:
    LOG_LEVEL = env.str('LOG_LEVEL', default='INFO')
    LOGGING = create_logger_config(log_level=LOG_LEVEL, loggers=loggers, stand=STAND)
