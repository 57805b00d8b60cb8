import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Any
from urllib.parse import parse_qsl

import structlog

from nist_sts.core.config import env_config

MASK: str = 'SENSITIVE DATA'


def setup_logging(level: int | str) -> None:
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    handlers.append(console_handler)

    if env_config.LOG_TO_FILE:
        file_handler = RotatingFileHandler(
            env_config.LOGS_DIR / f'{env_config.APP_NAME}.log',
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8',
        )

        file_handler.setLevel(level)
        handlers.append(file_handler)

    logging.basicConfig(
        format='%(message)s',
        handlers=handlers,
        level=level,
    )


def get_logger(name: str, level: int | str = env_config.LOG_LEVEL) -> structlog.stdlib.BoundLogger:
    setup_logging(level)
    render_method = structlog.dev.ConsoleRenderer() if env_config.DEBUG else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt=env_config.LOG_DATE_FORMAT, utc=True),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            mask_sensitive_data,
            render_method,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(name)


def mask_data(data: Any, sensitive_keys: list[str] | None = None) -> Any:
    """Recursively mask values stored under sensitive keys"""
    keys = env_config.SENSITIVE_DATA if sensitive_keys is None else sensitive_keys

    if isinstance(data, dict):
        result = {}
        for key, value in data.items():
            if key in keys:
                result[key] = MASK
            elif isinstance(value, str) and value.startswith('{') and value.endswith('}'):
                try:
                    result[key] = mask_data(json.loads(value), keys)
                except json.JSONDecodeError:
                    result[key] = value
            elif key == 'query' and isinstance(value, str):
                # repeated keys (included_tests=a&included_tests=b) collapse to a list
                params: dict[str, Any] = {}
                for param_name, param_value in parse_qsl(value, keep_blank_values=True):
                    if param_name in params:
                        existing = params[param_name]
                        params[param_name] = [*existing, param_value] if isinstance(existing, list) else [existing, param_value]
                    else:
                        params[param_name] = param_value
                result[key] = mask_data(params, keys)
            elif isinstance(value, dict | list):
                result[key] = mask_data(value, keys)
            else:
                result[key] = value
        return result

    if isinstance(data, list):
        return [mask_data(item, keys) for item in data]

    return data


def mask_sensitive_data(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    if 'context' in event_dict:
        event_dict['context'] = mask_data(event_dict['context'])

    return event_dict
