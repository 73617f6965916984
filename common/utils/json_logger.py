from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import logging.config
import os
import pathlib
import traceback
from datetime import datetime
from logging import LogRecord, Filter


class Logger:
    """Common logging utilities and setup."""

    @staticmethod
    def setup(log_cfg_path: str | pathlib.Path = "log_cfg.json") -> None:
        logging.basicConfig(
            level="INFO",
            format="%(asctime)s - pid:%(process)d [%(levelname)-.1s] %(filename)s:%(lineno)d - %(message)s",
        )

        log_cfg_path = pathlib.Path(log_cfg_path)
        if log_cfg_path.exists() and log_cfg_path.is_file():
            with open(log_cfg_path, "r") as log_cfg_file:
                data = json.load(log_cfg_file)
                logging.config.dictConfig(data)


def log_msg(message: str, **kwargs) -> dict:
    return dict(message=message, **kwargs)


def _get_root_path_len() -> int:
    """Extract len of root for the current file.
    Logic is based on the path: $l2_pathname/ common/utils/json_logger.py
    """
    l0_pathname, _ = os.path.split(__file__)
    l1_pathname, _ = os.path.split(l0_pathname)
    l2_pathname, _ = os.path.split(l1_pathname)
    return len(l2_pathname) + 1


_SKIP_ROOTPATH_LEN = _get_root_path_len()
_BASE_ROOTPATH = __file__[:_SKIP_ROOTPATH_LEN]


def _is_clef_format() -> bool:
    return os.environ.get("LOG_CLEF_FORMAT", "NO").upper() in ("YES", "ON", "TRUE", "1")


def _to_log_value(value):
    """Structured objects (models, records) are logged as their dictionaries."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    elif hasattr(value, "to_string"):
        return value.to_string()
    return value


class JSONFormatter(logging.Formatter):
    def __init__(self, *args, clef_format: bool | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._clef_format = _is_clef_format() if clef_format is None else clef_format

    def format(self, record: LogRecord) -> str:
        if self._clef_format:
            return self._clef_format_record(record)
        return self._simple_format_record(record)

    @staticmethod
    def _get_pathname(record: LogRecord) -> str:
        pathname = record.pathname
        if pathname.startswith(_BASE_ROOTPATH):
            pathname = pathname[_SKIP_ROOTPATH_LEN:]
        return pathname + ":" + str(record.lineno)

    def _clef_format_record(self, record: LogRecord) -> str:
        msg_dict = dict()
        if record.levelname != "INFO":
            msg_dict["@l"] = record.levelname

        msg_dict["@t"] = datetime.fromtimestamp(record.created).isoformat()
        msg_dict["@p"] = self._get_pathname(record)

        if isinstance(record.msg, dict):
            msg = dict(record.msg)
            msg_dict["@mt"] = msg.pop("message", "")
            for k, v in msg.items():
                msg_dict[k] = _to_log_value(v)
        else:
            msg_dict["@m"] = record.getMessage()

        if ctx := getattr(record, "context", None):
            msg_dict["@i"] = ctx

        if record.exc_info:
            exc_type, exc_msg, exc_tb, exc_text = self._get_exc_info(record)
            exc_info = {
                "Type": exc_type,
                "Error": exc_msg,
                "Traceback": exc_tb,
            }
            if exc_text:
                exc_info["Text"] = exc_text
            msg_dict["@x"] = exc_info
        return json.dumps(msg_dict)

    def _simple_format_record(self, record: LogRecord) -> str:
        msg_dict = {
            "level": record.levelname,
            "date": datetime.fromtimestamp(record.created).isoformat(),
            "module": self._get_pathname(record),
        }

        if isinstance(record.msg, dict):
            msg = dict(record.msg)
            base_msg = msg.pop("message", "")
            msg_dict["message"] = base_msg.format(**msg)

            # keep the structured form of records next to the rendered message
            data = {k: v.to_dict() for k, v in msg.items() if hasattr(v, "to_dict")}
            if data:
                msg_dict["data"] = data
        else:
            msg_dict["message"] = record.getMessage()

        if ctx := getattr(record, "context", None):
            msg_dict.update(ctx)

        if record.exc_info:
            exc_type, exc_msg, exc_tb, exc_text = self._get_exc_info(record)
            exc_info = {
                "type": exc_type,
                "error": exc_msg,
                "traceback": exc_tb,
            }
            if exc_text:
                exc_info["text"] = exc_text
            msg_dict["exc_info"] = exc_info

        return json.dumps(msg_dict)

    @staticmethod
    def _get_exc_info(record: LogRecord) -> tuple[str, str, tuple[str, ...], str | None]:
        exc_msg = str(record.exc_info[1])
        exc_type = str(record.exc_info[0])
        exc_tb = map(
            lambda line: line.strip().replace('"', "'").replace("\n", "; ").replace(_BASE_ROOTPATH, ""),
            traceback.format_tb(record.exc_info[2]),
        )
        return exc_type, exc_msg, tuple(exc_tb), record.exc_text or None


_LOG_CTX = contextvars.ContextVar("log_context", default=dict())


class ContextFilter(Filter):
    def filter(self, record: LogRecord) -> bool:
        record.context = _LOG_CTX.get()
        return True


@contextlib.contextmanager
def logging_context(**kwargs):
    old_log_ctx = _LOG_CTX.get()

    new_log_ctx = dict(**old_log_ctx)
    new_log_ctx.update(kwargs)
    _LOG_CTX.set(new_log_ctx)

    try:
        yield
    finally:
        _LOG_CTX.set(old_log_ctx)


def get_logging_context() -> dict:
    return dict(_LOG_CTX.get())
