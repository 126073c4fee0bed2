import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import List, Optional
from pythonjsonlogger import jsonlogger
from greeter.core.config import settings
from greeter.core.context import trace_id_var, client_ip_var

LOG_FORMAT = '%(@timestamp)s %(level)s %(service)s %(mdc)s %(ip)s %(message)s'

# 회전 파일: 10MiB x 3
_LOG_MAX_BYTES = 10 * 1024 * 1024
_LOG_BACKUP_COUNT = 3


def utc_timestamp(created: float) -> str:
    stamp = datetime.fromtimestamp(created, tz=timezone.utc)
    return stamp.strftime('%Y-%m-%dT%H:%M:%S.') + f"{stamp.microsecond // 1000:03d}Z"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def __init__(self, *args, service: str = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service or settings.PROJECT_NAME

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['@timestamp'] = log_record.get('@timestamp') or utc_timestamp(record.created)
        log_record['level'] = record.levelname
        log_record['service'] = self.service
        log_record['mdc'] = {"trace_id": trace_id_var.get()}
        log_record['ip'] = log_record.get('ip') or client_ip_var.get()

        # uvicorn 이 붙이는 필드 제거
        log_record.pop('color_message', None)


def _build_handlers(log_file: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if not log_file:
        return handlers

    try:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_file, maxBytes=_LOG_MAX_BYTES, backupCount=_LOG_BACKUP_COUNT
        ))
    except OSError:
        # 쓰기 불가한 경로면 stdout 만 사용
        pass
    return handlers


def get_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(settings.LOG_LEVEL)
    formatter = CustomJsonFormatter(LOG_FORMAT)
    for handler in _build_handlers(settings.LOG_FILE if log_file is None else log_file):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


logger = get_logger(settings.PROJECT_NAME)
