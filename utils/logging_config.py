# utils/logging_config.py

import logging
import logging.handlers
from pathlib import Path
import json
from datetime import datetime

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10 MB


def setup_logging(level: str = "INFO",
                  log_dir: str = "logs",
                  name: str = "comic_reader") -> logging.Logger:
    """
    Configure the root logger with console, rotating text and JSON handlers

    Calling this again replaces the handlers it installed earlier.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        if getattr(handler, '_comic_reader', False):
            root.removeHandler(handler)
            handler.close()
    
    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    
    # File handler (rotating)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path / f"{name}.log",
        maxBytes=MAX_LOG_BYTES,
        backupCount=5
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    
    # JSON handler for structured logs
    json_handler = logging.handlers.RotatingFileHandler(
        log_path / f"{name}_structured.json",
        maxBytes=MAX_LOG_BYTES,
        backupCount=5
    )
    json_handler.setLevel(logging.INFO)
    json_handler.setFormatter(JSONFormatter())
    
    for handler in (console_handler, file_handler, json_handler):
        handler._comic_reader = True
        root.addHandler(handler)
    
    return logging.getLogger(name)


def log_operation(logger: logging.Logger, operation: str, **kwargs):
    """Log structured operation data"""
    data = {
        'operation': operation,
        'timestamp': datetime.now().isoformat(),
        **kwargs
    }
    logger.info(json.dumps(data, default=str))


class JSONFormatter(logging.Formatter):
    """Format logs as JSON"""
    
    def format(self, record):
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }
        
        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)
        
        return json.dumps(log_data)
