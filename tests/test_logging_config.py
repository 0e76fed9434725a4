# tests/test_logging_config.py

import json
import logging
import sys

from utils.logging_config import JSONFormatter, log_operation, setup_logging

def test_setup_logging_writes_files(tmp_path):
    logger = setup_logging("WARNING", str(tmp_path), name="reader_test")
    
    log_operation(logger, 'open', pages=5)
    for handler in logging.getLogger().handlers:
        handler.flush()
    
    structured = (tmp_path / "reader_test_structured.json").read_text().splitlines()
    record = json.loads(structured[-1])
    assert record['logger'] == 'reader_test'
    assert json.loads(record['message'])['operation'] == 'open'
    assert (tmp_path / "reader_test.log").exists()

def test_setup_logging_is_repeatable(tmp_path):
    setup_logging("INFO", str(tmp_path))
    setup_logging("INFO", str(tmp_path))
    
    ours = [h for h in logging.getLogger().handlers if getattr(h, '_comic_reader', False)]
    assert len(ours) == 3

def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.getLogger("x").makeRecord(
            "x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )
    
    data = json.loads(JSONFormatter().format(record))
    assert data['level'] == 'ERROR'
    assert 'ValueError: boom' in data['exception']
