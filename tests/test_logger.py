"""
Tests for logging configuration
"""

import logging
from task_api.config.settings import Settings
from task_api.utils.logger import setup_logger


def test_console_only_by_default(monkeypatch):
    """Test that no file is written without LOG_DIR"""
    monkeypatch.setattr(Settings, "LOG_DIR", None)
    logger = setup_logger("task_api.test_console")
    
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_log_dir_adds_file_handler(monkeypatch, tmp_path):
    """Test that LOG_DIR adds a task_api.log file handler"""
    monkeypatch.setattr(Settings, "LOG_DIR", str(tmp_path / "logs"))
    logger = setup_logger("task_api.test_file")
    
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert (tmp_path / "logs").is_dir()
    
    logger.info("written")
    file_handlers[0].flush()
    assert "written" in (tmp_path / "logs" / "task_api.log").read_text()
    
    for handler in logger.handlers:
        handler.close()
