from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration,
log file rotation and that the library's own modules log through it.
"""

import logging
import time
from pathlib import Path

import pytest

from sbomtree.core.services.dependency_tree import DependencyTreeService
from sbomtree.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from sbomtree.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR
from sbomtree.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging():
    """Clean up root logger handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def _wait_for(path: Path, needle: str, timeout: float = 2.0) -> str:
    deadline = time.monotonic() + timeout
    content = ""
    while time.monotonic() < deadline:
        if path.exists():
            content = path.read_text(encoding="utf-8")
            if needle in content:
                break
        time.sleep(0.05)
    return content


def test_logging_idempotency() -> None:
    """Multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_force_reconfigures() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    first_listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)
    root = logging.getLogger()

    assert getattr(root, _QUEUE_LISTENER_ATTR) is not first_listener
    assert root.level == logging.DEBUG
    assert len([h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]) == 1


def test_queue_listener_architecture() -> None:
    """The root logger gets a single tagged QueueHandler and a running listener."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    ours = [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]

    assert len(ours) == 1
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is True


def test_no_handlers_requested_leaves_root_untouched() -> None:
    configure_logging(LoggingConfig(console=False, log_file=None))

    root = logging.getLogger()
    assert not [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_log_rotation(tmp_path: Path) -> None:
    """File rotation happens once the size limit is exceeded."""
    log_file = tmp_path / "rotate.log"
    cfg = LoggingConfig(level="DEBUG", console=False, log_file=str(log_file), max_bytes=100, backup_count=1)

    configure_logging(cfg)
    logger = get_logger("test_rotate")
    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "rotate.log.1").exists(), "Rotation backup file was not created."


def test_library_logs_reach_file(tmp_path: Path, abc_records, abc_edges) -> None:
    log_file = tmp_path / "logs" / "sbomtree.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    DependencyTreeService.load(abc_records, abc_edges)

    content = _wait_for(log_file, "Dependency forest built")
    assert "sbomtree.core.analysis.forest_builder" in content


def test_from_app_config() -> None:
    cfg = LoggingConfig.from_app_config({"log_level": "WARNING"}, console=False)

    assert cfg.level == "WARNING"
    assert cfg.console is False


def test_service_log_level_drives_root_logger(tmp_path: Path, abc_records, abc_edges) -> None:
    service = DependencyTreeService.load(abc_records, abc_edges, {"log_level": "debug"})
    log_file = tmp_path / "debug.log"

    cfg = service.logging_config(console=False, log_file=str(log_file))
    configure_logging(cfg)

    assert cfg.level == "DEBUG"
    assert cfg.log_file == str(log_file)
    assert logging.getLogger().level == logging.DEBUG
