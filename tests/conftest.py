"""Shared pytest fixtures for action stream tests.

Provides:
- ``workspace``: temp workspace dir wired into settings for the file tools
- ``recorder``: fake ``call_tool`` that records every invocation
- ``metrics_collector``: the global MetricsCollector, reset per test
"""

from __future__ import annotations

import pytest

# Ensure built-in tools are registered at test startup
import tools  # noqa: F401

from config.settings import get_settings
from services.metrics import get_metrics_collector
from tests.helpers import ToolRecorder


@pytest.fixture
def recorder() -> ToolRecorder:
    return ToolRecorder()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point ``settings.workspace_dir`` at a fresh temp directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    monkeypatch.setenv("WORKSPACE_DIR", str(root))
    get_settings.cache_clear()
    yield root
    get_settings.cache_clear()


@pytest.fixture
def metrics_collector():
    """The global MetricsCollector, reset before and after the test."""
    collector = get_metrics_collector()
    collector.reset()
    yield collector
    collector.reset()
