"""Pytest configuration and fixtures for testing.

This module provides pytest fixtures for:
- Recording display sinks
- Scripted agent managers
- Kernels wired to both
- Resetting structlog configuration changed by CLI tests
"""

import pytest
import structlog

from ai_kernel.agent import ScriptedAgentManager
from ai_kernel.config import KernelConfig
from ai_kernel.display import RecordingSink
from ai_kernel.kernel import AIKernel


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sink():
    """Create a fresh recording sink."""
    return RecordingSink()


@pytest.fixture
def make_agent():
    """Factory for scripted agents replaying a list of events."""

    def _make(events=None, configured=True, failure=None):
        return ScriptedAgentManager(events or [], configured=configured, failure=failure)

    return _make


@pytest.fixture
def make_kernel(sink):
    """Factory for kernels writing to the shared recording sink."""

    def _make(agent, config=None):
        return AIKernel(
            agent,
            sink,
            provider_name="Anthropic",
            model_name="claude-test",
            config=config or KernelConfig(),
        )

    return _make


CONFIG_ENV_VARS = [
    "AI_PROVIDER_ID",
    "AI_PROVIDER_NAME",
    "AI_PROVIDER",
    "AI_MODEL",
    "AI_API_KEY",
    "AI_KERNEL_ECHO_SUPPRESSION",
    "AI_KERNEL_AUTO_APPROVE_REASON",
    "AI_KERNEL_PROMPT_SUFFIX",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Unset configuration variables, restoring them (and removing any set
    by a loaded .env file) after the test."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def env_file(tmp_path):
    """Factory writing a .env file and returning its path."""

    def _write(**values):
        path = tmp_path / "test.env"
        path.write_text("".join(f"{key}={value}\n" for key, value in values.items()))
        return str(path)

    return _write
