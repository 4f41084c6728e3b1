"""Pytest configuration and shared fixtures."""

import os

import pytest

from callsite_log import facility
from callsite_log.config import LoggingSettings, Settings, StatsdSettings

_SETTINGS_ENV = (
    "CALLSITE_LOG_CONFIG",
    "PROJECT_NAME",
    "LOG_ENABLED",
    "LOG_LEVEL",
    "LOG_FILE",
    "STATSD_ENABLED",
    "STATSD_SAMPLE_RATE",
    "STATSD_EXCLUDE_LEVELS",
)


def pytest_configure(config):
    """Keep the facility on stdout, whatever the developer's shell exports."""
    for name in _SETTINGS_ENV:
        os.environ.pop(name, None)
    os.environ["LOG_FILE"] = "stdout"


@pytest.fixture(autouse=True)
def isolate_singleton(monkeypatch):
    """Give every test a fresh, unbuilt process-wide facility."""
    monkeypatch.setattr(facility, "_instance", None)
    yield


class RecordingSink:
    def __init__(self):
        self.lines = []
        self.closed = False

    def write(self, line):
        self.lines.append(line)

    def close(self):
        self.closed = True


class RecordingMetrics:
    def __init__(self):
        self.calls = []

    def increment(self, metric):
        self.calls.append(metric)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def metrics():
    return RecordingMetrics()


@pytest.fixture
def make_settings():
    """Build Settings with flat keyword overrides."""

    def _make(
        project_name="My App",
        enabled=True,
        level="INFO",
        file="stdout",
        exclude_levels=None,
    ):
        return Settings(
            project_name=project_name,
            logging=LoggingSettings(enabled=enabled, level=level, file=file),
            statsd=StatsdSettings(exclude_levels=exclude_levels or []),
        )

    return _make


@pytest.fixture
def make_facility(sink, metrics, make_settings):
    """Build a LogFacility wired to the recording sink and metrics."""

    def _make(**overrides):
        return facility.LogFacility(make_settings(**overrides), sink=sink, metrics=metrics)

    return _make
