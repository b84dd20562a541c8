"""
Pytest configuration and fixtures for texval tests
"""

import pytest

from texval.backend import BackendType, HostDevice
from texval.config import ValidatorConfig

FLIPPING_BACKEND_TYPES = [BackendType.METAL, BackendType.VULKAN]
NON_FLIPPING_BACKEND_TYPES = [BackendType.OPENGL, BackendType.CUSTOM]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "flipping: runs against backends with bottom-up read-back (select with '-m flipping')",
    )


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "flipping_device" in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.flipping)


@pytest.fixture(params=FLIPPING_BACKEND_TYPES, ids=lambda b: b.value)
def flipping_device(request):
    """Host device for each backend whose read-back is bottom-up."""
    return HostDevice(request.param)


@pytest.fixture(params=NON_FLIPPING_BACKEND_TYPES, ids=lambda b: b.value)
def plain_device(request):
    """Host device for each backend whose read-back is top-down."""
    return HostDevice(request.param)


@pytest.fixture
def strict_config():
    return ValidatorConfig(raise_on_mismatch=True, max_reported_mismatches=None)


@pytest.fixture
def lenient_config():
    """Config that returns failing results instead of raising."""
    return ValidatorConfig(raise_on_mismatch=False)


@pytest.fixture(autouse=True)
def _clean_texval_env(monkeypatch):
    """Keep TEXVAL_* settings from the outer environment out of tests."""
    monkeypatch.delenv("TEXVAL_RAISE_ON_MISMATCH", raising=False)
    monkeypatch.delenv("TEXVAL_MAX_REPORTED_MISMATCHES", raising=False)
