# tests/conftest.py
from __future__ import annotations

import os

import pytest

from tests.utils import CLASSIC_CASHFLOWS, PROJECT_CASHFLOWS, make_tolerance


@pytest.fixture
def classic_cashflows() -> list[float]:
    return list(CLASSIC_CASHFLOWS)


@pytest.fixture
def project_cashflows() -> list[float]:
    return list(PROJECT_CASHFLOWS)


@pytest.fixture
def tolerance():
    """Factory for ToleranceConfig (overridable)."""

    def _factory(**overrides):
        return make_tolerance(**overrides)

    return _factory


@pytest.fixture
def clean_env(monkeypatch):
    """Drop any FINMATH_* variables leaking in from the developer's shell."""
    for key in list(os.environ):
        if key.startswith("FINMATH_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
