"""
Tests for environment detection and what it exposes in error responses.
"""
import asyncio
import json
from unittest.mock import MagicMock

import pytest

from answerboard.core.env import get_env_name, is_local_env, is_production_env
from answerboard.exception_handlers import global_exception_handler


def _clear_env_cache():
    get_env_name.cache_clear()
    is_local_env.cache_clear()
    is_production_env.cache_clear()


@pytest.fixture(autouse=True)
def fresh_env_cache():
    _clear_env_cache()
    yield
    _clear_env_cache()


@pytest.mark.parametrize("env,local,production", [
    ("local", True, False),
    ("DEV", True, False),
    ("test", False, False),
    ("staging", False, False),
    ("prod", False, True),
    ("production", False, True),
])
def test_env_detection(monkeypatch, env, local, production):
    monkeypatch.setenv("ENV", env)
    assert is_local_env() is local
    assert is_production_env() is production


def test_unhandled_error_detail_hidden_under_test(monkeypatch):
    monkeypatch.setenv("ENV", "test")

    response = asyncio.run(global_exception_handler(MagicMock(), RuntimeError("secret detail")))

    assert response.status_code == 500
    assert json.loads(response.body) == {"detail": "Internal server error"}


def test_unhandled_error_detail_shown_locally(monkeypatch):
    monkeypatch.setenv("ENV", "local")

    response = asyncio.run(global_exception_handler(MagicMock(), RuntimeError("secret detail")))

    assert "secret detail" in json.loads(response.body)["detail"]
