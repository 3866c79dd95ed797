"""Shared fixtures."""

import json
import logging

import pytest

from clean_scaffold.feature import FeatureSpec
from clean_scaffold.logging_config import LOGGER_NAME

USER_LITERAL = '{"id": 1, "name": "John Doe", "is_active": true}'

LOGIN_RESPONSE_LITERAL = """{
  "token": "x",
  "user": {"id": 1, "name": "A"},
  "expires_in": 3600
}"""

PRODUCTS_LITERAL = (
    '[{"id": 1, "name": "Product 1", "price": 99.99,'
    ' "tags": ["electronics"], "in_stock": true}]'
)

AUTH_FEATURE = {
    "name": "auth",
    "endpoints": [
        {
            "name": "login",
            "path": "/auth/login",
            "verb": "POST",
            "request": {"email": "a@b.c", "password": "secret"},
            "response": LOGIN_RESPONSE_LITERAL,
        },
        {
            "name": "getProfile",
            "path": "/profile",
            "verb": "GET",
            "request": {"id": 1},
            "response": {"id": 1, "name": "A", "roles": ["admin"]},
        },
        {"name": "logout", "path": "/auth/logout", "verb": "DELETE"},
    ],
}


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def auth_feature() -> FeatureSpec:
    return FeatureSpec.from_dict(json.loads(json.dumps(AUTH_FEATURE)))


@pytest.fixture
def auth_feature_file(tmp_path):
    path = tmp_path / "auth.json"
    path.write_text(json.dumps(AUTH_FEATURE), encoding="utf-8")
    return path
