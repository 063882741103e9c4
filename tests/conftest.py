# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
"""

# Standard
import os

# Third-Party
import pytest

# First-Party
from jsonretain.config import get_settings
from jsonretain.descriptors import clear_descriptor_cache


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test with default settings and empty caches."""
    for key in list(os.environ):
        if key.upper().startswith("JSONRETAIN_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    clear_descriptor_cache()
    yield
    get_settings.cache_clear()
    clear_descriptor_cache()
