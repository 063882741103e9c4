# -*- coding: utf-8 -*-
"""Location: ./tests/unit/jsonretain/test_config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for jsonretain.config and how settings reach the encoder.
"""

# Standard
from dataclasses import dataclass

# Third-Party
import orjson

# First-Party
from jsonretain.config import get_settings, settings, Settings
from jsonretain.descriptors import json_field
from jsonretain.record import dumps, loads, Record


@dataclass
class Page(Record):
    title: str = json_field("title", default="")
    slug: str = json_field("slug", default="")


def test_defaults():
    s = Settings()
    assert s.sort_keys is True
    assert s.indent is False
    assert s.strict_types is True


def test_dump_options():
    assert Settings().dump_options() == orjson.OPT_PASSTHROUGH_DATACLASS | orjson.OPT_SORT_KEYS
    assert Settings(sort_keys=False).dump_options() == orjson.OPT_PASSTHROUGH_DATACLASS
    assert Settings(indent=True, sort_keys=False).dump_options() == orjson.OPT_PASSTHROUGH_DATACLASS | orjson.OPT_INDENT_2


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JSONRETAIN_SORT_KEYS", "false")
    monkeypatch.setenv("jsonretain_indent", "true")
    s = Settings()
    assert s.sort_keys is False
    assert s.indent is True


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
    assert settings.sort_keys is get_settings().sort_keys


def test_unsorted_output_keeps_retained_then_declared_order(monkeypatch):
    monkeypatch.setenv("JSONRETAIN_SORT_KEYS", "false")
    get_settings.cache_clear()

    page = loads('{"title":"Contact Us","slug":"contact","icon":"email"}', Page)
    page.slug = "contact-us"

    assert dumps(page) == b'{"icon":"email","title":"Contact Us","slug":"contact-us"}'


def test_indented_output(monkeypatch):
    monkeypatch.setenv("JSONRETAIN_INDENT", "true")
    get_settings.cache_clear()

    assert dumps(Page(title="t", slug="s")) == b'{\n  "slug": "s",\n  "title": "t"\n}'


def test_lazy_settings_follow_cache_clears(monkeypatch):
    assert settings.strict_types is True

    monkeypatch.setenv("JSONRETAIN_STRICT_TYPES", "false")
    get_settings.cache_clear()

    assert settings.strict_types is False
    assert repr(settings).startswith("LazySettingsWrapper(")
