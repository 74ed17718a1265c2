"""
Label translation.

Locale tables are packaged YAML files (`nearfeed/i18n/locales/<locale>.yaml`).
A `Translator` is a plain value built for one locale and handed to whatever renders
labels (API, CLI); changing language means building a new translator, not mutating
shared state.

Lookup order: requested locale -> fallback locale (French, the app default) -> the key itself.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Literal

import yaml

SUPPORTED_LOCALES = ("en", "fr", "ar")
FALLBACK_LOCALE = "fr"
_RTL_LANGUAGES = {"ar"}


@lru_cache
def load_locale_table(locale: str) -> dict[str, str]:
    """Read one packaged locale table (unknown locales yield an empty table)."""
    if locale not in SUPPORTED_LOCALES:
        return {}
    text = resources.files("nearfeed.i18n").joinpath("locales").joinpath(f"{locale}.yaml").read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid locale table for {locale}; expected a mapping.")
    return {str(k): str(v) for k, v in data.items()}


def normalize_locale(locale: str | None) -> str:
    """Reduce tags like `fr-CA` or `AR` to a supported base language (else the fallback)."""
    base = (locale or "").strip().replace("_", "-").split("-")[0].lower()
    return base if base in SUPPORTED_LOCALES else FALLBACK_LOCALE


class Translator:
    def __init__(self, locale: str | None):
        self.locale = normalize_locale(locale)
        self._table = load_locale_table(self.locale)
        self._fallback = load_locale_table(FALLBACK_LOCALE)

    @property
    def direction(self) -> Literal["ltr", "rtl"]:
        return "rtl" if self.locale in _RTL_LANGUAGES else "ltr"

    def t(self, key: str) -> str:
        return self._table.get(key) or self._fallback.get(key) or key

    def labels(self) -> dict[str, str]:
        """Full label table for this locale, with fallback entries filled in."""
        return {**self._fallback, **self._table}
