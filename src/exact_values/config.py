from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

DEFAULT_CURRENCY_ENV = "EXACT_VALUES_DEFAULT_CURRENCY"
FALLBACK_CURRENCY_CODE = "EUR"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings.

    Attributes:
        default_currency_code: Currency used when parsed money text carries no currency token.
    """

    default_currency_code: str = FALLBACK_CURRENCY_CODE


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment (and a `.env` file, if present).

    The result is computed once; call `get_settings.cache_clear()` to reload.
    """
    load_dotenv()
    code = os.environ.get(DEFAULT_CURRENCY_ENV, FALLBACK_CURRENCY_CODE).strip().upper()
    return Settings(default_currency_code=code or FALLBACK_CURRENCY_CODE)
