"""Per-request locale resolution and view localization for FastAPI applications."""

from fastlocale.config import ConfigurationError, LocaleConfig, extract_default_locale
from fastlocale.i18n import I18n, TranslationContext
from fastlocale.plugin import (
    LANGUAGE_CODE_PARAMETER,
    LocaleNotAvailable,
    LocalePlugin,
    LocalizedRoute,
    get_i18n,
)
from fastlocale.views import ViewResponse, Views

__version__ = "0.1.0"

__all__ = [
    "LANGUAGE_CODE_PARAMETER",
    "ConfigurationError",
    "I18n",
    "LocaleConfig",
    "LocaleNotAvailable",
    "LocalePlugin",
    "LocalizedRoute",
    "TranslationContext",
    "ViewResponse",
    "Views",
    "extract_default_locale",
    "get_i18n",
]
