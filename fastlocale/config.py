import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from dotenv import load_dotenv

# Setup logger
logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = 'messages'

# Registration option names mapped to LocaleConfig fields
OPTION_NAMES = {
    'locales': 'locales',
    'defaultLocale': 'default_locale',
    'directory': 'directory',
    'queryParameter': 'query_parameter',
    'languageHeaderField': 'language_header_field',
    'domain': 'domain',
}


class ConfigurationError(ValueError):
    """Raised when the locale configuration cannot be used to serve requests"""
    pass


def extract_default_locale(locales: Optional[Sequence[str]]) -> str:
    """Return the first configured locale, used when no default is configured.

    Args:
        locales: Ordered locale codes

    Raises:
        ConfigurationError: If no locales are given or the sequence is empty
    """
    if locales is None:
        raise ConfigurationError("No locales defined!")
    if len(locales) == 0:
        raise ConfigurationError("Locales array is empty!")
    return locales[0]


@dataclass(frozen=True)
class LocaleConfig:
    """Locale settings, built once at registration and read-only afterwards"""
    locales: Tuple[str, ...]
    default_locale: Optional[str] = None
    directory: Optional[Union[str, Path]] = None
    query_parameter: Optional[str] = None
    language_header_field: Optional[str] = None
    domain: str = DEFAULT_DOMAIN

    def __post_init__(self):
        if self.locales is None:
            raise ConfigurationError("No locales defined!")
        if isinstance(self.locales, str):
            raise ConfigurationError(f"Locales must be a sequence of codes, got '{self.locales}'")

        # frozen dataclass, hence object.__setattr__
        object.__setattr__(self, 'locales', tuple(self.locales))

        if not self.locales:
            raise ConfigurationError("Locales array is empty!")

        if self.default_locale and self.default_locale not in self.locales:
            logger.warning(f"Default locale '{self.default_locale}' is not one of the configured locales {list(self.locales)}")

    @property
    def resolved_default_locale(self) -> str:
        """The configured default locale, or the first configured locale"""
        return self.default_locale or extract_default_locale(self.locales)

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> 'LocaleConfig':
        """Build a config from registration options.

        Accepts `locales`, `defaultLocale`, `directory`, `queryParameter`,
        `languageHeaderField` and `domain`. Other keys are ignored.
        """
        if options is None:
            options = {}

        kwargs = {}
        for name, value in options.items():
            field = OPTION_NAMES.get(name)
            if field is None:
                logger.debug(f"Ignoring unknown locale option '{name}'")
                continue
            kwargs[field] = value

        if kwargs.get('locales') is None:
            raise ConfigurationError("No locales defined!")

        return cls(**kwargs)

    @classmethod
    def from_env(cls, **overrides) -> 'LocaleConfig':
        """Build a config from environment variables (and a .env file).

        Keyword overrides that are not None take precedence over the environment.
        """
        load_dotenv()

        locales = os.getenv('LOCALES')
        values = {
            'locales': [code.strip() for code in locales.split(',') if code.strip()] if locales else None,
            'default_locale': os.getenv('DEFAULT_LOCALE') or None,
            'directory': os.getenv('LOCALES_DIRECTORY') or None,
            'query_parameter': os.getenv('LOCALE_QUERY_PARAMETER') or None,
            'language_header_field': os.getenv('LOCALE_HEADER_FIELD') or None,
            'domain': os.getenv('LOCALE_DOMAIN', DEFAULT_DOMAIN),
        }
        values.update({name: value for name, value in overrides.items() if value is not None})

        return cls(**values)
