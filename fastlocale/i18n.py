import gettext
import logging
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

# Setup logger
logger = logging.getLogger(__name__)


class I18n:
    """Loads gettext catalogs for a fixed set of locales from a translation directory"""

    def __init__(self, directory: Optional[Union[str, Path]], locales: Sequence[str], default_locale: str, domain: str = 'messages'):
        """Initialize I18n with a translation directory

        Args:
            directory: Directory containing <locale>/LC_MESSAGES/<domain>.mo files
            locales: Supported locale codes
            default_locale: Locale whose catalog backs every other one
            domain: gettext domain (catalog file name)
        """
        self.directory = Path(directory) if directory is not None else None
        self.locales = tuple(locales)
        self.default_locale = default_locale
        self.domain = domain
        self._translations: Dict[str, gettext.NullTranslations] = {}
        logger.info(f"Initialized I18n with translation directory: {self.directory}")

        if self.directory is None:
            logger.warning("No translation directory configured, messages will not be translated")
        elif not self.directory.exists():
            logger.warning(f"Translation directory does not exist: {self.directory}")

    def _load(self, locale: str) -> gettext.NullTranslations:
        if self.directory is None or not self.directory.exists():
            return gettext.NullTranslations()

        languages = [locale] if locale == self.default_locale else [locale, self.default_locale]
        translation = gettext.translation(
            self.domain,
            self.directory,
            languages=languages,
            fallback=True
        )

        if type(translation) is gettext.NullTranslations:
            if locale == self.default_locale:
                logger.error(f"Default translation file not found in {self.directory}, using NullTranslations")
            else:
                logger.warning(f"No translation file found for locale '{locale}' in {self.directory}")
        else:
            logger.info(f"Successfully loaded translation for locale '{locale}'")

        return translation

    def get_translation(self, locale: str) -> gettext.NullTranslations:
        """Get translation object for a specific locale

        Catalogs of configured locales are cached. Any other code is loaded
        on demand and falls back to the default locale's catalog.

        Args:
            locale: Language code (en, fr, etc.)
        """
        if locale not in self.locales and locale != self.default_locale:
            # the code becomes part of a catalog path
            if '/' in locale or '\\' in locale or '..' in locale or '\x00' in locale:
                logger.warning(f"Locale '{locale}' is not a valid catalog name, using default catalog")
                return self.get_translation(self.default_locale)

            logger.debug(f"Locale '{locale}' is not configured, loading without cache")
            return self._load(locale)

        if locale not in self._translations:
            logger.debug(f"Translation for locale '{locale}' not in cache, loading from {self.directory}")
            self._translations[locale] = self._load(locale)
        else:
            logger.debug(f"Using cached translation for locale '{locale}'")

        return self._translations[locale]

    def preload(self) -> None:
        """Load the catalogs of every configured locale"""
        for locale in self.locales:
            self.get_translation(locale)

    def create_context(self, locale: Optional[str] = None) -> 'TranslationContext':
        """Create a TranslationContext for the given locale

        Args:
            locale: Initial locale, the default locale if omitted
        """
        return TranslationContext(self, locale or self.default_locale)


class TranslationContext:
    """Request scoped locale holder exposing translation functions.

    One instance belongs to exactly one request; its locale is never shared.
    """

    def __init__(self, i18n_instance: I18n, locale: str):
        logger.debug(f"Creating TranslationContext for locale: {locale}")
        self.i18n = i18n_instance
        self._locale = locale
        self._translation = i18n_instance.get_translation(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> str:
        """Switch this context to another locale and return it"""
        if locale != self._locale:
            self._locale = locale
            self._translation = self.i18n.get_translation(locale)
        return self._locale

    def get_locale(self) -> str:
        return self._locale

    def translate(self, message: str, **params) -> str:
        """Translate a message, interpolating %(name)s placeholders from params"""
        translated = self._translation.gettext(message)
        if params:
            translated = translated % params
        return translated

    # gettext style aliases, also picked up by Babel extraction
    _ = translate
    gettext = translate

    def ngettext(self, singular: str, plural: str, n: int, **params) -> str:
        """Plural translation, the catalog picks the form"""
        translated = self._translation.ngettext(singular, plural, n)
        if params:
            translated = translated % params
        return translated

    def template_context(self) -> dict:
        """Names merged into the rendering context of view responses"""
        return {
            "_": self.translate,
            "gettext": self.translate,
            "ngettext": self.ngettext,
            "translate": self.translate,
            "get_locale": self.get_locale,
            "locale": self._locale,
        }

    def __repr__(self) -> str:
        return f"TranslationContext(locale={self._locale!r})"
