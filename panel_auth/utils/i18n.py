from __future__ import annotations

"""
Internationalization (i18n) utility module for handling translations and language preferences.

This module provides functionality for:
- Loading the gettext ``.po`` catalogs shipped with the package
- Translating messages based on user preferences, with placeholder substitution
- Determining user language from request query parameters or headers
- Fallback to the default language, then to the message key itself

Catalogs are parsed with Babel so that no compilation step (``.mo``) is
needed at deploy time.
"""

import os
from typing import Dict, Optional

from babel.messages.pofile import read_po
from fastapi import Request

from panel_auth.core.config.settings import settings
from panel_auth.core.logging import logger

# Store translations for each language
_catalogs: Dict[str, Dict[str, str]] = {}

LOCALES_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "locales"))


def setup_i18n(locales_path: Optional[str] = None) -> None:
    """
    Initialize the internationalization system by loading translations.

    Loads ``messages.po`` for each supported language from the locales
    directory.

    Raises:
        FileNotFoundError: If the locales directory is not found.
    """
    locales_path = locales_path or LOCALES_PATH
    if not os.path.exists(locales_path):
        raise FileNotFoundError(f"Locales directory not found: {locales_path}")

    for lang in settings.SUPPORTED_LANGUAGES:
        po_path = os.path.join(locales_path, lang, "LC_MESSAGES", "messages.po")
        catalog: Dict[str, str] = {}
        if os.path.exists(po_path):
            with open(po_path, "rb") as po_file:
                for message in read_po(po_file, locale=lang):
                    if message.id and message.string:
                        catalog[message.id] = message.string
        else:
            logger.warning("i18n_catalog_missing", lang=lang, path=po_path)

        _catalogs[lang] = catalog
        logger.info("i18n_initialized", language=lang, entries=len(catalog))

    logger.info("i18n_setup_complete", default_locale=settings.DEFAULT_LANGUAGE)


def get_translated_message(key: str, locale: str = settings.DEFAULT_LANGUAGE, **params) -> str:
    """
    Retrieve a translated message for the given key and locale.

    Falls back to the default language and then to the key. Named
    placeholders (``{seconds}``) are substituted from ``params``.

    Args:
        key: The message key to translate.
        locale: The target language code (defaults to DEFAULT_LANGUAGE).
        **params: Values substituted into the translated message.

    Returns:
        The translated message or the original key if translation fails.
    """
    if not _catalogs:
        setup_i18n()

    if locale not in _catalogs:
        logger.warning("unsupported_locale_requested", requested_locale=locale,
                       fallback_locale=settings.DEFAULT_LANGUAGE)
        locale = settings.DEFAULT_LANGUAGE

    translated = _catalogs.get(locale, {}).get(key)
    if translated is None and locale != settings.DEFAULT_LANGUAGE:
        translated = _catalogs.get(settings.DEFAULT_LANGUAGE, {}).get(key)
    if translated is None:
        logger.warning("translation_key_not_found", key=key, locale=locale)
        translated = key

    if params:
        try:
            translated = translated.format(**params)
        except (KeyError, IndexError) as exc:
            logger.warning("translation_format_failed", key=key, locale=locale, error=str(exc))

    return translated


def get_request_language(request: Request) -> str:
    """
    Determine the preferred language from a request.

    Checks language preference in order: query parameter 'lang',
    Accept-Language header, then default language from settings.

    Args:
        request: The FastAPI request object.

    Returns:
        The determined language code.
    """
    lang = request.query_params.get("lang")
    if lang and lang in settings.SUPPORTED_LANGUAGES:
        return lang

    accept_language = request.headers.get("Accept-Language",
                                          settings.DEFAULT_LANGUAGE)
    for lang in accept_language.split(","):
        lang = lang.split(";")[0].strip().split("-")[0]
        if lang in settings.SUPPORTED_LANGUAGES:
            return lang

    return settings.DEFAULT_LANGUAGE
