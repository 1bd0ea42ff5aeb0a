"""
/**
 * @file backend/services/translator_client_service.py
 * @description 翻译服务适配器：统一的 translate(text, target) 接口，DeepL / Google Cloud 实现。
 */
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import deepl
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as google_auth_exceptions
from google.cloud import translate_v2

from backend.config import Settings
from backend.models import Provider
from backend.services.errors import ConfigurationError, UpstreamError
from backend.services.language_service import deepl_target_code


logger = logging.getLogger(__name__)

SOURCE_LANGUAGE = "en"


class BaseTranslator:
    """
    Uniform translate capability over one backing provider.

    ``ensure_ready`` performs the credential check without touching the
    network; ``translate`` calls it again so a direct call fails the same way.
    Blank source text translates to an empty string without a provider call.
    """

    provider: Provider

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def name(self) -> str:
        return self.provider.value

    def is_configured(self) -> bool:
        try:
            self.ensure_ready()
        except ConfigurationError:
            return False
        return True

    def ensure_ready(self) -> None:
        raise NotImplementedError

    def translate(self, text: str, target_language: str) -> str:
        self.ensure_ready()
        if not (text or "").strip():
            return ""
        return self._translate(text, target_language)

    def _translate(self, text: str, target_language: str) -> str:
        raise NotImplementedError


class DeepLTranslator(BaseTranslator):
    provider = Provider.DEEPL

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self._client: Optional[deepl.Translator] = None
        self._client_key: Optional[str] = None
        self._lock = threading.Lock()

    def ensure_ready(self) -> None:
        if not self.settings.resolve_deepl_key():
            raise ConfigurationError(self.name, "DEEPL_API_KEY is not configured.")

    def _get_client(self) -> deepl.Translator:
        key = self.settings.resolve_deepl_key()
        with self._lock:
            if self._client is None or self._client_key != key:
                self._client = deepl.Translator(key)
                self._client_key = key
            return self._client

    def _translate(self, text: str, target_language: str) -> str:
        target = deepl_target_code(target_language)
        try:
            result = self._get_client().translate_text(text, source_lang=SOURCE_LANGUAGE, target_lang=target)
        except deepl.DeepLException as e:
            raise UpstreamError(self.name, str(e), getattr(e, "http_status_code", None)) from e
        except (ValueError, TypeError) as e:
            raise UpstreamError(self.name, str(e)) from e
        return result.text


class GoogleTranslator(BaseTranslator):
    provider = Provider.GOOGLE

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self._client: Any = None
        self._lock = threading.Lock()

    def ensure_ready(self) -> None:
        if not self.settings.resolve_google_credentials():
            raise ConfigurationError(self.name, "Google Cloud credentials are not configured.")

    def _get_client(self) -> Any:
        with self._lock:
            if self._client is None:
                try:
                    self._client = translate_v2.Client()
                except google_auth_exceptions.DefaultCredentialsError as e:
                    raise ConfigurationError(self.name, f"Google Cloud credentials are not usable: {e}") from e
            return self._client

    def _translate(self, text: str, target_language: str) -> str:
        client = self._get_client()
        # 目标语言代码原样传递（不做中文映射）
        try:
            result = client.translate(text, target_language=target_language, format_="text")
        except google_exceptions.GoogleAPICallError as e:
            raise UpstreamError(self.name, str(e), getattr(e, "code", None)) from e
        except google_auth_exceptions.GoogleAuthError as e:
            raise UpstreamError(self.name, str(e)) from e

        if not isinstance(result, dict) or not isinstance(result.get("translatedText"), str):
            raise UpstreamError(self.name, f"Unexpected response: {result!r}")
        return result["translatedText"]
