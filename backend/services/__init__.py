"""
/**
 * @file backend/services/__init__.py
 * @description 业务服务层导出。
 */
"""

from .errors import ConfigurationError, InputError, TranslationError, UpstreamError
from .llm_client_service import DeepSeekTranslator, ZhipuTranslator
from .provider_registry_service import ProviderRegistry, build_provider_registry, parse_provider
from .translation_service import parse_languages, perform_translation
from .translator_client_service import BaseTranslator, DeepLTranslator, GoogleTranslator

__all__ = [
    "BaseTranslator",
    "ConfigurationError",
    "DeepLTranslator",
    "DeepSeekTranslator",
    "GoogleTranslator",
    "InputError",
    "ProviderRegistry",
    "TranslationError",
    "UpstreamError",
    "ZhipuTranslator",
    "build_provider_registry",
    "parse_languages",
    "parse_provider",
    "perform_translation",
]
