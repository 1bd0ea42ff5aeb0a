"""
/**
 * @file backend/services/provider_registry_service.py
 * @description 翻译服务注册表：按 Provider 枚举构建适配器实例（进程启动时构建一次）。
 */
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from backend.config import Settings
from backend.models import DEFAULT_PROVIDER, Provider
from backend.services.errors import InputError
from backend.services.llm_client_service import DeepSeekTranslator, ZhipuTranslator
from backend.services.translator_client_service import BaseTranslator, DeepLTranslator, GoogleTranslator


logger = logging.getLogger(__name__)

_ADAPTER_CLASSES = {
    Provider.DEEPL: DeepLTranslator,
    Provider.GOOGLE: GoogleTranslator,
    Provider.DEEPSEEK: DeepSeekTranslator,
    Provider.ZHIPU: ZhipuTranslator,
}


def parse_provider(value: Optional[str]) -> Provider:
    if value is None or value == "":
        return DEFAULT_PROVIDER
    try:
        return Provider(value)
    except ValueError:
        allowed = ", ".join(p.value for p in Provider)
        raise InputError(f"Unknown translation api '{value}'. Expected one of: {allowed}") from None


class ProviderRegistry:
    def __init__(self, settings: Settings, adapters: Optional[Dict[Provider, BaseTranslator]] = None):
        self.settings = settings
        self._adapters = adapters or {provider: cls(settings) for provider, cls in _ADAPTER_CLASSES.items()}

    def get(self, provider: Provider) -> BaseTranslator:
        return self._adapters[provider]

    @property
    def max_concurrency(self) -> int:
        return self.settings.max_concurrency

    def status(self) -> Dict[str, bool]:
        return {provider.value: adapter.is_configured() for provider, adapter in self._adapters.items()}

    def log_status(self) -> None:
        for name, ready in self.status().items():
            if ready:
                logger.info("%s translation service is ready.", name)
            else:
                logger.info("%s translation service is not configured.", name)


def build_provider_registry(settings: Settings) -> ProviderRegistry:
    return ProviderRegistry(settings)
