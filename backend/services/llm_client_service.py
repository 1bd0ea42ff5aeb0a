"""
/**
 * @file backend/services/llm_client_service.py
 * @description 基于大模型 chat/completions 的翻译适配器：DeepSeek / 智谱 GLM。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from backend.config import Settings
from backend.models import Provider
from backend.services.errors import ConfigurationError, UpstreamError
from backend.services.language_service import language_name
from backend.services.translator_client_service import BaseTranslator
from backend.utils.zhipu_token import ZhipuTokenCache, split_api_key


logger = logging.getLogger(__name__)


class ChatCompletionTranslator(BaseTranslator):
    """Prompt-engineered translation over an OpenAI-style chat completion endpoint."""

    endpoint_key: str
    default_endpoint: str
    default_model: str
    system_prompt: str
    user_template: str

    @property
    def endpoint(self) -> str:
        return self.settings.endpoints.get(self.endpoint_key) or self.default_endpoint

    @property
    def model(self) -> str:
        return self.settings.models.get(self.endpoint_key) or self.default_model

    def _authorization(self) -> str:
        raise NotImplementedError

    def build_messages(self, text: str, target_language: str) -> list:
        user = self.user_template.format(language=language_name(target_language), text=text)
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": user},
        ]

    def _extract_content(self, data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise UpstreamError(self.name, f"Malformed response: {data!r}") from e
        if not isinstance(content, str):
            raise UpstreamError(self.name, f"Malformed response: {data!r}")
        return content.strip()

    def _translate(self, text: str, target_language: str) -> str:
        headers: Dict[str, str] = {"Authorization": self._authorization(), "Content-Type": "application/json"}
        payload = {"model": self.model, "messages": self.build_messages(text, target_language)}
        try:
            response = requests.post(self.endpoint, headers=headers, json=payload, timeout=self.settings.request_timeout)
        except requests.RequestException as e:
            raise UpstreamError(self.name, str(e)) from e

        if response.status_code != 200:
            raise UpstreamError(self.name, f"HTTP {response.status_code}: {response.text}", response.status_code)
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(self.name, f"Invalid JSON response: {response.text}") from e
        return self._extract_content(data)


class DeepSeekTranslator(ChatCompletionTranslator):
    provider = Provider.DEEPSEEK
    endpoint_key = "deepseek"
    default_endpoint = "https://api.deepseek.com/chat/completions"
    default_model = "deepseek-chat"
    system_prompt = "You are a professional, authentic translation engine, translating directly without explanations."
    user_template = 'Translate the following English text to {language}: "{text}"'

    def ensure_ready(self) -> None:
        if not self.settings.resolve_deepseek_key():
            raise ConfigurationError(self.name, "DEEPSEEK_API_KEY is not configured.")

    def _authorization(self) -> str:
        return f"Bearer {self.settings.resolve_deepseek_key()}"


class ZhipuTranslator(ChatCompletionTranslator):
    provider = Provider.ZHIPU
    endpoint_key = "zhipu"
    default_endpoint = "https://open.bigmodel.cn/api/paas/v4/chat/completions"
    default_model = "glm-4"
    system_prompt = "You are a professional translation engine. Directly provide the translation without any additional text."
    user_template = 'Please translate the following English text into {language}: "{text}"'

    def __init__(self, settings: Settings, token_cache: Optional[ZhipuTokenCache] = None):
        super().__init__(settings)
        self.token_cache = token_cache or ZhipuTokenCache()

    def ensure_ready(self) -> None:
        api_key = self.settings.resolve_zhipu_key()
        if not api_key:
            raise ConfigurationError(self.name, "ZHIPU_API_KEY is not configured.")
        try:
            split_api_key(api_key)
        except ValueError as e:
            raise ConfigurationError(self.name, str(e)) from e

    def _authorization(self) -> str:
        return f"Bearer {self.token_cache.get(self.settings.resolve_zhipu_key())}"
