"""
/**
 * @file backend/services/errors.py
 * @description 翻译相关异常：配置缺失 / 上游失败 / 输入非法。
 */
"""

from __future__ import annotations

from typing import Optional


class TranslationError(Exception):
    """Base class for every failure surfaced by the translation services."""


class ConfigurationError(TranslationError):
    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider


class UpstreamError(TranslationError):
    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class InputError(TranslationError):
    pass
