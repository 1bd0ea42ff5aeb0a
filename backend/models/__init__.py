"""
/**
 * @file backend/models/__init__.py
 * @description 数据模型导出。
 */
"""

from .translate_request_model import DEFAULT_PROVIDER, Provider, TranslateTextRequest

__all__ = ["DEFAULT_PROVIDER", "Provider", "TranslateTextRequest"]
