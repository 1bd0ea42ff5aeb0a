"""
/**
 * @file backend/utils/__init__.py
 * @description 工具函数导出。
 */
"""

from .zhipu_token import ZhipuTokenCache, generate_zhipu_token, split_api_key

__all__ = ["ZhipuTokenCache", "generate_zhipu_token", "split_api_key"]
