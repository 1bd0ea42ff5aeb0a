"""
/**
 * @file backend/models/translate_request_model.py
 * @description 批量翻译请求模型（Pydantic）与翻译服务枚举。
 */
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class Provider(str, Enum):
    DEEPL = "DeepL"
    GOOGLE = "Google"
    DEEPSEEK = "DeepSeek"
    ZHIPU = "Zhipu"


DEFAULT_PROVIDER = Provider.DEEPL


class TranslateTextRequest(BaseModel):
    # 每行至少包含 key / en，其余字段原样返回
    sourceData: Optional[Any] = None
    # JSON 编码的语言代码列表，例如 '["FR", "DE"]'
    languages: Optional[str] = None
    api: Optional[str] = None
