"""
/**
 * @file backend/services/language_service.py
 * @description 语言代码归一化：LLM 使用的语言全称表，以及各翻译服务的代码映射。
 */
"""

from __future__ import annotations

from types import MappingProxyType


LANGUAGE_NAMES = MappingProxyType({
    "EN": "English",
    "FR": "French",
    "DE": "German",
    "JA": "Japanese",
    "zh-TW": "Traditional Chinese",
    "AR": "Arabic",
    "IT": "Italian",
    "TH": "Thai",
    "ES": "Spanish",
    "PT": "Portuguese",
    "KO": "Korean",
    "NL": "Dutch",
    "SV": "Swedish",
    "RU": "Russian",
    "ID": "Indonesian",
    "MS": "Malay",
    "PL": "Polish",
    "NO": "Norwegian",
    "DA": "Danish",
    "GA": "Irish",
    "FI": "Finnish",
    "CS": "Czech",
    "VI": "Vietnamese",
    "EL": "Greek",
    "SK": "Slovak",
    "HE": "Hebrew",
    "TR": "Turkish",
    "RO": "Romanian",
    "HU": "Hungarian",
    "BG": "Bulgarian",
    "KK": "Kazakh",
    "SR": "Serbian",
    "SL": "Slovenian",
    "LT": "Lithuanian",
    "AZ": "Azerbaijani",
    "KA": "Georgian",
    "LV": "Latvian",
    "ET": "Estonian",
    "IS": "Icelandic",
    "HR": "Croatian",
})

DEEPL_CHINESE_CODE = "zh"


def language_name(code: str) -> str:
    """Human readable name for the LLM prompt; unmapped codes pass through."""
    return LANGUAGE_NAMES.get(code, code)


def deepl_target_code(code: str) -> str:
    # DeepL 简繁中文统一使用 zh
    if code.startswith("zh"):
        return DEEPL_CHINESE_CODE
    return code
