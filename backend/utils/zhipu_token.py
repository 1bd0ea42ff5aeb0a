"""
/**
 * @file backend/utils/zhipu_token.py
 * @description 智谱 API 鉴权 token 生成（HS256 JWT，api_key 格式为 id.secret）。
 */
"""

from __future__ import annotations

import threading
import time
from typing import Optional, Tuple

import jwt


TOKEN_TTL_SECONDS = 3600
# 过期前提前刷新，避免请求途中过期
REFRESH_MARGIN_SECONDS = 60


def split_api_key(api_key: str) -> Tuple[str, str]:
    key_id, sep, secret = api_key.partition(".")
    if not sep or not key_id or not secret:
        raise ValueError("Zhipu API key must have the form 'id.secret'")
    return key_id, secret


def generate_zhipu_token(api_key: str, exp_seconds: int = TOKEN_TTL_SECONDS, now: Optional[float] = None) -> str:
    key_id, secret = split_api_key(api_key)
    ts = time.time() if now is None else now
    payload = {
        "api_key": key_id,
        "exp": int(ts) + exp_seconds,
        "timestamp": int(ts * 1000),
    }
    return jwt.encode(payload, secret, algorithm="HS256", headers={"sign_type": "SIGN"})


class ZhipuTokenCache:
    """Reuses a signed token until it is about to expire."""

    def __init__(self, exp_seconds: int = TOKEN_TTL_SECONDS, clock=time.time):
        self.exp_seconds = exp_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._api_key: Optional[str] = None
        self._token: Optional[str] = None
        self._expires_at = 0.0

    def get(self, api_key: str) -> str:
        now = self._clock()
        with self._lock:
            fresh = self._token is not None and self._api_key == api_key and now < self._expires_at - REFRESH_MARGIN_SECONDS
            if not fresh:
                self._token = generate_zhipu_token(api_key, self.exp_seconds, now=now)
                self._api_key = api_key
                self._expires_at = int(now) + self.exp_seconds
            return self._token
