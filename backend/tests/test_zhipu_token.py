"""
/**
 * @file backend/tests/test_zhipu_token.py
 * @description 智谱 token 生成与缓存单元测试。
 */
"""

import unittest

import jwt

from backend.utils.zhipu_token import ZhipuTokenCache, generate_zhipu_token, split_api_key


SECRET = "s" * 32
API_KEY = f"my-id.{SECRET}"


class TestZhipuToken(unittest.TestCase):
    def test_token_claims_and_header(self):
        token = generate_zhipu_token(API_KEY, 3600, now=1_700_000_000.5)

        header = jwt.get_unverified_header(token)
        self.assertEqual(header["alg"], "HS256")
        self.assertEqual(header["sign_type"], "SIGN")

        claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
        self.assertEqual(claims["api_key"], "my-id")
        self.assertEqual(claims["exp"], 1_700_000_000 + 3600)
        self.assertEqual(claims["timestamp"], 1_700_000_000_500)

    def test_split_rejects_malformed_key(self):
        for bad in ("no-dot", ".secret", "id.", ""):
            with self.assertRaises(ValueError):
                split_api_key(bad)

    def test_cache_reuses_until_near_expiry(self):
        clock = [1_700_000_000.0]
        cache = ZhipuTokenCache(exp_seconds=3600, clock=lambda: clock[0])

        first = cache.get(API_KEY)
        clock[0] += 1000
        self.assertEqual(cache.get(API_KEY), first)

        clock[0] += 2570
        refreshed = cache.get(API_KEY)
        self.assertNotEqual(refreshed, first)

    def test_cache_regenerates_for_new_key(self):
        cache = ZhipuTokenCache(clock=lambda: 1_700_000_000.0)
        first = cache.get(API_KEY)
        other = cache.get(f"other-id.{SECRET}")
        self.assertNotEqual(first, other)
        claims = jwt.decode(other, SECRET, algorithms=["HS256"], options={"verify_exp": False})
        self.assertEqual(claims["api_key"], "other-id")


if __name__ == "__main__":
    unittest.main()
