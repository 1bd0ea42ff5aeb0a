"""
/**
 * @file backend/tests/test_settings_merge.py
 * @description 配置合并与凭据解析单元测试。
 */
"""

import json
import os
import tempfile
import unittest
from unittest.mock import patch

from backend.config.settings import Settings, read_settings


class TestSettingsMerge(unittest.TestCase):
    def test_merge_base_and_local(self):
        with tempfile.TemporaryDirectory() as tmp:
            base_path = os.path.join(tmp, "config.json")
            local_path = os.path.join(tmp, "config.local.json")
            example_path = os.path.join(tmp, "config.example.json")

            with open(base_path, "w") as f:
                json.dump({"api_keys": {"deepl": "a"}, "models": {"deepseek": "m1"}, "endpoints": {"deepseek": "x"}}, f)
            with open(local_path, "w") as f:
                json.dump({"api_keys": {"deepl": "b"}}, f)
            with open(example_path, "w") as f:
                json.dump({}, f)

            s = read_settings(base_path=base_path, local_path=local_path, example_path=example_path)
            self.assertEqual(s.api_keys.get("deepl"), "b")
            self.assertEqual(s.models.get("deepseek"), "m1")

    def test_example_used_when_base_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            example_path = os.path.join(tmp, "config.example.json")
            with open(example_path, "w") as f:
                json.dump({"endpoints": {"zhipu": "https://example.invalid"}, "translation": {"max_concurrency": 3}}, f)

            s = read_settings(
                base_path=os.path.join(tmp, "missing.json"),
                local_path=os.path.join(tmp, "missing.local.json"),
                example_path=example_path,
            )
            self.assertEqual(s.endpoints.get("zhipu"), "https://example.invalid")
            self.assertEqual(s.max_concurrency, 2)


class TestSettingsAccessors(unittest.TestCase):
    def test_defaults(self):
        s = Settings(raw={})
        self.assertEqual(s.max_concurrency, 2)
        self.assertEqual(s.request_timeout, 60.0)

    def test_concurrency_can_only_be_lowered(self):
        self.assertEqual(Settings(raw={"translation": {"max_concurrency": 1}}).max_concurrency, 1)
        self.assertEqual(Settings(raw={"translation": {"max_concurrency": 8}}).max_concurrency, 2)

    def test_invalid_concurrency_falls_back(self):
        for value in (0, -1, "4", True):
            self.assertEqual(Settings(raw={"translation": {"max_concurrency": value}}).max_concurrency, 2)

    def test_env_overrides_config_keys(self):
        s = Settings(raw={"api_keys": {"deepl": "from-config", "deepseek": "ds-config"}})
        with patch.dict(os.environ, {"DEEPL_API_KEY": "from-env"}, clear=True):
            self.assertEqual(s.resolve_deepl_key(), "from-env")
            self.assertEqual(s.resolve_deepseek_key(), "ds-config")
            self.assertIsNone(s.resolve_zhipu_key())
            self.assertIsNone(s.resolve_google_credentials())

    def test_google_credentials_from_env(self):
        with patch.dict(os.environ, {"GOOGLE_APPLICATION_CREDENTIALS": "/tmp/sa.json"}, clear=True):
            self.assertEqual(Settings(raw={}).resolve_google_credentials(), "/tmp/sa.json")


if __name__ == "__main__":
    unittest.main()
