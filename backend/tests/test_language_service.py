import unittest

from backend.services.language_service import LANGUAGE_NAMES, deepl_target_code, language_name


class TestLanguageService(unittest.TestCase):
    def test_language_name_lookup(self):
        self.assertEqual(language_name("FR"), "French")
        self.assertEqual(language_name("zh-TW"), "Traditional Chinese")
        self.assertEqual(len(LANGUAGE_NAMES), 40)

    def test_unmapped_code_passes_through(self):
        self.assertEqual(language_name("zh-CN"), "zh-CN")
        self.assertEqual(language_name("fr"), "fr")

    def test_deepl_collapses_chinese_variants(self):
        self.assertEqual(deepl_target_code("zh-TW"), "zh")
        self.assertEqual(deepl_target_code("zh-CN"), "zh")
        self.assertEqual(deepl_target_code("zh"), "zh")
        self.assertEqual(deepl_target_code("FR"), "FR")

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            LANGUAGE_NAMES["XX"] = "Nowhere"


if __name__ == "__main__":
    unittest.main()
