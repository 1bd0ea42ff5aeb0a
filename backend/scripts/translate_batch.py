"""
/**
 * @file backend/scripts/translate_batch.py
 * @description 命令行批量翻译：读取 Excel，调用与 API 相同的调度逻辑，输出 JSON。
 */
"""

import argparse
import asyncio
import json
import sys

from backend.config import load_settings
from backend.services import (
    TranslationError,
    build_provider_registry,
    parse_languages,
    parse_provider,
    perform_translation,
)
from backend.services.spreadsheet_service import read_source_rows


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Translate a key/en spreadsheet into several languages.")
    parser.add_argument("--file", required=True, help="xlsx file, first sheet read as (key, en)")
    parser.add_argument("--languages", required=True, help='JSON list, e.g. \'["FR", "DE"]\'')
    parser.add_argument("--api", default=None, help="DeepL | Google | DeepSeek | Zhipu")
    args = parser.parse_args(argv)

    registry = build_provider_registry(load_settings())
    try:
        with open(args.file, "rb") as f:
            rows = read_source_rows(f.read())
        provider = parse_provider(args.api)
        data = asyncio.run(perform_translation(rows, parse_languages(args.languages), provider, registry))
    except TranslationError as e:
        sys.stderr.write(f"{type(e).__name__}: {e}\n")
        return 1

    sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2))
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
