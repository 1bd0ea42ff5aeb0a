"""
/**
 * @file backend/services/translation_service.py
 * @description 批量翻译调度：行 × 目标语言展开为任务，限流并发执行，结果按行回填。
 */
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from backend.models import Provider
from backend.services.errors import InputError
from backend.services.provider_registry_service import ProviderRegistry


logger = logging.getLogger(__name__)

SOURCE_FIELD = "en"
# 全局并发上限：配置或参数只能调低，不能调高
MAX_CONCURRENCY = 2


@dataclass(frozen=True)
class WorkItem:
    row_index: int
    language: str
    text: str


def parse_languages(raw: Any) -> List[str]:
    """Decode the JSON encoded target language list sent by the client."""
    if raw is None or raw == "":
        raise InputError("No target languages provided")
    value = raw
    if isinstance(raw, str):
        try:
            value = json.loads(raw)
        except ValueError as e:
            raise InputError(f"Invalid languages JSON: {e}") from e
    if not isinstance(value, list) or not all(isinstance(code, str) and code for code in value):
        raise InputError("languages must be a JSON list of language codes")
    if not value:
        raise InputError("No target languages provided")
    return value


def validate_rows(rows: Any) -> List[Dict[str, Any]]:
    if not isinstance(rows, list) or not rows:
        raise InputError("No source rows provided")
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise InputError(f"Row {index} is not an object")
        if not isinstance(row.get(SOURCE_FIELD), str):
            raise InputError(f"Row {index} has no '{SOURCE_FIELD}' text")
    return rows


def build_work_items(rows: Sequence[Dict[str, Any]], languages: Sequence[str]) -> List[WorkItem]:
    return [
        WorkItem(row_index=index, language=language, text=row[SOURCE_FIELD])
        for index, row in enumerate(rows)
        for language in languages
    ]


async def perform_translation(
    source_data: List[Dict[str, Any]],
    target_languages: List[str],
    provider: Provider,
    registry: ProviderRegistry,
    max_concurrency: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Translate every row into every target language with the selected provider.

    All (row, language) pairs run as independent tasks behind one semaphore
    created for this call, so no more than ``max_concurrency`` provider calls
    are in flight at once; the limit never exceeds ``MAX_CONCURRENCY``.
    Any failure aborts the whole batch: remaining tasks are cancelled and the
    first error is raised, no partial rows are returned.
    Results are placed by work item position, so a language listed twice ends
    up holding the value from its last occurrence.
    """
    rows = validate_rows(source_data)
    if not target_languages:
        raise InputError("No target languages provided")

    translator = registry.get(provider)
    translator.ensure_ready()

    items = build_work_items(rows, target_languages)
    limit = min(max_concurrency or registry.max_concurrency, MAX_CONCURRENCY)
    semaphore = asyncio.Semaphore(limit)
    outputs: List[Optional[str]] = [None] * len(items)

    logger.info(
        "[%s] translating %d rows x %d languages (%d calls, concurrency %d)",
        provider.value, len(rows), len(target_languages), len(items), limit,
    )

    async def run(position: int, item: WorkItem) -> None:
        async with semaphore:
            outputs[position] = await asyncio.to_thread(translator.translate, item.text, item.language)

    tasks = [asyncio.ensure_future(run(position, item)) for position, item in enumerate(items)]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        # 首个失败即中止：取消尚未完成的任务（已在线程中执行的请求无法中断）
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    results = [dict(row) for row in rows]
    for item, text in zip(items, outputs):
        results[item.row_index][item.language] = text
    return results
