"""
/**
 * @file backend/controllers/translate_controller.py
 * @description 批量翻译控制器：JSON 文本翻译、Excel 上传翻译、模板下载。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import Response

from backend.models import TranslateTextRequest
from backend.services import (
    ConfigurationError,
    InputError,
    ProviderRegistry,
    UpstreamError,
    parse_languages,
    parse_provider,
    perform_translation,
)
from backend.services.spreadsheet_service import TEMPLATE_FILENAME, XLSX_MEDIA_TYPE, build_template, read_source_rows


router = APIRouter()
logger = logging.getLogger(__name__)


def get_provider_registry(request: Request) -> ProviderRegistry:
    return request.app.state.provider_registry


@router.get("/api/template")
def download_template():
    return Response(
        content=build_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )


async def handle_translation_request(
    source_data: Any,
    languages: Optional[str],
    api: Optional[str],
    registry: ProviderRegistry,
) -> Dict[str, Any]:
    if not languages:
        raise HTTPException(status_code=400, detail={"error": "没有提供目标语言"})

    provider = None
    try:
        target_languages = parse_languages(languages)
        provider = parse_provider(api)
        translated = await perform_translation(source_data, target_languages, provider, registry)
    except InputError as e:
        raise HTTPException(status_code=400, detail={"error": str(e)})
    except (ConfigurationError, UpstreamError) as e:
        logger.error("[%s] 翻译过程中出错: %s", e.provider, e)
        raise HTTPException(status_code=500, detail={"error": f"使用 {e.provider} 翻译时出错: {e}"})
    except Exception as e:
        name = provider.value if provider is not None else api
        logger.exception("[%s] 翻译过程中出错", name)
        raise HTTPException(status_code=500, detail={"error": f"使用 {name} 翻译时出错: {e}"})

    return {"message": "翻译成功！", "data": translated}


@router.post("/api/translate-text")
async def translate_text(req: TranslateTextRequest, registry: ProviderRegistry = Depends(get_provider_registry)):
    if not req.sourceData:
        raise HTTPException(status_code=400, detail={"error": "没有提供需要翻译的文本数据"})
    return await handle_translation_request(req.sourceData, req.languages, req.api, registry)


@router.post("/api/translate")
async def translate_file(
    file: Optional[UploadFile] = File(None),
    languages: Optional[str] = Form(None),
    api: Optional[str] = Form(None),
    registry: ProviderRegistry = Depends(get_provider_registry),
):
    if file is None:
        raise HTTPException(status_code=400, detail={"error": "没有提供文件"})
    content = await file.read()
    try:
        source_data = read_source_rows(content)
    except InputError as e:
        raise HTTPException(status_code=400, detail={"error": str(e)})
    return await handle_translation_request(source_data, languages, api, registry)
