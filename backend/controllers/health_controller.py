"""
/**
 * @file backend/controllers/health_controller.py
 * @description 健康检查控制器（各翻译服务凭据是否已配置）。
 */
"""

from fastapi import APIRouter, Request


router = APIRouter()


@router.get("/health")
def health(request: Request):
    registry = request.app.state.provider_registry
    providers_status = registry.status()

    return {
        "status": "ok" if any(providers_status.values()) else "degraded",
        "checks": {
            "providers": providers_status,
            "max_concurrency": registry.max_concurrency,
        },
    }
