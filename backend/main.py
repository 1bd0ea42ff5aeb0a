"""
/**
 * @file backend/main.py
 * @description FastAPI 应用入口（MVC：仅装配路由与中间件），启动时构建翻译服务注册表。
 */
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from backend.config import load_settings, reload_settings, CONFIG_PATH, CONFIG_LOCAL_PATH
from backend.controllers import health_router, translate_router
from backend.services import build_provider_registry

app = FastAPI()
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def refresh_provider_registry(settings=None):
    settings = settings or load_settings()
    app.state.provider_registry = build_provider_registry(settings)
    return app.state.provider_registry


class ConfigEventHandler(FileSystemEventHandler):
    """Handler for config file changes"""
    def on_modified(self, event):
        if event.is_directory:
            return

        # Watchdog returns absolute paths usually
        if event.src_path == CONFIG_PATH or event.src_path == CONFIG_LOCAL_PATH:
            try:
                refresh_provider_registry(reload_settings())
            except Exception:
                logger.exception("Failed to apply reloaded config")

_observer = None

@app.on_event("startup")
async def startup_event():
    global _observer
    registry = refresh_provider_registry(load_settings())
    registry.log_status()
    # Start Watchdog Observer
    try:
        event_handler = ConfigEventHandler()
        _observer = Observer()
        config_dir = os.path.dirname(CONFIG_PATH)
        _observer.schedule(event_handler, config_dir, recursive=False)
        _observer.start()
        logger.info("Config watcher started on %s", config_dir)
    except OSError as e:
        logger.warning("Failed to start config watcher: %s", e)


@app.on_event("shutdown")
async def shutdown_event():
    global _observer

    if _observer:
        _observer.stop()
        _observer.join()
        _observer = None

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(translate_router)
