# api/router.py

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

import config
from .endpoints import health_router, collections_router

# --- Настройка ---
log = logging.getLogger(__name__)
app = FastAPI(title="Collections API")

# --- Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "HEAD"],
    allow_headers=["*"],
)

# --- ГРУППА РОУТЕРОВ API (БЕЗ ПРЕФИКСА) ---
app.include_router(health_router, tags=["Health"])
app.include_router(collections_router, tags=["Collections"])


# --- Точка входа для Uvicorn (если запускается напрямую) ---
def run_api_server(host=config.API_HOST, port=config.API_PORT):
    """Запускает Uvicorn сервер."""
    log.info(f"Запуск Uvicorn-сервера на {host}:{port}")
    uvicorn.run(app, host=host, port=port)
