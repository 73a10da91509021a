# backend/app/main.py
"""
App FastAPI: CORS, lifespan (abre/cierra el store), routers + middleware de trazas.
"""
import logging, time

# ⬇️ MUY ARRIBA, ANTES DE IMPORTAR CONFIG/ROUTERS
from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv())  # carga backend/.env sin pisar el entorno

from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.errors import StoreUnavailable, register_error_handlers
from .db.store import open_store
from .services.csv_import import read_csv
from .telemetry.logging import setup_logging
from .telemetry.otel import setup_otel
from .routes import therapists, directory

setup_logging()
http_logger = logging.getLogger("app.http")
logger = logging.getLogger("app")


async def _prepare_store(store) -> None:
    # SEED_CSV solo siembra el store en memoria; Mongo se carga con scripts/import_therapists.py
    if settings.SEED_CSV and settings.STORE_BACKEND == "memory":
        docs, _ = read_csv(Path(settings.SEED_CSV))
        await store.replace_all(docs)
    try:
        await store.ensure_indexes()
    except StoreUnavailable as e:
        # la app arranca igual; cada request fallará con 503 hasta que vuelva
        logger.warning(f"No se pudieron crear índices: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_otel()
    store = open_store(settings)
    app.state.store = store
    await _prepare_store(store)
    try:
        yield
    finally:
        await store.close()
        app.state.store = None

app = FastAPI(title="Therapist Finder API", version="0.1.0", lifespan=lifespan)
register_error_handlers(app)

# ---------------- CORS ----------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# ---------------- Middleware de trazas ----------------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        dur = round(time.time() - start, 4)
        http_logger.info(f"{request.method} {request.url.path} -> {response.status_code} in {dur}s")
        return response
    except Exception as e:
        dur = round(time.time() - start, 4)
        http_logger.exception(f"{request.method} {request.url.path} EXC after {dur}s: {e}")
        raise

# ---------------- Healthcheck ----------------
@app.get("/health", tags=["misc"])
async def health():
    return {"status": "ok"}

# ---------------- Routers ----------------
app.include_router(therapists.router, prefix="/providers", tags=["providers"])
app.include_router(directory.router,  prefix="/directory", tags=["directory"])
