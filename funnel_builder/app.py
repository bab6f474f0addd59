"""
FUNNEL BUILDER — FastAPI app
Démarrer : uvicorn funnel_builder.app:app --reload --port 8002
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .router import router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="Funnel Builder — Editor de páginas", version="1.0.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.include_router(router)


@app.on_event("startup")
def startup():
    from .database import init_db
    init_db()
    log.info("DB initialisée (SQLite)")


@app.get("/health")
def health():
    return {"status": "ok", "service": "funnel_builder", "version": "1.0.0"}
