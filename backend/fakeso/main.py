# fakeso/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fakeso.config import settings
from fakeso.core.db import init_db, close_db

from fakeso.api.v1.routers import auth, settings as settings_router
from fakeso.services.accounts import purge_expired_registrations

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def on_startup():
    await init_db()
    # Drop pending registrations whose verification link expired while we were down
    removed = await purge_expired_registrations()
    logger.info("[startup] database ready, expired registrations removed: %s", removed)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix="/api/v1")
app.include_router(settings_router.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"ok": True}
