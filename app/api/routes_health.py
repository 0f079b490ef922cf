from fastapi import APIRouter

from app.db import core

router = APIRouter()


@router.get("/health", summary="Health check endpoint", description="Reports whether the database answers a trivial query.")
async def health_check():
    database = "ok" if await core.ping_db(core.engine) else "unavailable"
    return {"status": "ok", "database": database}
