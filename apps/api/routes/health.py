from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..db import db_ok

router = APIRouter(tags=["health"])

@router.get("/healthz")
def healthz():
    ok = db_ok()
    return JSONResponse({"db": "ok" if ok else "down"}, status_code=200 if ok else 503)
