from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.logger import configure_logging
from app.routers.tracking import router as tracking_router

configure_logging(get_settings().log_level)

app = FastAPI(title="Ocean Tracking Engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(tracking_router)


@app.get("/")
async def root():
    return {"status": "ONLINE", "engine": "Ocean Tracking V1"}
