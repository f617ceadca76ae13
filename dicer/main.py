from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from dicer.api.routes import router
from dicer.config import get_cors_origins, get_log_level

app = FastAPI(title="dicer", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)

# The board UI is served from a different origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "dicer", "version": "0.1.0"}
