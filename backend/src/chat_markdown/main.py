"""FastAPI application entry - chat message markdown parser."""

from . import config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import router
from .logging_config import configure_logging

configure_logging(config.LOG_LEVEL)

app = FastAPI(
    title="Chat Markdown",
    description="Parse chat message markdown into typed, renderable blocks",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


@app.get("/")
async def root():
    return {"service": "chat-markdown", "docs": "/docs"}
