from __future__ import annotations

import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from hub.api_nodes import router as nodes_router
from yandexgpt_nodes.config import get_settings, setup_logging


# Load local environment variables for development parity
load_dotenv(override=True)
setup_logging(get_settings().log_level)

app = FastAPI(title="Yandex GPT node")

# CORS for external frontends
_cors_env = os.getenv("CORS_ORIGINS", "*").strip()
if _cors_env == "*":
	origins = ["*"]
else:
	origins = [o.strip() for o in _cors_env.split(",") if o.strip()]
app.add_middleware(
	CORSMiddleware,
	allow_origins=origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

app.include_router(nodes_router)


@app.get("/health")
async def health():
	# Lightweight liveness endpoint
	return {"status": "ok"}
