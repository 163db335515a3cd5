"""FastAPI application entrypoint."""
from __future__ import annotations

from fastapi import FastAPI

from fish_router.api.endpoints import router as trajectory_router


app = FastAPI(title="Fish Router")
app.include_router(trajectory_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
