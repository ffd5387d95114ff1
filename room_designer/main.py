import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from room_designer.db.connection import init_databases, close_databases
from room_designer.routers import projects, products, files
from room_designer.models.scene import RoomPreset
from room_designer.presets import ROOM_PRESETS
from room_designer.events import subscribe

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_databases()
    yield
    close_databases()

app = FastAPI(title="Room Designer API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(products.router, prefix="/api/products", tags=["products"])
app.include_router(files.router, prefix="/api/files", tags=["files"])


@app.get("/api/presets", response_model=list[RoomPreset])
def get_room_presets():
    return ROOM_PRESETS


@app.get("/api/events")
async def sse_events():
    """Server-Sent Events endpoint for project notifications."""
    return StreamingResponse(
        subscribe(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
