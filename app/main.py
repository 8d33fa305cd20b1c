from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.config import get_settings
from app.errors import register_error_handlers
from app.routers import auth, thumbnails, video_meta, videos
from app.services.assets import assets_root, ensure_assets_dir

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_assets_dir()
    yield


app = FastAPI(title="Video Hosting API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth.router)
app.include_router(video_meta.router)
app.include_router(thumbnails.router)
app.include_router(videos.router)

app.mount("/assets", StaticFiles(directory=assets_root(), check_dir=False), name="assets")


@app.get("/")
def root():
    return {"message": "Video Hosting API", "docs": "/docs"}
