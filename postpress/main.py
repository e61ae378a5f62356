import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from postpress.routers import index, posts
from postpress.security import get_api_key
from postpress.services.post_index import PostIndex
from postpress.services.post_loader import build_post_index
from postpress.settings import settings
from postpress.utils import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Postpress API", description="Date-stamped Markdown posts")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        app.state.post_index = build_post_index(
            settings.posts_path, max_workers=settings.MAX_WORKERS
        )
    except OSError as e:
        logger.error(f"Could not load posts from {settings.posts_path}: {e}")
        app.state.post_index = PostIndex([])
    logger.info(f"Serving {len(app.state.post_index)} posts")

    try:
        yield
    finally:
        logger.info("Postpress API shut down")


app.router.lifespan_context = lifespan

app.include_router(posts.router)
app.include_router(index.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "Postpress API is running"}
