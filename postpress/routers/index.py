import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from postpress.security import get_settings
from postpress.services.post_index import PostIndex
from postpress.services.post_loader import discover_posts

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/index/rebuild")
def rebuild_index(request: Request, current_settings=Depends(get_settings)):
    """Rediscover posts from disk and swap in a fresh index."""
    try:
        report = discover_posts(
            current_settings.posts_path, max_workers=current_settings.MAX_WORKERS
        )
    except OSError as e:
        logger.error(
            f"Cannot read posts directory {current_settings.posts_path}: {e}"
        )
        raise HTTPException(status_code=500, detail="Posts directory is unreadable")

    index = PostIndex(report.posts)
    request.app.state.post_index = index
    logger.info(f"Index rebuilt with {len(index)} posts")
    return {
        "posts": len(index),
        "skipped": [skipped.name for skipped in report.skipped],
    }
