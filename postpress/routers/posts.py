import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from postpress import dependencies as deps
from postpress.errors import NotFound
from postpress.schemas.blog import PostDetail, PostPage
from postpress.security import get_settings
from postpress.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=PostPage)
def list_posts(
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    service: PostsService = Depends(deps.get_posts_service),
    current_settings=Depends(get_settings),
):
    """Get one page of post summaries, newest first."""
    try:
        return service.list_posts(
            page=page, per_page=per_page or current_settings.PAGE_SIZE
        )
    except NotFound:
        raise HTTPException(status_code=404, detail="Page not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=PostDetail)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single rendered post by slug."""
    try:
        return service.get_post(slug)
    except NotFound:
        raise HTTPException(status_code=404, detail="Post not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
