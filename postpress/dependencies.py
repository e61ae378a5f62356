from fastapi import Depends, Request

from postpress.security import get_settings
from postpress.services.body_renderer import BodyRenderer
from postpress.services.post_index import PostIndex
from postpress.services.posts_service import PostsService


def get_post_index(request: Request) -> PostIndex:
    return request.app.state.post_index


def get_body_renderer(current_settings=Depends(get_settings)) -> BodyRenderer:
    return BodyRenderer(
        base_url=current_settings.BASE_URL,
        highlight_code=current_settings.HIGHLIGHT_CODE,
    )


def get_posts_service(
    index=Depends(get_post_index),
    renderer=Depends(get_body_renderer),
):
    return PostsService(index=index, renderer=renderer)
