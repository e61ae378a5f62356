from typing import List

from postpress.models.post import Post, RenderedPost, TocEntry
from postpress.schemas.blog import (
    CodeBlockInfo,
    PostDetail,
    PostPage,
    PostSummary,
    TocNode,
)
from postpress.services.body_renderer import BodyRenderer
from postpress.services.post_index import PostIndex


class PostsService:
    def __init__(self, index: PostIndex, renderer: BodyRenderer):
        self.index = index
        self.renderer = renderer

    def list_posts(self, page: int = 1, per_page: int = 10) -> PostPage:
        index_page = self.index.page(page, per_page)
        return PostPage(
            posts=[self._summary(post) for post in index_page.posts],
            page=index_page.number,
            perPage=index_page.per_page,
            totalPages=index_page.total_pages,
            totalPosts=index_page.total_posts,
        )

    def get_post(self, slug: str) -> PostDetail:
        """Render a post on demand. Raises NotFound for unknown slugs."""
        post = self.index.get(slug)
        rendered = self.renderer.render_post(post)
        newer, older = self.index.neighbours(slug)
        return PostDetail(
            **self._summary(post).model_dump(),
            tocSticky=rendered.toc_sticky,
            html=rendered.html,
            tocEntries=_toc_nodes(rendered.toc),
            codeBlocks=_code_blocks(rendered),
            newerSlug=newer.slug if newer else None,
            olderSlug=older.slug if older else None,
        )

    def _summary(self, post: Post) -> PostSummary:
        return PostSummary(
            slug=post.slug,
            title=post.title,
            authorName=post.author_name,
            publishedAt=post.publish_date.isoformat(),
            url=_permalink(self.renderer.substitution, post),
            readingTime=post.reading_time,
            toc=post.toc_enabled,
        )


def _permalink(base_url, post: Post) -> str:
    return f"{base_url or ''}/{post.url_path}"


def _toc_nodes(entries: List[TocEntry]) -> List[TocNode]:
    return [
        TocNode(
            level=entry.heading.level,
            text=entry.heading.text,
            anchorId=entry.heading.anchor_id,
            children=_toc_nodes(entry.children),
        )
        for entry in entries
    ]


def _code_blocks(rendered: RenderedPost) -> List[CodeBlockInfo]:
    return [
        CodeBlockInfo(languageHint=block.language_hint, content=block.content)
        for block in rendered.code_blocks
    ]
