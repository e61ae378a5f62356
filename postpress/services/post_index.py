import logging
import math
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from postpress.errors import NotFound
from postpress.models.post import IndexPage, Post

logger = logging.getLogger(__name__)


def _sort_key(post: Post):
    # Newest first, then slug ascending for same-day posts
    return (-post.publish_date.toordinal(), post.slug)


class PostIndex:
    """Ordered, read-only view over a snapshot of parsed posts."""

    def __init__(self, posts: Iterable[Post]):
        ordered: List[Post] = []
        by_slug: Dict[str, Post] = {}
        for post in sorted(posts, key=_sort_key):
            if post.slug in by_slug:
                kept = by_slug[post.slug].source_name
                logger.warning(
                    f"Duplicate slug {post.slug!r}: keeping {kept}, "
                    f"dropping {post.source_name}"
                )
                continue
            by_slug[post.slug] = post
            ordered.append(post)

        self._posts: Tuple[Post, ...] = tuple(ordered)
        self._by_slug = by_slug
        self._positions = {post.slug: i for i, post in enumerate(self._posts)}

    @property
    def posts(self) -> Tuple[Post, ...]:
        return self._posts

    def __len__(self) -> int:
        return len(self._posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug

    def get(self, slug: str) -> Post:
        try:
            return self._by_slug[slug]
        except KeyError:
            raise NotFound(slug) from None

    def total_pages(self, per_page: int) -> int:
        if per_page < 1:
            raise ValueError("per_page must be at least 1")
        return max(1, math.ceil(len(self._posts) / per_page))

    def page(self, number: int, per_page: int) -> IndexPage:
        if number < 1:
            raise ValueError("page numbers start at 1")
        total_pages = self.total_pages(per_page)
        if number > total_pages:
            raise NotFound(str(number), kind="page")

        start = (number - 1) * per_page
        return IndexPage(
            posts=list(self._posts[start : start + per_page]),
            number=number,
            per_page=per_page,
            total_pages=total_pages,
            total_posts=len(self._posts),
        )

    def pages(self, per_page: int) -> Iterator[IndexPage]:
        for number in range(1, self.total_pages(per_page) + 1):
            yield self.page(number, per_page)

    def neighbours(self, slug: str) -> Tuple[Optional[Post], Optional[Post]]:
        """Return (newer, older) posts around `slug` for prev/next links."""
        if slug not in self:
            raise NotFound(slug)
        position = self._positions[slug]
        newer = self._posts[position - 1] if position > 0 else None
        older = (
            self._posts[position + 1] if position + 1 < len(self._posts) else None
        )
        return newer, older
