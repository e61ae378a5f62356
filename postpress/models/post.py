import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from postpress.utils import calculate_reading_time


class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1, le=6)
    text: str
    anchor_id: str


class TocEntry(BaseModel):
    heading: Heading
    children: List["TocEntry"] = Field(default_factory=list)


class CodeBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    language_hint: Optional[str] = None
    content: str  # raw text, never executed


class Post(BaseModel):
    """A single date-stamped post as discovered on disk."""

    model_config = ConfigDict(frozen=True)

    slug: str = Field(..., min_length=1)
    publish_date: datetime.date
    title: str
    author_name: Optional[str] = None
    toc_enabled: bool = False
    toc_sticky: bool = False
    body: str
    source_name: str = ""
    extra: Dict[str, Any] = Field(default_factory=dict)

    @property
    def url_path(self) -> str:
        """Date-based permalink relative to the site root."""
        return f"{self.publish_date:%Y/%m/%d}/{self.slug}.html"

    @property
    def reading_time(self) -> str:
        return calculate_reading_time(self.body)


class RenderedBody(BaseModel):
    html: str
    headings: List[Heading] = Field(default_factory=list)
    code_blocks: List[CodeBlock] = Field(default_factory=list)


class RenderedPost(BaseModel):
    post: Post
    html: str
    headings: List[Heading] = Field(default_factory=list)
    toc: List[TocEntry] = Field(default_factory=list)
    code_blocks: List[CodeBlock] = Field(default_factory=list)

    @property
    def toc_sticky(self) -> bool:
        return self.post.toc_sticky


class IndexPage(BaseModel):
    posts: List[Post]
    number: int
    per_page: int
    total_pages: int
    total_posts: int

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 1
