from typing import List, Optional

from pydantic import BaseModel, Field


class PostSummary(BaseModel):
    slug: str
    title: str
    authorName: Optional[str] = None
    publishedAt: str
    url: str
    readingTime: Optional[str] = None
    toc: bool = False


class TocNode(BaseModel):
    level: int
    text: str
    anchorId: str
    children: List["TocNode"] = Field(default_factory=list)


class CodeBlockInfo(BaseModel):
    languageHint: Optional[str] = None
    content: str


class PostDetail(PostSummary):
    tocSticky: bool = False
    html: str
    tocEntries: List[TocNode] = Field(default_factory=list)
    codeBlocks: List[CodeBlockInfo] = Field(default_factory=list)
    newerSlug: Optional[str] = None
    olderSlug: Optional[str] = None


class PostPage(BaseModel):
    posts: List[PostSummary] = Field(default_factory=list)
    page: int
    perPage: int
    totalPages: int
    totalPosts: int
