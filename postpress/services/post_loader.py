import datetime
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from postpress.errors import MalformedFrontMatter, UnrecognizedFilename
from postpress.models.post import Post
from postpress.services.filename_resolver import resolve_filename
from postpress.services.front_matter import parse_front_matter
from postpress.services.post_index import PostIndex

logger = logging.getLogger(__name__)

RECOGNIZED_KEYS = ("title", "author_name", "toc", "toc_sticky", "date")


class SkippedFile(BaseModel):
    name: str
    reason: str


class LoadReport(BaseModel):
    posts: List[Post] = Field(default_factory=list)
    skipped: List[SkippedFile] = Field(default_factory=list)


def load_post(path: Union[str, Path]) -> Post:
    """Read and parse one post file. Raises on anything that makes it unusable."""
    path = Path(path)
    publish_date, slug = resolve_filename(path.name)
    text = path.read_text(encoding="utf-8-sig")

    try:
        metadata, body = parse_front_matter(text, source=path.name)
    except MalformedFrontMatter as e:
        logger.warning(f"{e}; treating the whole file as body")
        metadata, body = {}, text

    return build_post(path.name, publish_date, slug, metadata, body)


def build_post(
    filename: str,
    publish_date: datetime.date,
    slug: str,
    metadata: Dict[str, Any],
    body: str,
) -> Post:
    return Post(
        slug=slug,
        publish_date=_resolve_date(metadata.get("date"), publish_date, filename),
        title=_derive_title(metadata.get("title"), slug, filename),
        author_name=_optional_text(metadata.get("author_name")),
        toc_enabled=metadata.get("toc") or False,
        toc_sticky=metadata.get("toc_sticky") or False,
        body=body,
        source_name=filename,
        extra={k: v for k, v in metadata.items() if k not in RECOGNIZED_KEYS},
    )


def discover_posts(directory: Union[str, Path], max_workers: int = 4) -> LoadReport:
    """
    Parse every *.md file directly under `directory`.
    Failures are isolated per file; an unreadable directory aborts the run.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Posts directory not found: {directory}")

    paths = sorted(p for p in directory.iterdir() if p.suffix == ".md" and p.is_file())
    report = LoadReport()

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = [(path, executor.submit(load_post, path)) for path in paths]
        for path, future in futures:
            try:
                report.posts.append(future.result())
            except UnrecognizedFilename as e:
                logger.info(f"Skipping {path.name}: {e}")
                report.skipped.append(SkippedFile(name=path.name, reason=str(e)))
            except Exception as e:
                logger.warning(f"Failed to load post {path.name}: {e}")
                report.skipped.append(SkippedFile(name=path.name, reason=str(e)))

    logger.info(
        f"Loaded {len(report.posts)} posts from {directory} "
        f"({len(report.skipped)} skipped)"
    )
    return report


def build_post_index(directory: Union[str, Path], max_workers: int = 4) -> PostIndex:
    return PostIndex(discover_posts(directory, max_workers=max_workers).posts)


def _derive_title(value: Any, slug: str, filename: str) -> str:
    if value not in (None, ""):
        return str(value)
    logger.warning(f"No title in {filename}, deriving one from the slug")
    return slug.replace("-", " ").replace("_", " ").title()


def _optional_text(value: Any) -> Optional[str]:
    if value in (None, ""):
        return None
    return str(value)


def _resolve_date(
    value: Any, fallback: datetime.date, filename: str
) -> datetime.date:
    """Front-matter `date` wins over the filename prefix when it parses."""
    if value is None:
        return fallback
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            # Accepts Jekyll-style "2024-04-23 10:00:00 +0000" too
            return datetime.date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    logger.warning(f"Ignoring unparseable date {value!r} in {filename}")
    return fallback
