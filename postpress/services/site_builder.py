import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, Field

from postpress.models.post import IndexPage, Post, RenderedPost
from postpress.services.body_renderer import BodyRenderer
from postpress.services.post_index import PostIndex

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class BuildFailure(BaseModel):
    slug: str
    reason: str


class BuildReport(BaseModel):
    written: List[str] = Field(default_factory=list)
    failed: List[BuildFailure] = Field(default_factory=list)


def make_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def index_page_path(number: int) -> str:
    return "index.html" if number == 1 else f"page{number}/index.html"


class SiteBuilder:
    """Writes one HTML page per post plus paginated listing pages."""

    def __init__(
        self,
        index: PostIndex,
        renderer: BodyRenderer,
        output_dir: Union[str, Path],
        *,
        site_title: str = "Blog",
        per_page: int = 10,
        base_url: str = "",
        max_workers: int = 4,
        env: Optional[Environment] = None,
    ):
        self.index = index
        self.renderer = renderer
        self.output_dir = Path(output_dir)
        self.site_title = site_title
        self.per_page = per_page
        self.base_url = (base_url or "").rstrip("/")
        self.max_workers = max(1, max_workers)
        self.env = env or make_environment()
        self.env.globals.update(site_title=self.site_title, url_for=self.url_for)

    def url_for(self, relative_path: str) -> str:
        return f"{self.base_url}/{relative_path}"

    def build(self) -> BuildReport:
        report = BuildReport()
        self.output_dir.mkdir(parents=True, exist_ok=True)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                (post, executor.submit(self.write_post, post)) for post in self.index
            ]
            for post, future in futures:
                try:
                    report.written.append(future.result())
                except Exception as e:
                    logger.error(f"Failed to publish post {post.slug}: {e}")
                    report.failed.append(BuildFailure(slug=post.slug, reason=str(e)))

        for page in self.index.pages(self.per_page):
            report.written.append(self.write_index_page(page))

        logger.info(
            f"Wrote {len(report.written)} pages to {self.output_dir} "
            f"({len(report.failed)} failed)"
        )
        return report

    def render_post_page(self, rendered: RenderedPost) -> str:
        newer, older = self.index.neighbours(rendered.post.slug)
        template = self.env.get_template("post.html")
        return template.render(
            rendered=rendered, post=rendered.post, newer=newer, older=older
        )

    def render_index_page(self, page: IndexPage) -> str:
        template = self.env.get_template("index.html")
        return template.render(
            page=page,
            previous_url=(
                self.url_for(index_page_path(page.number - 1))
                if page.has_previous
                else None
            ),
            next_url=(
                self.url_for(index_page_path(page.number + 1))
                if page.has_next
                else None
            ),
        )

    def write_post(self, post: Post) -> str:
        rendered = self.renderer.render_post(post)
        return self._write(post.url_path, self.render_post_page(rendered))

    def write_index_page(self, page: IndexPage) -> str:
        return self._write(index_page_path(page.number), self.render_index_page(page))

    def _write(self, relative_path: str, html: str) -> str:
        target = self.output_dir / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
        logger.debug(f"Wrote {target}")
        return relative_path
