import datetime
import textwrap
from pathlib import Path

import pytest

from postpress.errors import NotFound
from postpress.models.post import Post


def write_post(directory: Path, name: str, text: str) -> Path:
    """Write a post file, dedenting the triple-quoted test fixture text."""
    path = directory / name
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


def make_post(
    slug: str = "hello-world", publish_date: str = "2024-04-23", **overrides
) -> Post:
    fields = {
        "slug": slug,
        "publish_date": datetime.date.fromisoformat(publish_date),
        "title": slug.replace("-", " ").title(),
        "body": "Some body text.",
        "source_name": f"{publish_date}-{slug}.md",
    }
    fields.update(overrides)
    return Post(**fields)


@pytest.fixture
def posts_dir(tmp_path):
    """A small _posts directory with a mix of good and bad files."""
    directory = tmp_path / "_posts"
    directory.mkdir()

    write_post(
        directory,
        "2024-04-23-network-policies.md",
        """
        ---
        title: Network Policies
        author_name: Ada Lovelace
        toc: true
        toc_sticky: true
        ---
        # Intro

        Locking down traffic between apps.

        ## Setup

        ```yaml
        kind: NetworkPolicy
        ```

        ## Setup

        ![diagram]({{site.baseurl}}/assets/images/policy.png)
        """,
    )
    write_post(
        directory,
        "2024-11-12-onnx-inference.md",
        """
        ---
        title: ONNX Inference
        ---
        Running models at the edge.
        """,
    )
    write_post(directory, "README.md", "Not a post.\n")
    return directory


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_posts_return=None, get_post_return=None):
        self._list_posts_return = list_posts_return
        self._get_post_return = get_post_return
        self.list_calls = []

    def list_posts(self, page: int = 1, per_page: int = 10):
        self.list_calls.append((page, per_page))
        if self._list_posts_return is None:
            raise NotFound(str(page), kind="page")
        return self._list_posts_return

    def get_post(self, slug: str):
        if self._get_post_return is None:
            raise NotFound(slug)
        return self._get_post_return
