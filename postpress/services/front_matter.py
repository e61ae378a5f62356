import re
from typing import Any, Dict, Tuple

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from postpress.errors import MalformedFrontMatter

# Same boundary python-frontmatter's YAML handler splits on
DELIMITER_RE = re.compile(r"^-{3,}\s*$")


def parse_front_matter(
    text: str, source: str = "<string>"
) -> Tuple[Dict[str, Any], str]:
    """Split raw post text into a metadata mapping and the Markdown body."""
    lines = text.splitlines()
    if not lines or not DELIMITER_RE.match(lines[0]):
        return {}, text

    if not any(DELIMITER_RE.match(line) for line in lines[1:]):
        raise MalformedFrontMatter(source)

    handler = YAMLHandler()
    try:
        block, content = handler.split(text)
    except ValueError as e:
        raise MalformedFrontMatter(source) from e

    try:
        loaded = handler.load(block)
    except yaml.YAMLError as e:
        raise MalformedFrontMatter(source, reason=f"invalid YAML ({e})") from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise MalformedFrontMatter(
            source, reason=f"front matter is a {type(loaded).__name__}, not a mapping"
        )

    metadata = {str(key): value for key, value in loaded.items()}
    return metadata, content.strip()


def dump_front_matter(metadata: Dict[str, Any], body: str) -> str:
    """Serialize a mapping and body back into front-matter form."""
    post = frontmatter.Post(body)
    post.metadata.update(metadata)
    return frontmatter.dumps(post)
