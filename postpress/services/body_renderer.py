import html
import logging
import re
from typing import List, Optional

import markdown
from markdown.extensions import Extension
from markdown.extensions.fenced_code import FencedBlockPreprocessor
from markdown.extensions.toc import render_inner_html, strip_tags
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

from postpress.models.post import CodeBlock, Heading, Post, RenderedBody, RenderedPost
from postpress.services.toc_generator import AnchorAllocator, build_toc

logger = logging.getLogger(__name__)

BASEURL_PLACEHOLDER_RE = re.compile(r"\{\{\s*site\.baseurl\s*\}\}")
HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}
CODE_TAGS = {"pre", "code"}


class FencedCodeRecorder(Preprocessor):
    """Record the fenced blocks fenced_code is about to stash, in order."""

    def __init__(self, md, extension: "PostBodyExtension"):
        super().__init__(md)
        self.extension = extension

    def run(self, lines: List[str]) -> List[str]:
        text = "\n".join(lines)
        for match in FencedBlockPreprocessor.FENCED_BLOCK_RE.finditer(text):
            code = match.group("code")
            self.extension.code_blocks.append(
                CodeBlock(
                    language_hint=_language_hint(match),
                    content=code[:-1] if code.endswith("\n") else code,
                )
            )
        return lines


class CodeStashMarker(Preprocessor):
    """Remember how many stash entries are fenced code blocks."""

    def __init__(self, md, extension: "PostBodyExtension"):
        super().__init__(md)
        self.extension = extension

    def run(self, lines: List[str]) -> List[str]:
        self.extension.code_stash_size = len(self.md.htmlStash.rawHtmlBlocks)
        return lines


class BaseUrlTreeprocessor(Treeprocessor):
    """Substitute {{site.baseurl}} everywhere except in code."""

    def __init__(self, md, extension: "PostBodyExtension"):
        super().__init__(md)
        self.extension = extension

    def substitute(self, text: str) -> str:
        # Callable replacement: the base URL is literal text, not a template
        return BASEURL_PLACEHOLDER_RE.sub(lambda _: self.extension.base_url, text)

    def run(self, root):
        self._rewrite(root)

        # Raw HTML; entries before code_stash_size are fenced code
        blocks = self.md.htmlStash.rawHtmlBlocks
        for i in range(self.extension.code_stash_size, len(blocks)):
            if isinstance(blocks[i], str):
                blocks[i] = self.substitute(blocks[i])

    def _rewrite(self, el):
        if el.tag in CODE_TAGS:
            return
        if el.text:
            el.text = self.substitute(el.text)
        for key, value in list(el.attrib.items()):
            el.set(key, self.substitute(value))
        for child in el:
            self._rewrite(child)
            if child.tail:
                child.tail = self.substitute(child.tail)


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Give every rendered heading a unique id and record it."""

    def __init__(self, md, extension: "PostBodyExtension"):
        super().__init__(md)
        self.extension = extension

    def run(self, root):
        allocator = AnchorAllocator()
        for el in root.iter():
            level = HEADING_TAGS.get(el.tag)
            if level is None:
                continue
            text = html.unescape(strip_tags(render_inner_html(el, self.md)))
            anchor_id = allocator.allocate(text)
            el.set("id", anchor_id)
            self.extension.headings.append(
                Heading(level=level, text=text, anchor_id=anchor_id)
            )


class PostBodyExtension(Extension):
    def __init__(self, base_url: Optional[str] = None, **kwargs):
        self.base_url = base_url
        self.reset()
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        md.registerExtension(self)
        # Either side of fenced_code (25)
        md.preprocessors.register(FencedCodeRecorder(md, self), "code_recorder", 26)
        md.preprocessors.register(CodeStashMarker(md, self), "code_stash_marker", 24)
        # After inline (20) and unescape (0) so element text is final
        if self.base_url is not None:
            md.treeprocessors.register(
                BaseUrlTreeprocessor(md, self), "site_baseurl", -1
            )
        md.treeprocessors.register(
            HeadingAnchorTreeprocessor(md, self), "heading_anchors", -2
        )

    def reset(self):
        self.headings: List[Heading] = []
        self.code_blocks: List[CodeBlock] = []
        self.code_stash_size = 0


class BodyRenderer:
    def __init__(self, base_url: str = "", highlight_code: bool = False):
        self.base_url = base_url or ""
        self.highlight_code = highlight_code

    @property
    def substitution(self) -> Optional[str]:
        """Replacement for {{site.baseurl}}, or None to leave it literal."""
        if not self.base_url:
            return None
        return self.base_url.rstrip("/")

    def render(self, body: str) -> RenderedBody:
        extension = PostBodyExtension(base_url=self.substitution)
        extensions = ["fenced_code", "tables", extension]
        extension_configs = {}
        if self.highlight_code:
            extensions.append("codehilite")
            extension_configs["codehilite"] = {"guess_lang": False}

        # Fresh instance per call: Markdown objects carry state between runs
        md = markdown.Markdown(
            extensions=extensions, extension_configs=extension_configs
        )
        output = md.convert(body)

        return RenderedBody(
            html=output,
            headings=list(extension.headings),
            code_blocks=list(extension.code_blocks),
        )

    def render_post(self, post: Post) -> RenderedPost:
        rendered = self.render(post.body)
        toc = build_toc(rendered.headings) if post.toc_enabled else []
        logger.debug(
            f"Rendered {post.slug}: {len(rendered.headings)} headings, "
            f"{len(rendered.code_blocks)} code blocks"
        )
        return RenderedPost(
            post=post,
            html=rendered.html,
            headings=rendered.headings,
            toc=toc,
            code_blocks=rendered.code_blocks,
        )


def _language_hint(match) -> Optional[str]:
    attrs = match.group("attrs")
    if attrs is not None:
        classes = [token[1:] for token in attrs.split() if token.startswith(".")]
        return classes[0] if classes else None
    return match.group("lang") or None
