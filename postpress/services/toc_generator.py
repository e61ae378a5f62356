import re
from typing import Dict, Iterable, List, Set

from postpress.models.post import Heading, TocEntry

WHITESPACE_RE = re.compile(r"\s+")
ANCHOR_STRIP_RE = re.compile(r"[^a-z0-9-]")
FALLBACK_ANCHOR = "section"


def slugify_heading(text: str) -> str:
    """Anchor form of a heading: lower-case, hyphenated, [a-z0-9-] only."""
    hyphenated = WHITESPACE_RE.sub("-", text.strip().lower())
    return ANCHOR_STRIP_RE.sub("", hyphenated)


class AnchorAllocator:
    """Hands out anchor ids that are unique within one post."""

    def __init__(self):
        self._counts: Dict[str, int] = {}
        self._used: Set[str] = set()

    def allocate(self, text: str) -> str:
        base = slugify_heading(text) or FALLBACK_ANCHOR
        count = self._counts.get(base, 0) + 1
        candidate = base if count == 1 else f"{base}-{count}"
        while candidate in self._used:
            count += 1
            candidate = f"{base}-{count}"
        self._counts[base] = count
        self._used.add(candidate)
        return candidate


def build_toc(headings: Iterable[Heading]) -> List[TocEntry]:
    """
    Nest headings by level: each one goes under the nearest preceding heading
    with a smaller level, or at the top when there is none.
    """
    roots: List[TocEntry] = []
    stack: List[TocEntry] = []

    for heading in headings:
        entry = TocEntry(heading=heading)
        while stack and stack[-1].heading.level >= heading.level:
            stack.pop()
        if stack:
            stack[-1].children.append(entry)
        else:
            roots.append(entry)
        stack.append(entry)

    return roots

