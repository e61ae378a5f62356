import pytest

from postpress.models.post import Heading
from postpress.services.toc_generator import (
    AnchorAllocator,
    build_toc,
    slugify_heading,
)


def heading(level, text, anchor_id=None):
    return Heading(level=level, text=text, anchor_id=anchor_id or slugify_heading(text))


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Intro", "intro"),
        ("Getting   Started\tNow", "getting-started-now"),
        ("What's new in v2.1?", "whats-new-in-v21"),
        ("  padded  ", "padded"),
        ("already-hyphenated", "already-hyphenated"),
        ("Café & Crème", "caf--crme"),
    ],
)
def test_slugify_heading(text, expected):
    assert slugify_heading(text) == expected


def test_allocator_suffixes_duplicates_in_order():
    allocator = AnchorAllocator()

    anchors = [allocator.allocate(t) for t in ("Intro", "Setup", "Setup", "Setup")]

    assert anchors == ["intro", "setup", "setup-2", "setup-3"]


def test_allocator_skips_ids_taken_by_literal_headings():
    allocator = AnchorAllocator()

    anchors = [allocator.allocate(t) for t in ("Setup 2", "Setup", "Setup")]

    assert anchors == ["setup-2", "setup", "setup-3"]


def test_allocator_falls_back_for_empty_anchor():
    allocator = AnchorAllocator()

    assert allocator.allocate("???") == "section"
    assert allocator.allocate("!!!") == "section-2"


def test_allocators_are_independent_per_post():
    first, second = AnchorAllocator(), AnchorAllocator()

    assert first.allocate("Setup") == "setup"
    assert second.allocate("Setup") == "setup"


def test_build_toc_nests_by_level():
    headings = [
        heading(2, "Alpha"),
        heading(3, "Beta"),
        heading(1, "Gamma"),
        heading(3, "Delta"),
        heading(2, "Epsilon"),
    ]

    toc = build_toc(headings)

    assert [entry.heading.text for entry in toc] == ["Alpha", "Gamma"]
    assert [child.heading.text for child in toc[0].children] == ["Beta"]
    assert [child.heading.text for child in toc[1].children] == ["Delta", "Epsilon"]
    assert toc[1].children[1].children == []


def test_build_toc_keeps_orphans_at_top_level():
    toc = build_toc([heading(3, "Deep"), heading(2, "Shallower"), heading(3, "Child")])

    assert [entry.heading.text for entry in toc] == ["Deep", "Shallower"]
    assert [child.heading.text for child in toc[1].children] == ["Child"]


def test_build_toc_siblings_at_same_level():
    toc = build_toc([heading(1, "Intro"), heading(2, "Setup"), heading(2, "Setup", "setup-2")])

    assert len(toc) == 1
    assert [c.heading.anchor_id for c in toc[0].children] == ["setup", "setup-2"]


def test_build_toc_empty():
    assert build_toc([]) == []
