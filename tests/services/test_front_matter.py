import datetime

import pytest

from postpress.errors import MalformedFrontMatter
from postpress.services.front_matter import dump_front_matter, parse_front_matter


def test_parse_extracts_recognized_keys_and_body():
    text = (
        "---\n"
        "title: Network Policies\n"
        "author_name: Ada Lovelace\n"
        "toc: true\n"
        "toc_sticky: false\n"
        "---\n"
        "Body starts here.\n"
    )

    metadata, body = parse_front_matter(text)

    assert metadata == {
        "title": "Network Policies",
        "author_name": "Ada Lovelace",
        "toc": True,
        "toc_sticky": False,
    }
    assert body == "Body starts here."


def test_parse_without_delimiter_returns_whole_text_as_body():
    text = "Just a body.\n\n# Heading\n\ntrailing newline\n"

    metadata, body = parse_front_matter(text)

    assert metadata == {}
    assert body == text


def test_parse_ignores_delimiter_not_at_position_zero():
    text = "\n---\ntitle: Late\n---\nbody\n"

    metadata, body = parse_front_matter(text)

    assert metadata == {}
    assert body == text


def test_parse_empty_text():
    assert parse_front_matter("") == ({}, "")


def test_parse_raises_when_closing_delimiter_missing():
    text = "---\ntitle: Unterminated\nno closing line here\n"

    with pytest.raises(MalformedFrontMatter) as exc:
        parse_front_matter(text, source="2024-01-01-broken.md")

    assert exc.value.source == "2024-01-01-broken.md"
    assert "closing" in str(exc.value)


def test_parse_raises_on_invalid_yaml():
    text = "---\ntitle: [unclosed\n---\nbody\n"

    with pytest.raises(MalformedFrontMatter) as exc:
        parse_front_matter(text)

    assert "invalid YAML" in exc.value.reason


def test_parse_empty_block_yields_empty_mapping():
    metadata, body = parse_front_matter("---\n---\nbody text\n")

    assert metadata == {}
    assert body == "body text"


def test_parse_stringifies_non_string_keys():
    metadata, _ = parse_front_matter("---\n2024: year\n---\nx\n")

    assert metadata == {"2024": "year"}


def test_parse_keeps_yaml_scalars():
    metadata, _ = parse_front_matter("---\ndate: 2024-04-23\nweight: 3\n---\nx\n")

    assert metadata["date"] == datetime.date(2024, 4, 23)
    assert metadata["weight"] == 3


@pytest.mark.parametrize(
    "text",
    [
        "---\ntitle: Hello\ntoc: true\n---\n\n# Intro\n\nSome text.\n",
        "---\ntitle: 'Colons: everywhere'\nauthor_name: Bob\n---\nBody\n",
        "---\ntitle: Dated\ndate: 2024-11-12\ntoc_sticky: true\n---\n```python\nx = 1\n```\n",
    ],
)
def test_round_trip_preserves_mapping_and_body(text):
    metadata, body = parse_front_matter(text)

    again = parse_front_matter(dump_front_matter(metadata, body))

    assert again == (metadata, body)


def test_dump_writes_front_matter_block():
    dumped = dump_front_matter({"title": "Hello"}, "Body")

    assert dumped.startswith("---\n")
    assert "title: Hello" in dumped
    assert dumped.rstrip().endswith("Body")


def test_parse_raises_when_block_is_not_a_mapping():
    text = "---\nJust a sentence between rules.\n---\nMore text.\n"

    with pytest.raises(MalformedFrontMatter) as exc:
        parse_front_matter(text)

    assert "not a mapping" in exc.value.reason
