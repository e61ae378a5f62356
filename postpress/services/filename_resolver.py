import datetime
import re
from pathlib import PurePath
from typing import Tuple

from postpress.errors import UnrecognizedFilename

POST_FILENAME_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)\.md$"
)


def resolve_filename(name: str) -> Tuple[datetime.date, str]:
    """Derive (publish date, slug) from a YYYY-MM-DD-slug.md filename."""
    filename = PurePath(name).name
    match = POST_FILENAME_RE.match(filename)
    if not match:
        raise UnrecognizedFilename(filename)

    try:
        publish_date = datetime.date(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
        )
    except ValueError as e:
        # e.g. 2024-02-30
        raise UnrecognizedFilename(filename) from e

    return publish_date, match.group("slug")
