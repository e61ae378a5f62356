class PostpressError(Exception):
    """Base class for pipeline conditions callers are expected to handle."""


class MalformedFrontMatter(PostpressError):
    """An opening front-matter delimiter was found but the block is unusable."""

    def __init__(self, source: str, reason: str = "missing closing '---' delimiter"):
        self.source = source
        self.reason = reason
        super().__init__(f"Malformed front matter in {source}: {reason}")


class UnrecognizedFilename(PostpressError):
    """Filename does not follow the YYYY-MM-DD-slug.md convention."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Unrecognized post filename: {filename}")


class NotFound(PostpressError):
    """A post slug or listing page that the index does not hold."""

    def __init__(self, key: str, kind: str = "post"):
        self.key = key
        self.kind = kind
        super().__init__(f"{kind.capitalize()} not found: {key}")
