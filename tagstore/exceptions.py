"""Exception hierarchy for metric identity parsing.

Exception Hierarchy:
    TagStoreError (base, a ValueError)
    ├── InvalidTag
    └── InvalidIdentity
        ├── BadName
        ├── BadTag
        └── BadKey
"""
from typing import List, Optional


class TagStoreError(ValueError):
    """Base exception for all tagstore errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = "; ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InvalidTag(TagStoreError):
    """Raised when a single raw tag string cannot be parsed into a TagPair."""

    def __init__(self, message: str, raw_tag: Optional[str] = None):
        super().__init__(message, context={"raw_tag": raw_tag})
        self.raw_tag = raw_tag


class InvalidIdentity(TagStoreError):
    """Raised when a metric identity cannot be constructed."""

    reason = "invalid"


class BadName(InvalidIdentity):
    """The metric name is empty or whitespace only."""

    reason = "bad_name"

    def __init__(self, name: Optional[str]):
        super().__init__("Invalid metric name", context={"name": name})
        self.name = name


class BadTag(InvalidIdentity):
    """One of the raw tags failed to parse.

    The underlying InvalidTag is chained as ``__cause__``.

    Attributes:
        raw_tags: The full raw tag list that was being parsed
    """

    reason = "bad_tag"

    def __init__(self, message: str, raw_tags: List[str]):
        super().__init__(message, context={"raw_tags": raw_tags})
        self.raw_tags = raw_tags


class BadKey(InvalidIdentity):
    """The canonical key does not match the name and tags it was built with."""

    reason = "bad_key"

    def __init__(self, canonical_key: str, expected: str):
        super().__init__(
            "Canonical key does not match name and tags",
            context={"canonical_key": canonical_key, "expected": expected}
        )
        self.canonical_key = canonical_key
        self.expected = expected
