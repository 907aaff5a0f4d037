"""Canonical metric identity: a metric name plus its tags."""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from tagstore.exceptions import BadKey, BadName, BadTag
from tagstore.tags import TagPair, parse_tag

METRIC_SEPARATOR = " "

TagParserFn = Callable[[str], TagPair]


def is_blank(s: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return s is None or not s.strip()


def _clean_tags(raw_tags: Iterable[Optional[str]]) -> List[str]:
    """Trim raw tags and drop the ones that end up empty."""
    cleaned = []
    for raw_tag in raw_tags or ():
        if raw_tag is None:
            continue
        trimmed = raw_tag.strip()
        if trimmed:
            cleaned.append(trimmed)
    return cleaned


def parse_tags(
    raw_tags: Iterable[Optional[str]],
    tag_parser: TagParserFn = parse_tag
) -> Tuple[TagPair, ...]:
    """Parse raw tags in input order, keeping duplicates."""
    return tuple(tag_parser(raw_tag) for raw_tag in _clean_tags(raw_tags))


def canonical_key(name: str, raw_tags: Iterable[Optional[str]]) -> str:
    """
    Build the order-independent key for a name and its raw tags.

    Distinct trimmed tags are sorted lexicographically and appended to
    the name, each preceded by a single space. With no tags the key is
    just the name.
    """
    sorted_tags = sorted(set(_clean_tags(raw_tags)))
    return METRIC_SEPARATOR.join([name] + sorted_tags)


@dataclass(frozen=True)
class MetricIdentity:
    """
    Identity of one time series.

    ``tags`` keeps input order, so two identities built from the same tags
    in a different order compare unequal even though their
    ``canonical_key`` matches. Index and dedupe on ``canonical_key``.

    Build from raw strings with ``parse``. The plain constructor checks the
    key against the tags and raises BadKey on a mismatch.
    """
    name: str
    tags: Tuple[TagPair, ...]
    canonical_key: str

    def __post_init__(self):
        if is_blank(self.name):
            raise BadName(self.name)
        object.__setattr__(self, "tags", tuple(self.tags))
        expected = canonical_key(self.name, [str(tag) for tag in self.tags])
        if self.canonical_key != expected:
            raise BadKey(self.canonical_key, expected)

    @classmethod
    def parse(
        cls,
        name: str,
        raw_tags: Iterable[Optional[str]] = (),
        tag_parser: TagParserFn = parse_tag,
        max_tags: Optional[int] = None
    ) -> "MetricIdentity":
        """
        Validate a metric name and raw "key=value" tags.

        Args:
            name: Metric name, must not be blank
            raw_tags: Raw tag strings or None for no tags; None, empty and
                whitespace-only entries are skipped
            tag_parser: Callable turning one trimmed raw tag into a TagPair
            max_tags: Optional cap on the number of parsed tags

        Returns:
            A fully built MetricIdentity

        Raises:
            BadName: If the name is blank
            BadTag: If any tag fails to parse or the cap is exceeded
        """
        if is_blank(name):
            raise BadName(name)

        raw_tags = list(raw_tags or ())
        try:
            tags = parse_tags(raw_tags, tag_parser)
        except Exception as e:
            raise BadTag(f"Error parsing tags: {e}", raw_tags) from e

        if max_tags is not None and len(tags) > max_tags:
            raise BadTag(
                f"Too many tags: {len(tags)} exceeds limit of {max_tags}",
                raw_tags
            )

        return cls._from_parsed(name, tags, canonical_key(name, raw_tags))

    @classmethod
    def _from_parsed(cls, name, tags, key) -> "MetricIdentity":
        # The key comes from the raw strings, which a custom tag parser may
        # not render back from its TagPairs, so __post_init__ is skipped.
        identity = cls.__new__(cls)
        object.__setattr__(identity, "name", name)
        object.__setattr__(identity, "tags", tags)
        object.__setattr__(identity, "canonical_key", key)
        return identity

    def tag_dict(self) -> Dict[str, str]:
        """Tags as a key -> value mapping; later duplicates of a key win."""
        return {tag.key: tag.value for tag in self.tags}

    def __str__(self) -> str:
        return self.canonical_key


def parse_metric_string(
    metric: str,
    tag_parser: TagParserFn = parse_tag,
    max_tags: Optional[int] = None
) -> MetricIdentity:
    """Parse the space separated "name key=value key=value" form."""
    parts = (metric or "").split()
    if not parts:
        raise BadName(metric)
    return MetricIdentity.parse(parts[0], parts[1:], tag_parser, max_tags)
