"""Canonical time-series identities for a tag-indexed metrics store."""
from tagstore.exceptions import BadKey, BadName, BadTag, InvalidIdentity, InvalidTag, TagStoreError
from tagstore.metric import MetricIdentity, canonical_key, parse_metric_string, parse_tags
from tagstore.tags import TagPair, TagParser, parse_tag

__all__ = [
    "BadKey",
    "BadName",
    "BadTag",
    "InvalidIdentity",
    "InvalidTag",
    "MetricIdentity",
    "TagPair",
    "TagParser",
    "TagStoreError",
    "canonical_key",
    "parse_metric_string",
    "parse_tag",
    "parse_tags",
]
