"""Tag pairs and the raw "key=value" tag parser."""
from dataclasses import dataclass
from typing import Optional
import re

from tagstore.config import TagRules
from tagstore.exceptions import InvalidTag

TAG_DELIMITER = "="


@dataclass(frozen=True, order=True)
class TagPair:
    """A parsed tag, ordered by key then value."""
    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}{TAG_DELIMITER}{self.value}"


class TagParser:
    """Callable that turns one raw tag string into a TagPair.

    Splits on the first delimiter and checks both halves against the
    configured character patterns.
    """

    def __init__(self, rules: Optional[TagRules] = None):
        self.rules = rules or TagRules()
        self._key_re = re.compile(self.rules.key_pattern)
        self._value_re = re.compile(self.rules.value_pattern)

    def __call__(self, raw: str) -> TagPair:
        key, sep, value = raw.partition(TAG_DELIMITER)
        if not sep:
            raise InvalidTag(f"Tag is missing '{TAG_DELIMITER}' delimiter", raw)
        if not key:
            raise InvalidTag("Tag key is empty", raw)
        if not value:
            raise InvalidTag("Tag value is empty", raw)
        if not self._key_re.fullmatch(key):
            raise InvalidTag(f"Tag key {key!r} contains invalid characters", raw)
        if not self._value_re.fullmatch(value):
            raise InvalidTag(f"Tag value {value!r} contains invalid characters", raw)
        return TagPair(key, value)


_default_parser = TagParser()


def parse_tag(raw: str) -> TagPair:
    """Parse a raw tag with the default character rules."""
    return _default_parser(raw)
