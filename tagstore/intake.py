"""Per-sample identity intake: build identities, log and drop rejects."""
from typing import Iterable, Optional
from prometheus_client import Counter, CollectorRegistry
import logging

from tagstore.config import Config
from tagstore.exceptions import InvalidIdentity
from tagstore.metric import MetricIdentity, parse_metric_string
from tagstore.tags import TagParser

logger = logging.getLogger(__name__)


class IdentityMetrics:
    """Self-monitoring counters for identity construction."""

    def __init__(self, registry=None, prefix=""):
        if registry is None:
            registry = CollectorRegistry()
        self.registry = registry

        self.identities_total = Counter(
            f"{prefix}identities_total",
            "Total number of metric identities built",
            registry=registry
        )

        self.rejections_total = Counter(
            f"{prefix}identity_rejections_total",
            "Total number of rejected metric identities",
            ["reason"],
            registry=registry
        )

    def record_identity(self):
        """Record a successfully built identity."""
        self.identities_total.inc()

    def record_rejection(self, reason: str):
        """Record a rejected identity."""
        self.rejections_total.labels(reason=reason).inc()


class IdentityIntake:
    """Builds identities for incoming samples, dropping the invalid ones."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.tag_parser = TagParser(self.config.tags)
        self.max_tags = self.config.tags.max_tags

        self.metrics = None
        if self.config.metrics.enabled:
            self.metrics = IdentityMetrics(prefix=self.config.metrics.prefix)

    def accept(self, name: str, raw_tags: Iterable[str] = ()) -> Optional[MetricIdentity]:
        """Build an identity from a name and raw tags, or None if rejected."""
        try:
            identity = MetricIdentity.parse(name, raw_tags, self.tag_parser, self.max_tags)
        except InvalidIdentity as e:
            self._reject(e)
            return None
        self._accepted(identity)
        return identity

    def accept_line(self, line: str) -> Optional[MetricIdentity]:
        """Build an identity from a "name key=value ..." string, or None if rejected."""
        try:
            identity = parse_metric_string(line, self.tag_parser, self.max_tags)
        except InvalidIdentity as e:
            self._reject(e)
            return None
        self._accepted(identity)
        return identity

    def _accepted(self, identity: MetricIdentity):
        logger.debug(f"Accepted metric identity: {identity.canonical_key}")
        if self.metrics:
            self.metrics.record_identity()

    def _reject(self, error: InvalidIdentity):
        logger.warning(f"Dropping sample ({error.reason}): {error}")
        if self.metrics:
            self.metrics.record_rejection(error.reason)
