"""services/descriptions.py — Template-based event description generator.

Picks one of five fixed sentences at random and drops the topic into it.
The random source is injected so tests can make the choice deterministic:

    generator = DescriptionGenerator(rng=random.Random(42))
    generator.generate("Web Development")
"""

from __future__ import annotations

import logging
import random
from typing import Protocol, Sequence

from core.exceptions import EventValidationError

logger = logging.getLogger(__name__)

DESCRIPTION_TEMPLATES: tuple[str, ...] = (
    "An exciting event about {topic} that you can't miss. Join us to explore "
    "the latest innovations and trends in this dynamic field.",
    "Discover the latest trends in {topic} at this unique event. A perfect "
    "opportunity to learn from experts and connect with industry professionals.",
    "Connect with {topic} experts and grow your professional network. This "
    "event will give you valuable insights and networking opportunities.",
    "Learn from the best in {topic} in a collaborative environment. Hands-on "
    "workshops, inspiring talks and much more await you.",
    "Explore new opportunities in {topic} with professionals from the field. "
    "An event designed to boost your career and knowledge.",
)


class ChoiceSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


class DescriptionGenerator:
    def __init__(self, rng: ChoiceSource | None = None, templates: Sequence[str] = DESCRIPTION_TEMPLATES):
        if not templates:
            raise ValueError("at least one description template is required")
        self._rng = rng if rng is not None else random.Random()
        self._templates = tuple(templates)

    @property
    def templates(self) -> tuple[str, ...]:
        return self._templates

    def generate(self, topic: str | None) -> str:
        """Return a description mentioning ``topic`` verbatim.

        Raises:
            EventValidationError: if the topic is missing, empty or whitespace.
        """
        if topic is None or not topic.strip():
            raise EventValidationError("Topic is required")

        template = self._rng.choice(self._templates)
        description = template.format(topic=topic)
        logger.debug("description generated", extra={"topic": topic, "length": len(description)})
        return description
