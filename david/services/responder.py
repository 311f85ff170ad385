# david/services/responder.py
from __future__ import annotations

import logging
from typing import Optional, Sequence

from david.services.knowledge_base import GENERAL_RESPONSE, TOPICS, Topic

logger = logging.getLogger("david.responder")


def match_topic(message: str, topics: Sequence[Topic] = TOPICS) -> Optional[Topic]:
    """Return the first topic with a keyword inside `message`, or None."""
    lowered = message.lower()
    for topic in topics:
        if topic.matches(lowered):
            return topic
    return None


def classify(message: str, topics: Sequence[Topic] = TOPICS) -> str:
    """
    Map free text to a canned answer.
    - case-insensitive literal substring match, no other normalization
    - buckets are tried in order; the first hit wins
    - no hit (including "") -> general welcome/help text
    """
    topic = match_topic(message, topics)
    if topic is None:
        logger.debug("classify len=%d -> general", len(message))
        return GENERAL_RESPONSE
    logger.debug("classify len=%d -> %s", len(message), topic.name)
    return topic.response
