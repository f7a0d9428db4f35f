"""Keyword-based topic classification.

Topics are checked in order and the first one with a keyword hit wins.
"""

from typing import Tuple

from ..models.article import Topic

TOPIC_KEYWORDS: Tuple[Tuple[Topic, Tuple[str, ...]], ...] = (
    (
        Topic.SPACE_LAW,
        ("law", "legal", "regulation", "treaty", "liability", "property rights",
         "fcc", "itu", "artemis accords"),
    ),
    (
        Topic.INVESTMENT,
        ("investment", "investor", "funding", "venture", "capital", "ipo", "spac",
         "valuation", "market", "stock"),
    ),
    (
        Topic.POLICY,
        ("policy", "congress", "legislation", "government", "budget", "administration",
         "faa", "nasa budget"),
    ),
    (
        Topic.TECHNOLOGY,
        ("technology", "innovation", "propulsion", "engine", "satellite", "spacecraft",
         "rocket", "reusable"),
    ),
    (
        Topic.BUSINESS,
        ("business", "commercial", "contract", "revenue", "profit", "startup", "company",
         "enterprise"),
    ),
    (
        Topic.EXPLORATION,
        ("exploration", "moon", "mars", "asteroid", "deep space", "artemis",
         "human spaceflight", "colony"),
    ),
)

DEFAULT_TOPIC = Topic.EXPLORATION


def categorize_topic(title: str, content: str) -> Topic:
    """Return the first topic whose keywords occur in title + content."""
    text = f"{title} {content}".lower()

    for topic, keywords in TOPIC_KEYWORDS:
        for keyword in keywords:
            if keyword in text:
                return topic

    return DEFAULT_TOPIC
