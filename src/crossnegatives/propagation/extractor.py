"""Top keyword extraction."""

import logging

from crossnegatives.data_providers.base import AdsPlatform
from crossnegatives.models.entity import Entity
from crossnegatives.models.keyword import Keyword, KeywordStatus

logger = logging.getLogger(__name__)


def extract_keywords(
    platform: AdsPlatform, entity: Entity, max_keywords: int
) -> list[Keyword]:
    """Enabled keywords of an entity, highest cost first, at most ``max_keywords``.

    The platform is asked for an ordered, limited list; the result is
    sorted and truncated again so the ordering and the cap hold for any
    adapter.
    """
    if max_keywords <= 0:
        return []

    keywords = [
        keyword
        for keyword in platform.get_keywords(entity, max_keywords)
        if keyword.status == KeywordStatus.ENABLED
    ]
    keywords.sort(key=lambda keyword: keyword.cost, reverse=True)
    keywords = keywords[:max_keywords]

    logger.info(f"Found {len(keywords)} keywords in {entity.descriptor}")
    return keywords
