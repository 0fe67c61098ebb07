"""Mock advertising platform for testing."""

from __future__ import annotations

import itertools
import logging

from crossnegatives.core.exceptions import APIError, DuplicateNegativeError
from crossnegatives.data_providers.base import AdsPlatform
from crossnegatives.models.entity import (
    AdGroup,
    Campaign,
    Entity,
    EntityLevel,
    EntityStatus,
    ExperimentType,
)
from crossnegatives.models.keyword import Keyword, KeywordMatchType, KeywordStatus

logger = logging.getLogger(__name__)

EntityKey = tuple[EntityLevel, str]


def _entity_key(entity: Entity) -> EntityKey:
    if entity.level == EntityLevel.AD_GROUP:
        return (entity.level, entity.ad_group_id)
    return (entity.level, entity.campaign_id)


class MockAdsProvider(AdsPlatform):
    """In-memory advertising platform.

    Holds campaigns, ad groups and keywords, and keeps every negative keyword
    written to it so tests can assert on the end state. Like the real
    platform it refuses a negative that already exists on an entity.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1000)
        self._campaigns: list[Campaign] = []
        self._ad_groups: dict[str, list[AdGroup]] = {}
        self._keywords: dict[EntityKey, list[Keyword]] = {}
        self._negatives: dict[EntityKey, list[str]] = {}
        self._failures: dict[tuple[EntityKey, str], str] = {}
        self.write_calls: list[tuple[str, str]] = []

    def add_campaign(
        self,
        name: str,
        keywords: list[Keyword] | None = None,
        status: EntityStatus = EntityStatus.ENABLED,
        experiment_type: ExperimentType = ExperimentType.BASE,
    ) -> Campaign:
        """Register a campaign and its campaign-level keywords."""
        campaign = Campaign(
            campaign_id=str(next(self._ids)),
            name=name,
            status=status,
            experiment_type=experiment_type,
        )
        self._campaigns.append(campaign)
        self._ad_groups[campaign.campaign_id] = []
        self._keywords[_entity_key(campaign)] = list(keywords or [])
        return campaign

    def add_ad_group(
        self,
        campaign: Campaign,
        name: str,
        keywords: list[Keyword] | None = None,
        status: EntityStatus = EntityStatus.ENABLED,
    ) -> AdGroup:
        """Register an ad group; its keywords also count for the campaign."""
        ad_group = AdGroup(
            ad_group_id=str(next(self._ids)),
            name=name,
            status=status,
            campaign_id=campaign.campaign_id,
            campaign_name=campaign.name,
        )
        self._ad_groups[campaign.campaign_id].append(ad_group)
        self._keywords[_entity_key(ad_group)] = list(keywords or [])
        self._keywords[_entity_key(campaign)].extend(keywords or [])
        return ad_group

    def fail_on(self, entity: Entity, literal: str, error: str = "Mock failure") -> None:
        """Make every write of ``literal`` to ``entity`` raise APIError."""
        self._failures[(_entity_key(entity), literal)] = error

    def negatives(self, entity: Entity) -> list[str]:
        """Negative keywords currently held by an entity."""
        return list(self._negatives.get(_entity_key(entity), []))

    def get_campaigns(self) -> list[Campaign]:
        return [campaign for campaign in self._campaigns if campaign.is_eligible]

    def get_ad_groups(self, campaign: Campaign) -> list[AdGroup]:
        return [
            ad_group
            for ad_group in self._ad_groups.get(campaign.campaign_id, [])
            if ad_group.status == EntityStatus.ENABLED
        ]

    def get_keywords(self, entity: Entity, limit: int) -> list[Keyword]:
        enabled = [
            keyword
            for keyword in self._keywords.get(_entity_key(entity), [])
            if keyword.status == KeywordStatus.ENABLED
        ]
        enabled.sort(key=lambda keyword: keyword.cost, reverse=True)
        return enabled[: max(limit, 0)]

    def add_negative_keyword(self, entity: Entity, literal: str) -> str:
        key = _entity_key(entity)
        self.write_calls.append((entity.descriptor, literal))

        error = self._failures.get((key, literal))
        if error:
            raise APIError(error)

        existing = self._negatives.setdefault(key, [])
        if literal in existing:
            raise DuplicateNegativeError(literal, entity.descriptor)

        existing.append(literal)
        return f"{key[0].value.lower()}/{key[1]}/negatives/{len(existing)}"

    @classmethod
    def with_sample_data(cls) -> "MockAdsProvider":
        """Platform populated with a small shoe retailer account."""
        provider = cls()

        def kw(text: str, match_type: KeywordMatchType, cost: float) -> Keyword:
            return Keyword(text=text, match_type=match_type, cost=cost)

        brand = provider.add_campaign("Brand - Core")
        provider.add_ad_group(
            brand,
            "Brand - Shoes",
            [
                kw("acme shoes", KeywordMatchType.EXACT, 250.0),
                kw("acme trainers", KeywordMatchType.PHRASE, 120.0),
            ],
        )
        provider.add_ad_group(
            brand,
            "Brand - Boots",
            [kw("acme boots", KeywordMatchType.EXACT, 90.0)],
        )

        generic = provider.add_campaign("Generic - Shoes")
        provider.add_ad_group(
            generic,
            "Generic - Running",
            [
                kw("running shoes", KeywordMatchType.BROAD, 310.0),
                kw("trail running shoes", KeywordMatchType.PHRASE, 75.5),
            ],
        )

        provider.add_campaign(
            "Generic - Shoes (Experiment)",
            experiment_type=ExperimentType.EXPERIMENT,
        )
        provider.add_campaign("Clearance", status=EntityStatus.PAUSED)
        logger.debug("Created mock platform with sample data")
        return provider
