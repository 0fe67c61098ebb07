"""Base AdsPlatform interface for advertising platform adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crossnegatives.models.entity import AdGroup, Campaign, Entity
    from crossnegatives.models.keyword import Keyword


class AdsPlatform(ABC):
    """Interface for the advertising platform the propagator reads and writes."""

    @abstractmethod
    def get_campaigns(self) -> list[Campaign]:
        """Fetch enabled, non-experiment campaigns."""
        pass

    @abstractmethod
    def get_ad_groups(self, campaign: Campaign) -> list[AdGroup]:
        """Fetch enabled ad groups of a campaign."""
        pass

    @abstractmethod
    def get_keywords(self, entity: Entity, limit: int) -> list[Keyword]:
        """Fetch enabled keywords of an entity, highest cost first.

        Args:
            entity: Campaign or ad group to read
            limit: Maximum number of keywords to return
        """
        pass

    @abstractmethod
    def add_negative_keyword(self, entity: Entity, literal: str) -> str:
        """Create a negative keyword on an entity.

        Args:
            entity: Campaign or ad group receiving the negative
            literal: Formatted negative keyword (``shoes``, ``"shoes"``, ``[shoes]``)

        Returns:
            Platform identifier of the created negative

        Raises:
            DuplicateNegativeError: If the negative already exists
            APIError: If the platform rejects the write
        """
        pass
