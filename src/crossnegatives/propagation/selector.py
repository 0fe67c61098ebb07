"""Campaign and ad group selection."""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from crossnegatives.core.exceptions import ConfigurationError
from crossnegatives.data_providers.base import AdsPlatform
from crossnegatives.models.entity import AdGroup, Campaign

logger = logging.getLogger(__name__)


def _compile(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    compiled = []
    for pattern in patterns:
        if not pattern:
            continue
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as e:
            raise ConfigurationError(
                f"Invalid campaign name pattern {pattern!r}: {e}"
            ) from e
    return tuple(compiled)


@dataclass(frozen=True)
class CampaignFilter:
    """Include/exclude campaign name patterns, compiled once per run.

    Each entry is a case-insensitive regular expression searched anywhere in
    the campaign name, so a plain word matches as a substring.
    """

    include: tuple[re.Pattern[str], ...] = ()
    exclude: tuple[re.Pattern[str], ...] = ()

    @classmethod
    def from_lists(
        cls, include: Iterable[str] = (), exclude: Iterable[str] = ()
    ) -> "CampaignFilter":
        return cls(include=_compile(include), exclude=_compile(exclude))

    def should_process_campaign(self, name: str) -> bool:
        """Whether a campaign name passes the filters.

        An empty include list lets every name through; any exclude match
        rejects the name even when an include pattern matched.
        """
        if self.include and not any(p.search(name) for p in self.include):
            return False
        return not any(p.search(name) for p in self.exclude)


def should_process_campaign(
    name: str, include: Iterable[str] = (), exclude: Iterable[str] = ()
) -> bool:
    """Convenience wrapper compiling the filters for a single check."""
    return CampaignFilter.from_lists(include, exclude).should_process_campaign(name)


def select_campaigns(
    platform: AdsPlatform, campaign_filter: CampaignFilter
) -> list[Campaign]:
    """Eligible campaigns in platform order."""
    selected = []
    for campaign in platform.get_campaigns():
        if not campaign.is_eligible:
            continue
        if campaign_filter.should_process_campaign(campaign.name):
            selected.append(campaign)
        else:
            logger.debug(f"Campaign '{campaign.name}' filtered out")

    logger.info(f"Selected {len(selected)} campaigns")
    return selected


def select_ad_groups(platform: AdsPlatform, campaign: Campaign) -> list[AdGroup]:
    """Enabled ad groups of a campaign in platform order."""
    return platform.get_ad_groups(campaign)
