"""Tests for campaign selection."""

import pytest

from crossnegatives.core.exceptions import ConfigurationError
from crossnegatives.data_providers.mock_provider import MockAdsProvider
from crossnegatives.models.entity import EntityStatus, ExperimentType
from crossnegatives.propagation.selector import (
    CampaignFilter,
    select_ad_groups,
    select_campaigns,
    should_process_campaign,
)


class TestShouldProcessCampaign:
    """Include/exclude filter semantics."""

    def test_exclude_wins_over_include(self):
        assert should_process_campaign("Brand US", ["Brand"], ["US"]) is False

    def test_empty_lists_pass_everything(self):
        assert should_process_campaign("Brand US", [], []) is True

    def test_include_is_or_matched(self):
        campaign_filter = CampaignFilter.from_lists(["Brand", "Generic"], [])
        assert campaign_filter.should_process_campaign("Generic - Shoes")
        assert campaign_filter.should_process_campaign("Brand - Core")
        assert not campaign_filter.should_process_campaign("Competitor")

    def test_exclude_is_or_matched(self):
        campaign_filter = CampaignFilter.from_lists([], ["test", "old"])
        assert not campaign_filter.should_process_campaign("Test Campaign")
        assert not campaign_filter.should_process_campaign("Shoes (OLD)")
        assert campaign_filter.should_process_campaign("Shoes")

    def test_case_insensitive(self):
        assert should_process_campaign("BRAND us", ["brand"], []) is True
        assert should_process_campaign("brand US", [], ["us"]) is False

    def test_patterns_are_regular_expressions(self):
        campaign_filter = CampaignFilter.from_lists([r"^brand\b"], [])
        assert campaign_filter.should_process_campaign("Brand - Core")
        assert not campaign_filter.should_process_campaign("Non Brand")

    def test_blank_patterns_ignored(self):
        campaign_filter = CampaignFilter.from_lists(["", "Brand"], [""])
        assert campaign_filter.should_process_campaign("Brand")
        assert not campaign_filter.should_process_campaign("Generic")

    def test_invalid_pattern_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Invalid campaign name pattern"):
            CampaignFilter.from_lists(["Brand ("], [])


class TestSelectCampaigns:
    """Selection against a platform."""

    def test_only_enabled_base_campaigns_in_platform_order(self):
        provider = MockAdsProvider()
        first = provider.add_campaign("Zeta")
        provider.add_campaign("Paused", status=EntityStatus.PAUSED)
        provider.add_campaign("Draft", experiment_type=ExperimentType.DRAFT)
        second = provider.add_campaign("Alpha")

        selected = select_campaigns(provider, CampaignFilter())

        assert selected == [first, second]

    def test_filters_applied(self, platform):
        selected = select_campaigns(
            platform, CampaignFilter.from_lists(["brand", "generic"], ["uk"])
        )
        assert [campaign.name for campaign in selected] == ["Brand US"]

    def test_ad_groups_of_campaign(self, platform):
        brand = platform.get_campaigns()[0]
        ad_groups = select_ad_groups(platform, brand)
        assert [ad_group.name for ad_group in ad_groups] == ["Shoes", "Boots"]
        assert all(ad_group.campaign_id == brand.campaign_id for ad_group in ad_groups)
