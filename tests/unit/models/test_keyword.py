"""Tests for keyword and entity models."""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from crossnegatives.models.entity import (
    AdGroup,
    Campaign,
    EntityLevel,
    EntityStatus,
    ExperimentType,
)
from crossnegatives.models.keyword import Keyword, KeywordMatchType


class TestKeyword:
    """Keyword snapshot validation."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("exact", KeywordMatchType.EXACT),
            ("PHRASE", KeywordMatchType.PHRASE),
            (SimpleNamespace(name="BROAD"), KeywordMatchType.BROAD),
            ("UNSPECIFIED", None),
            (None, None),
        ],
    )
    def test_match_type_coercion(self, raw, expected):
        assert Keyword(text="shoes", match_type=raw).match_type == expected

    def test_negative_cost_rejected(self):
        with pytest.raises(ValidationError):
            Keyword(text="shoes", match_type="EXACT", cost=-1)

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            Keyword(text="", match_type="EXACT")

    def test_frozen(self):
        keyword = Keyword(text="shoes", match_type="EXACT")
        with pytest.raises(ValidationError):
            keyword.text = "boots"


class TestEntities:
    """Campaign and ad group descriptors."""

    def test_campaign(self):
        campaign = Campaign(campaign_id="1", name="Brand")
        assert campaign.level == EntityLevel.CAMPAIGN
        assert campaign.descriptor == "Campaign: Brand"
        assert campaign.is_eligible

    @pytest.mark.parametrize(
        "status, experiment_type",
        [
            (EntityStatus.PAUSED, ExperimentType.BASE),
            (EntityStatus.ENABLED, ExperimentType.DRAFT),
            (EntityStatus.ENABLED, ExperimentType.EXPERIMENT),
        ],
    )
    def test_ineligible_campaigns(self, status, experiment_type):
        campaign = Campaign(
            campaign_id="1", name="X", status=status, experiment_type=experiment_type
        )
        assert not campaign.is_eligible

    def test_ad_group(self):
        ad_group = AdGroup(
            ad_group_id="2", name="Shoes", campaign_id="1", campaign_name="Brand"
        )
        assert ad_group.level == EntityLevel.AD_GROUP
        assert ad_group.descriptor == "Brand > Shoes"
