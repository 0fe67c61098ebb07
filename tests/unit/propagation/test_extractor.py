"""Tests for top keyword extraction."""

from unittest.mock import Mock

from crossnegatives.data_providers.base import AdsPlatform
from crossnegatives.models.entity import Campaign
from crossnegatives.models.keyword import Keyword, KeywordMatchType, KeywordStatus
from crossnegatives.propagation.extractor import extract_keywords


def _keywords(costs):
    return [
        Keyword(text=f"kw {i}", match_type=KeywordMatchType.BROAD, cost=cost)
        for i, cost in enumerate(costs)
    ]


class TestExtractKeywords:
    """Ordering and cap guarantees."""

    def setup_method(self):
        self.campaign = Campaign(campaign_id="1", name="Brand")

    def test_sorted_by_cost_descending_and_capped(self):
        platform = Mock(spec=AdsPlatform)
        platform.get_keywords.return_value = _keywords([5.0, 40.0, 0.0, 12.5, 40.0])

        keywords = extract_keywords(platform, self.campaign, 3)

        platform.get_keywords.assert_called_once_with(self.campaign, 3)
        assert len(keywords) == 3
        costs = [keyword.cost for keyword in keywords]
        assert costs == sorted(costs, reverse=True)
        assert costs == [40.0, 40.0, 12.5]
        # Stable for equal costs
        assert [keyword.text for keyword in keywords[:2]] == ["kw 1", "kw 4"]

    def test_never_exceeds_cap(self):
        platform = Mock(spec=AdsPlatform)
        platform.get_keywords.return_value = _keywords(range(25))

        for cap in (1, 5, 10, 30):
            assert len(extract_keywords(platform, self.campaign, cap)) <= cap

    def test_zero_cap_skips_platform(self):
        platform = Mock(spec=AdsPlatform)
        assert extract_keywords(platform, self.campaign, 0) == []
        platform.get_keywords.assert_not_called()

    def test_non_enabled_keywords_dropped(self):
        platform = Mock(spec=AdsPlatform)
        platform.get_keywords.return_value = [
            Keyword(text="live", match_type=KeywordMatchType.EXACT, cost=1.0),
            Keyword(
                text="paused",
                match_type=KeywordMatchType.EXACT,
                status=KeywordStatus.PAUSED,
                cost=9.0,
            ),
        ]
        keywords = extract_keywords(platform, self.campaign, 10)
        assert [keyword.text for keyword in keywords] == ["live"]

    def test_no_keywords(self, platform):
        empty = platform.add_campaign("Empty")
        assert extract_keywords(platform, empty, 10) == []
