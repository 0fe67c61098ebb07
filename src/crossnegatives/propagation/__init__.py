"""Cross-negative keyword propagation."""

from crossnegatives.propagation.engine import CrossNegativePropagator
from crossnegatives.propagation.extractor import extract_keywords
from crossnegatives.propagation.formatter import (
    format_literal,
    format_negative_keyword,
    parse_negative_keyword,
)
from crossnegatives.propagation.selector import (
    CampaignFilter,
    select_ad_groups,
    select_campaigns,
    should_process_campaign,
)
from crossnegatives.propagation.writer import NegativeWriter

__all__ = [
    "CampaignFilter",
    "CrossNegativePropagator",
    "NegativeWriter",
    "extract_keywords",
    "format_literal",
    "format_negative_keyword",
    "parse_negative_keyword",
    "select_ad_groups",
    "select_campaigns",
    "should_process_campaign",
]
