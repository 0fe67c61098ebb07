"""Advertising platform adapters.

- Google Ads API
- In-memory mock platform for tests and local dry runs
"""

from crossnegatives.data_providers.base import AdsPlatform
from crossnegatives.data_providers.google_ads import GoogleAdsDataProvider
from crossnegatives.data_providers.mock_provider import MockAdsProvider

__all__ = [
    "AdsPlatform",
    "GoogleAdsDataProvider",
    "MockAdsProvider",
]
