"""Google Ads API adapter."""

from __future__ import annotations

import logging
from typing import Any

from google.ads.googleads.client import GoogleAdsClient  # type: ignore[import-untyped]
from google.ads.googleads.errors import (
    GoogleAdsException,  # type: ignore[import-untyped]
)

from crossnegatives.core.config import GoogleAdsConfig
from crossnegatives.core.exceptions import (
    APIError,
    AuthenticationError,
    DuplicateNegativeError,
    RateLimitError,
)
from crossnegatives.data_providers.base import AdsPlatform
from crossnegatives.models.entity import AdGroup, Campaign, Entity, EntityLevel
from crossnegatives.models.keyword import Keyword
from crossnegatives.propagation.formatter import parse_negative_keyword

logger = logging.getLogger(__name__)

# Google Ads uses micros (1 million = 1 currency unit)
MICROS_PER_CURRENCY_UNIT = 1_000_000

# Error code fragments reported when a negative keyword already exists
DUPLICATE_ERROR_MARKERS = ("DUPLICATE", "ALREADY_EXISTS")

CAMPAIGNS_QUERY = """
    SELECT
        campaign.id,
        campaign.name,
        campaign.status,
        campaign.experiment_type
    FROM campaign
    WHERE campaign.status = 'ENABLED'
        AND campaign.experiment_type = 'BASE'
    ORDER BY campaign.name
""".strip()

AD_GROUPS_QUERY = """
    SELECT
        ad_group.id,
        ad_group.name,
        ad_group.status,
        campaign.id,
        campaign.name
    FROM ad_group
    WHERE campaign.id = {campaign_id}
        AND ad_group.status = 'ENABLED'
    ORDER BY ad_group.name
""".strip()

KEYWORD_COST_QUERY = """
    SELECT
        ad_group_criterion.criterion_id,
        ad_group_criterion.keyword.text,
        ad_group_criterion.keyword.match_type,
        ad_group_criterion.status,
        metrics.cost_micros
    FROM keyword_view
    WHERE {entity_filter}
        AND ad_group_criterion.status = 'ENABLED'
        AND ad_group.status = 'ENABLED'
        AND segments.date DURING {date_range}
    ORDER BY metrics.cost_micros DESC
    LIMIT {limit}
""".strip()

# keyword_view omits keywords without activity in the date range
KEYWORD_FALLBACK_QUERY = """
    SELECT
        ad_group_criterion.criterion_id,
        ad_group_criterion.keyword.text,
        ad_group_criterion.keyword.match_type,
        ad_group_criterion.status
    FROM ad_group_criterion
    WHERE {entity_filter}
        AND ad_group_criterion.type = 'KEYWORD'
        AND ad_group_criterion.negative = FALSE
        AND ad_group_criterion.status = 'ENABLED'
        AND ad_group.status = 'ENABLED'
    ORDER BY ad_group_criterion.criterion_id
    LIMIT {limit}
""".strip()


class GoogleAdsDataProvider(AdsPlatform):
    """Read campaigns and keywords from, and write negatives to, Google Ads."""

    def __init__(
        self,
        customer_id: str,
        client: GoogleAdsClient | None = None,
        config: GoogleAdsConfig | None = None,
        date_range: str = "LAST_30_DAYS",
    ):
        """Initialize the provider.

        Args:
            customer_id: Google Ads customer ID (10 digits, no dashes)
            client: Ready GoogleAdsClient; built lazily from ``config`` if omitted
            config: Credentials used to build the client
            date_range: GAQL date range used to rank keywords by cost
        """
        if client is None and config is None:
            raise ValueError("Either client or config is required")
        self.customer_id = customer_id.replace("-", "")
        self.date_range = date_range
        self._client = client
        self._config = config

    @classmethod
    def from_config(
        cls, config: GoogleAdsConfig, date_range: str = "LAST_30_DAYS"
    ) -> "GoogleAdsDataProvider":
        return cls(config.customer_id, config=config, date_range=date_range)

    def _get_client(self) -> GoogleAdsClient:
        """Get or create Google Ads client instance."""
        if self._client is None:
            config = self._config
            credentials = {
                "developer_token": config.developer_token.get_secret_value(),
                "client_id": config.client_id,
                "client_secret": config.client_secret.get_secret_value(),
                "refresh_token": config.refresh_token.get_secret_value(),
                "use_proto_plus": True,
            }
            if config.login_customer_id:
                credentials["login_customer_id"] = config.login_customer_id

            try:
                self._client = GoogleAdsClient.load_from_dict(credentials)
            except Exception as ex:
                logger.error(f"Failed to initialize Google Ads client: {ex}")
                raise AuthenticationError(
                    f"Failed to authenticate with Google Ads API: {str(ex)}"
                ) from ex

        return self._client

    def _search(self, query: str) -> list[Any]:
        client = self._get_client()
        ga_service = client.get_service("GoogleAdsService")
        try:
            return list(ga_service.search(customer_id=self.customer_id, query=query))
        except GoogleAdsException as e:
            self._handle_google_ads_exception(e)

    def get_campaigns(self) -> list[Campaign]:
        rows = self._search(CAMPAIGNS_QUERY)
        campaigns = [
            Campaign(
                campaign_id=str(row.campaign.id),
                name=row.campaign.name,
                status=row.campaign.status.name,
                experiment_type=row.campaign.experiment_type.name,
            )
            for row in rows
        ]
        logger.info(
            f"Fetched {len(campaigns)} campaigns for customer {self.customer_id}",
            extra={"customer_id": self.customer_id},
        )
        return campaigns

    def get_ad_groups(self, campaign: Campaign) -> list[AdGroup]:
        rows = self._search(
            AD_GROUPS_QUERY.format(campaign_id=int(campaign.campaign_id))
        )
        return [
            AdGroup(
                ad_group_id=str(row.ad_group.id),
                name=row.ad_group.name,
                status=row.ad_group.status.name,
                campaign_id=str(row.campaign.id),
                campaign_name=row.campaign.name,
            )
            for row in rows
        ]

    def get_keywords(self, entity: Entity, limit: int) -> list[Keyword]:
        if limit <= 0:
            return []

        entity_filter = self._entity_filter(entity)
        rows = self._search(
            KEYWORD_COST_QUERY.format(
                entity_filter=entity_filter, date_range=self.date_range, limit=limit
            )
        )
        keywords = [
            self._row_to_keyword(row, row.metrics.cost_micros) for row in rows
        ]

        if len(keywords) < limit:
            seen = {keyword.keyword_id for keyword in keywords}
            for row in self._search(
                KEYWORD_FALLBACK_QUERY.format(entity_filter=entity_filter, limit=limit)
            ):
                if len(keywords) >= limit:
                    break
                if str(row.ad_group_criterion.criterion_id) not in seen:
                    keywords.append(self._row_to_keyword(row, 0))

        logger.debug(f"Fetched {len(keywords)} keywords for {entity.descriptor}")
        return keywords

    def add_negative_keyword(self, entity: Entity, literal: str) -> str:
        try:
            text, match_type = parse_negative_keyword(literal)
            client = self._get_client()

            if entity.level == EntityLevel.AD_GROUP:
                service = client.get_service("AdGroupCriterionService")
                operation = client.get_type("AdGroupCriterionOperation")
                criterion = operation.create
                criterion.ad_group = client.get_service(
                    "AdGroupService"
                ).ad_group_path(self.customer_id, entity.ad_group_id)
            else:
                service = client.get_service("CampaignCriterionService")
                operation = client.get_type("CampaignCriterionOperation")
                criterion = operation.create
                criterion.campaign = client.get_service(
                    "CampaignService"
                ).campaign_path(self.customer_id, entity.campaign_id)

            criterion.negative = True
            criterion.keyword.text = text
            criterion.keyword.match_type = client.enums.KeywordMatchTypeEnum[
                match_type.value
            ]

            if entity.level == EntityLevel.AD_GROUP:
                response = service.mutate_ad_group_criteria(
                    customer_id=self.customer_id, operations=[operation]
                )
            else:
                response = service.mutate_campaign_criteria(
                    customer_id=self.customer_id, operations=[operation]
                )
            return response.results[0].resource_name
        except GoogleAdsException as e:
            if self._is_duplicate(e):
                raise DuplicateNegativeError(literal, entity.descriptor) from e
            self._handle_google_ads_exception(e)
        except APIError:
            raise
        except Exception as e:
            # Transport errors, timeouts and malformed literals fail this keyword only
            logger.error(
                f"Failed to add negative keyword {literal} to {entity.descriptor}: {e}",
                extra={
                    "customer_id": self.customer_id,
                    "entity": entity.descriptor,
                    "negative_keyword": literal,
                },
            )
            raise APIError(
                f"Failed to add negative keyword {literal} to "
                f"{entity.descriptor}: {e}"
            ) from e

    def _entity_filter(self, entity: Entity) -> str:
        if entity.level == EntityLevel.AD_GROUP:
            return f"ad_group.id = {int(entity.ad_group_id)}"
        return f"campaign.id = {int(entity.campaign_id)}"

    @staticmethod
    def _row_to_keyword(row: Any, cost_micros: int) -> Keyword:
        criterion = row.ad_group_criterion
        return Keyword(
            keyword_id=str(criterion.criterion_id),
            text=criterion.keyword.text,
            match_type=criterion.keyword.match_type.name,
            status=criterion.status.name,
            cost=(cost_micros or 0) / MICROS_PER_CURRENCY_UNIT,
        )

    @staticmethod
    def _is_duplicate(exception: GoogleAdsException) -> bool:
        return any(
            marker in str(error.error_code)
            for error in exception.failure.errors
            for marker in DUPLICATE_ERROR_MARKERS
        )

    def _handle_google_ads_exception(self, exception: GoogleAdsException) -> None:
        """Handle Google Ads API exceptions.

        Args:
            exception: The GoogleAdsException to handle

        Raises:
            AuthenticationError: For authentication failures
            RateLimitError: For rate limit errors
            APIError: For other API errors
        """
        error_messages = []

        for error in exception.failure.errors:
            error_messages.append(f"{error.error_code}: {error.message}")

            if "AUTHENTICATION" in str(error.error_code):
                raise AuthenticationError(f"Authentication failed: {error.message}")
            elif "RATE_EXCEEDED" in str(error.error_code):
                raise RateLimitError(f"Rate limit exceeded: {error.message}")

        full_message = "; ".join(error_messages)
        logger.error(f"Google Ads API error: {full_message}")
        raise APIError(f"Google Ads API error: {full_message}")
