"""Configuration management for crossnegatives."""

import logging
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from crossnegatives.core.exceptions import ConfigurationError

# GAQL date range literals accepted by DURING clauses
VALID_DATE_RANGES = {
    "TODAY",
    "YESTERDAY",
    "LAST_7_DAYS",
    "LAST_14_DAYS",
    "LAST_30_DAYS",
    "LAST_BUSINESS_WEEK",
    "THIS_MONTH",
    "LAST_MONTH",
    "THIS_WEEK_SUN_TODAY",
    "THIS_WEEK_MON_TODAY",
    "LAST_WEEK_SUN_SAT",
    "LAST_WEEK_MON_SUN",
}


class LogFormat(str, Enum):
    """Log format options."""

    JSON = "json"
    TEXT = "text"


def split_comma_separated(value: Any) -> Any:
    """Split a comma-separated string into a list of trimmed, non-empty items."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class GoogleAdsConfig(BaseModel):
    """Google Ads API configuration."""

    developer_token: SecretStr = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1)
    client_secret: SecretStr = Field(..., min_length=1)
    refresh_token: SecretStr = Field(..., min_length=1)
    customer_id: str = Field(..., description="Account the propagator runs against")
    login_customer_id: str | None = None

    @field_validator("customer_id", "login_customer_id")
    @classmethod
    def validate_customer_id(cls, v: str | None) -> str | None:
        """Validate and clean customer ID."""
        if v:
            # Remove dashes from customer ID
            cleaned = v.replace("-", "")
            if not cleaned.isdigit() or len(cleaned) != 10:
                raise ValueError("Customer ID must be 10 digits")
            return cleaned
        return v


class PropagatorConfig(BaseModel):
    """Cross-negative propagation settings."""

    campaign_level: bool = Field(
        default=True, description="Cross-apply keywords between campaigns"
    )
    ad_group_level: bool = Field(
        default=False,
        description="Cross-apply keywords between ad groups of the same campaign",
    )
    use_original_match_type: bool = Field(
        default=False,
        description="Keep each keyword's match type instead of forcing exact",
    )
    max_negative_keywords: int = Field(
        default=10,
        ge=0,
        description="Maximum keywords taken from each entity, highest cost first",
    )
    include_campaigns: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Campaign name patterns to include (empty includes all)",
    )
    exclude_campaigns: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Campaign name patterns to exclude (wins over include)",
    )
    date_range: str = Field(
        default="LAST_30_DAYS", description="Date range used to rank keywords by cost"
    )
    operation_warning_threshold: int = Field(
        default=5000,
        ge=1,
        description="Planned negative writes above which a warning is logged",
    )
    dry_run: bool = Field(default=False, description="Log negatives without writing")

    @field_validator("include_campaigns", "exclude_campaigns", mode="before")
    @classmethod
    def parse_pattern_list(cls, v: Any) -> Any:
        """Accept comma-separated strings for pattern lists."""
        return split_comma_separated(v)

    @field_validator("date_range")
    @classmethod
    def validate_date_range(cls, v: str) -> str:
        """Validate the GAQL date range literal."""
        cleaned = v.strip().upper()
        if cleaned not in VALID_DATE_RANGES:
            raise ValueError(
                f"date_range must be one of: {', '.join(sorted(VALID_DATE_RANGES))}"
            )
        return cleaned


class ReportConfig(BaseModel):
    """Run log and spreadsheet export settings."""

    logging_enabled: bool = Field(
        default=True, description="Collect the run log for the summary email"
    )
    spreadsheet_export: bool = Field(
        default=False, description="Export applied negatives to a workbook and email it"
    )
    template_path: Path | None = Field(
        default=None, description="Workbook copied for each report"
    )
    output_dir: Path = Field(default=Path("reports"))
    email_recipients: str | None = Field(
        default=None, description="Comma-separated report recipients"
    )
    email_subject: str = Field(default="Cross Negatives Report")

    @property
    def email_list(self) -> list[str]:
        """Parse email recipients from comma-separated string."""
        return split_comma_separated(self.email_recipients)


class EmailConfig(BaseModel):
    """SMTP delivery settings."""

    smtp_host: str = "localhost"
    smtp_port: int = Field(default=587, ge=1, le=65535)
    smtp_username: str | None = None
    smtp_password: SecretStr | None = None
    from_email: str = "crossnegatives@localhost"
    use_tls: bool = True
    timeout: float = Field(default=30.0, gt=0.0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: LogFormat = LogFormat.TEXT

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


class Settings(BaseSettings):
    """Application settings.

    Environment Variables:
        Propagation:
            XNEG_PROPAGATOR__CAMPAIGN_LEVEL=true
            XNEG_PROPAGATOR__AD_GROUP_LEVEL=false
            XNEG_PROPAGATOR__USE_ORIGINAL_MATCH_TYPE=false
            XNEG_PROPAGATOR__MAX_NEGATIVE_KEYWORDS=10
            XNEG_PROPAGATOR__INCLUDE_CAMPAIGNS=Brand,Generic
            XNEG_PROPAGATOR__EXCLUDE_CAMPAIGNS=Test

        Reporting:
            XNEG_REPORT__SPREADSHEET_EXPORT=true
            XNEG_REPORT__EMAIL_RECIPIENTS=a@example.com,b@example.com

        Google Ads API:
            XNEG_GOOGLE_ADS__DEVELOPER_TOKEN=your_dev_token
            XNEG_GOOGLE_ADS__CLIENT_ID=your_client_id
            XNEG_GOOGLE_ADS__CLIENT_SECRET=your_client_secret
            XNEG_GOOGLE_ADS__REFRESH_TOKEN=your_refresh_token
            XNEG_GOOGLE_ADS__CUSTOMER_ID=1234567890
    """

    model_config = SettingsConfigDict(
        env_prefix="XNEG_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    propagator: PropagatorConfig = Field(default_factory=PropagatorConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    google_ads: GoogleAdsConfig | None = None

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "Settings":
        """Load settings from the environment, reading a .env file first."""
        if env_file:
            load_dotenv(env_file)
        else:
            env_path = Path.cwd() / ".env"
            if env_path.exists():
                load_dotenv(env_path)
        return cls()

    def validate_required_settings(self) -> None:
        """Validate settings that depend on each other.

        Raises:
            ConfigurationError: If the combination of settings cannot run
        """
        errors = []

        if not (self.propagator.campaign_level or self.propagator.ad_group_level):
            errors.append("Enable campaign_level, ad_group_level or both")

        if self.report.spreadsheet_export and not self.report.email_list:
            errors.append("spreadsheet_export requires email_recipients")

        if self.report.template_path and not self.report.template_path.exists():
            errors.append(f"Report template not found: {self.report.template_path}")

        if errors:
            raise ConfigurationError(f"Configuration errors: {'; '.join(errors)}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    try:
        settings = Settings.from_env()
        settings.validate_required_settings()
        return settings
    except (ValidationError, ConfigurationError) as e:
        logging.error(f"Configuration error: {e}")
        raise
