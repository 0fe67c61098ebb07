"""Campaign and ad group models."""

from enum import Enum

from pydantic import Field

from crossnegatives.models.base import FrozenModel


class EntityLevel(str, Enum):
    """Level at which negatives are cross-applied."""

    CAMPAIGN = "CAMPAIGN"
    AD_GROUP = "AD_GROUP"


class EntityStatus(str, Enum):
    """Campaign and ad group status values."""

    ENABLED = "ENABLED"
    PAUSED = "PAUSED"
    REMOVED = "REMOVED"
    UNKNOWN = "UNKNOWN"


class ExperimentType(str, Enum):
    """Campaign experiment type values."""

    BASE = "BASE"
    DRAFT = "DRAFT"
    EXPERIMENT = "EXPERIMENT"
    UNKNOWN = "UNKNOWN"


class Campaign(FrozenModel):
    """Advertising campaign."""

    campaign_id: str = Field(..., description="Platform campaign ID")
    name: str = Field(..., description="Campaign name")
    status: EntityStatus = Field(default=EntityStatus.ENABLED)
    experiment_type: ExperimentType = Field(default=ExperimentType.BASE)

    @property
    def level(self) -> EntityLevel:
        return EntityLevel.CAMPAIGN

    @property
    def descriptor(self) -> str:
        """Label used in logs and the exported report."""
        return f"Campaign: {self.name}"

    @property
    def is_eligible(self) -> bool:
        """Enabled and not a draft or experiment arm."""
        return (
            self.status == EntityStatus.ENABLED
            and self.experiment_type == ExperimentType.BASE
        )


class AdGroup(FrozenModel):
    """Ad group within a campaign."""

    ad_group_id: str = Field(..., description="Platform ad group ID")
    name: str = Field(..., description="Ad group name")
    status: EntityStatus = Field(default=EntityStatus.ENABLED)
    campaign_id: str = Field(..., description="Parent campaign ID")
    campaign_name: str = Field(..., description="Parent campaign name")

    @property
    def level(self) -> EntityLevel:
        return EntityLevel.AD_GROUP

    @property
    def descriptor(self) -> str:
        """Label used in logs and the exported report."""
        return f"{self.campaign_name} > {self.name}"


Entity = Campaign | AdGroup
