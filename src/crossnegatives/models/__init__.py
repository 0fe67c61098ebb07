"""Data models for crossnegatives."""

from crossnegatives.models.entity import (
    AdGroup,
    Campaign,
    Entity,
    EntityLevel,
    EntityStatus,
    ExperimentType,
)
from crossnegatives.models.keyword import Keyword, KeywordMatchType, KeywordStatus
from crossnegatives.models.record import NegativeRecord, RunContext, WriteFailure

__all__ = [
    "AdGroup",
    "Campaign",
    "Entity",
    "EntityLevel",
    "EntityStatus",
    "ExperimentType",
    "Keyword",
    "KeywordMatchType",
    "KeywordStatus",
    "NegativeRecord",
    "RunContext",
    "WriteFailure",
]
