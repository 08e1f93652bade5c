"""Policy issue catalog model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class IssueCategory(str, Enum):
    """Top-level grouping for policy issues."""

    HOUSING = "housing"
    ENVIRONMENT = "environment"
    ECONOMY = "economy"
    SAFETY = "safety"
    SOCIAL = "social"
    GOVERNANCE = "governance"


class PolicyIssue(BaseModel):
    """A single issue the user can take a position on.

    Positions run from the left label (-2) to the right label (+2).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    category: IssueCategory
    left_label: str = Field(alias="leftLabel")
    right_label: str = Field(alias="rightLabel")
    description: str
