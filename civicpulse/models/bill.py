"""Bill models for records returned by the Open States v3 API.

Open States returns many optional or null nested fields. Every field here
has a default, and consumers use the derived properties (``abstract``,
``latest_action``, ``status``) instead of checking for nulls themselves.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Latest action classification -> human-readable status label
ACTION_STATUS_LABELS: dict[str, str] = {
    "introduction": "Introduced",
    "filing": "Filed",
    "referral-committee": "In Committee",
    "committee-passage": "Passed Committee",
    "reading-1": "First Reading",
    "reading-2": "Second Reading",
    "reading-3": "Third Reading",
    "passage": "Passed",
    "failure": "Failed",
    "withdrawal": "Withdrawn",
    "substitution": "Substituted",
    "amendment-introduction": "Amended",
    "amendment-passage": "Amendment Passed",
    "executive-receipt": "Sent to Governor",
    "executive-signature": "Signed by Governor",
    "executive-veto": "Vetoed",
    "became-law": "Became Law",
}

DEFAULT_STATUS_LABEL = "In Progress"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Organization(_Record):
    """Chamber, committee, or jurisdiction reference."""

    id: str = ""
    name: str = ""
    classification: str = ""


class BillAbstract(_Record):
    abstract: str = ""
    note: str = ""
    date: str = ""


class BillAction(_Record):
    """One legislative event; a bill's actions are ordered oldest first."""

    organization: Optional[Organization] = None
    description: str = ""
    date: str = ""
    classification: list[str] = Field(default_factory=list)
    order: int = 0


class SponsorRole(_Record):
    title: str = ""
    org_classification: str = ""
    district: str = ""


class SponsorPerson(_Record):
    id: str = ""
    name: str = ""
    party: str = ""
    current_role: Optional[SponsorRole] = None


class BillSponsorship(_Record):
    name: str = ""
    entity_type: str = ""
    organization: Optional[Organization] = None
    person: Optional[SponsorPerson] = None
    primary: bool = False
    classification: str = ""


class Bill(_Record):
    """A bill as fetched from Open States. Immutable for one fetch cycle."""

    id: str
    identifier: str = ""
    title: str = ""
    session: str = ""
    jurisdiction: Optional[Organization] = None
    from_organization: Optional[Organization] = None
    classification: list[str] = Field(default_factory=list)
    subjects: list[str] = Field(default_factory=list, alias="subject")
    abstracts: list[BillAbstract] = Field(default_factory=list)
    actions: list[BillAction] = Field(default_factory=list)
    sponsorships: list[BillSponsorship] = Field(default_factory=list)
    openstates_url: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    first_action_date: Optional[str] = None
    latest_action_date: Optional[str] = None
    latest_action_description: Optional[str] = None
    latest_passage_date: Optional[str] = None

    @property
    def abstract(self) -> str:
        """First non-empty abstract, falling back to the title."""
        for entry in self.abstracts:
            if entry.abstract:
                return entry.abstract
        return self.title

    @property
    def latest_action(self) -> Optional[BillAction]:
        return self.actions[-1] if self.actions else None

    @property
    def status(self) -> str:
        """Status label derived from the latest action's classification."""
        action = self.latest_action
        if action is None or not action.classification:
            return DEFAULT_STATUS_LABEL
        return ACTION_STATUS_LABELS.get(action.classification[0], DEFAULT_STATUS_LABEL)

    @property
    def primary_sponsors(self) -> list[str]:
        return [s.name for s in self.sponsorships if s.primary and s.name]

    def to_api(self) -> dict:
        """Serialize using the Open States field names."""
        return self.model_dump(by_alias=True)
