"""Representative (legislator) models from the Open States people API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from civicpulse.models.bill import Organization


class Office(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    address: Optional[str] = None
    voice: Optional[str] = None
    fax: Optional[str] = None


class CurrentRole(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    org_classification: str = ""
    district: str = ""
    division_id: str = ""


class Representative(BaseModel):
    """A legislator who can be called about a bill."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str = ""
    party: str = ""
    current_role: Optional[CurrentRole] = None
    jurisdiction: Optional[Organization] = None
    given_name: str = ""
    family_name: str = ""
    image: Optional[str] = None
    email: Optional[str] = None
    capitol_office: Optional[Office] = None
    district_office: Optional[Office] = None

    @property
    def role(self) -> str:
        return self.current_role.title if self.current_role else ""

    @property
    def district(self) -> str:
        return self.current_role.district if self.current_role else ""

    @property
    def phone(self) -> Optional[str]:
        """Capitol office number, falling back to the district office."""
        if self.capitol_office and self.capitol_office.voice:
            return self.capitol_office.voice
        if self.district_office and self.district_office.voice:
            return self.district_office.voice
        return None

    def to_api(self) -> dict:
        data = self.model_dump(mode="json")
        data["phone"] = self.phone
        data["role"] = self.role
        data["district"] = self.district
        return data
