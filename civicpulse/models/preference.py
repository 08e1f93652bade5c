"""User preference models."""

from typing import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, computed_field


class UserPreference(BaseModel):
    """A user's position on one policy issue.

    position runs from -2 (strongly favors the left label) to +2
    (strongly favors the right label); 0 is neutral.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    issue_id: str = Field(alias="issueId", min_length=1)
    position: int = Field(ge=-2, le=2)

    @computed_field
    @property
    def intensity(self) -> int:
        return abs(self.position)


class PreferenceSet:
    """Preferences keyed by issue id; updating an issue replaces its entry."""

    def __init__(self, preferences: Iterable[UserPreference] = ()):
        self._by_issue: dict[str, UserPreference] = {}
        for preference in preferences:
            self.update(preference)

    def update(self, preference: UserPreference) -> None:
        self._by_issue[preference.issue_id] = preference

    def get(self, issue_id: str) -> UserPreference | None:
        return self._by_issue.get(issue_id)

    def clear(self) -> None:
        self._by_issue.clear()

    def as_list(self) -> list[UserPreference]:
        return list(self._by_issue.values())

    def __iter__(self) -> Iterator[UserPreference]:
        return iter(list(self._by_issue.values()))

    def __len__(self) -> int:
        return len(self._by_issue)
