"""Type definitions for GitHub webhook payloads."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

# Webhook payload types with Pydantic models. Only the fields the bot reads
# are declared; everything else in the payload is ignored.
class RefPayload(BaseModel):
    ref: str
    sha: str

class LabelPayload(BaseModel):
    name: str

class PullRequestPayload(BaseModel):
    id: int = 0
    number: int
    body: str = ""
    state: str = "open"
    merged: bool = False
    base: RefPayload
    head: RefPayload
    labels: List[LabelPayload] = Field(default_factory=list)

    @field_validator('body', mode='before')
    @classmethod
    def _null_body(cls, value: Optional[str]) -> str:
        # GitHub sends null for an empty description
        return value or ""

    @property
    def label_names(self) -> List[str]:
        return [label.name for label in self.labels]

class BodyChange(BaseModel):
    from_: Optional[str] = Field(default=None, alias='from')

class PullRequestChanges(BaseModel):
    body: Optional[BodyChange] = None

class OwnerPayload(BaseModel):
    login: str

class RepositoryPayload(BaseModel):
    name: str
    full_name: str
    default_branch: Optional[str] = None
    owner: Optional[OwnerPayload] = None

class PullRequestEvent(BaseModel):
    """A `pull_request` webhook delivery."""
    action: str
    number: int
    pull_request: PullRequestPayload
    changes: Optional[PullRequestChanges] = None
    repository: Optional[RepositoryPayload] = None

    @property
    def previous_body(self) -> Optional[str]:
        """Old description text of an edit, or None if the body didn't change."""
        if self.changes is None or self.changes.body is None:
            return None
        return self.changes.body.from_

def parse_pull_request_event(payload: Dict[str, Any]) -> PullRequestEvent:
    """Parse a webhook payload into a Pydantic model."""
    try:
        return PullRequestEvent.model_validate(payload)
    except Exception as e:
        raise TypeError(f"Invalid pull_request payload: {e}")
