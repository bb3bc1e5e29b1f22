"""Pydantic models for config types."""

from typing import Optional
from pydantic import BaseModel, Field

class RepoConfig(BaseModel):
    """Repository configuration."""
    github_repo_owner: Optional[str] = None
    github_repo_name: Optional[str] = None
    default_branch: Optional[str] = None  # None means the repository's own default

    class Config:
        """Pydantic config."""
        extra = "allow"  # Allow extra fields for forward compatibility

    @property
    def full_name(self) -> Optional[str]:
        """Get owner/name if both are known."""
        if self.github_repo_owner and self.github_repo_name:
            return f"{self.github_repo_owner}/{self.github_repo_name}"
        return None

class StackConfig(BaseModel):
    """Fixed identifiers used by the stacking bot."""
    marker: str = "/stack"
    branch_prefix: str = "stackbot/pr-"
    check_name: str = "stacked-dependencies"
    label: str = "stacked"
    label_color: str = "c5def5"
    label_description: str = "Depends on another open pull request"
    search_page_size: int = Field(default=100, ge=1, le=100)

    class Config:
        """Pydantic config."""
        extra = "allow"  # Allow extra fields

class StackbotConfig(BaseModel):
    """Full stackbot configuration."""
    repo: RepoConfig = Field(default_factory=RepoConfig)
    stack: StackConfig = Field(default_factory=StackConfig)

    class Config:
        """Pydantic config."""
        extra = "allow"  # Allow extra fields
