"""
================================================================================
FILE: showcase_matcher/api/models.py
================================================================================

PURPOSE:
    Pydantic request/response schemas for the HTTP API.

KEY FACTS:
    - Response field names are camelCase on the wire (howItsMade, sourceCode)
      to match the stored payload and existing clients
    - `idea` is optional at the schema level so that a missing idea gets the
      400 "Idea is required" response instead of a generic 422
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from showcase_matcher.core.models import Project


class SearchIdeasRequest(BaseModel):
    idea: Optional[str] = Field(default=None, description="Free-text project idea")
    limit: Optional[int] = Field(default=None, ge=1, le=100, description="Max projects returned")


class ProjectModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    link: Optional[str] = None
    how_its_made: Optional[str] = Field(default=None, alias="howItsMade")
    source_code: Optional[str] = Field(default=None, alias="sourceCode")

    @classmethod
    def from_project(cls, project: Project) -> "ProjectModel":
        return cls(
            title=project.title,
            description=project.description,
            link=project.link,
            how_its_made=project.how_its_made,
            source_code=project.source_code,
        )


class SearchIdeasResponse(BaseModel):
    message: str = "Search completed successfully"
    projects: List[ProjectModel] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    environment: str
    embedding_provider: str
