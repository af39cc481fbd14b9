"""
FILE: showcase_matcher/core/models.py

Domain records shared by the search handler, the repository and the API.

Stored payload keys are camelCase (projectDescription, howItsMade,
sourceCode, lastUpdated); Python attributes are snake_case. The mapping
lives here and nowhere else.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

# Payload keys as stored in the showcase collection
TITLE = "title"
PROJECT_DESCRIPTION = "projectDescription"
HOW_ITS_MADE = "howItsMade"
SOURCE_CODE = "sourceCode"
LINK = "link"
HACKATHON = "hackathon"
LAST_UPDATED = "lastUpdated"


@dataclass
class Project:
    """A project as returned to callers of the search path."""

    title: str
    description: str
    link: Optional[str] = None
    how_its_made: Optional[str] = None
    source_code: Optional[str] = None
    hackathon: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], with_hackathon: bool = False) -> "Project":
        return cls(
            title=str(payload.get(TITLE) or ""),
            description=payload.get(PROJECT_DESCRIPTION) or "",
            link=payload.get(LINK),
            how_its_made=payload.get(HOW_ITS_MADE),
            source_code=payload.get(SOURCE_CODE),
            hackathon=payload.get(HACKATHON) if with_hackathon else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """camelCase view used by the HTTP API and the CLI."""
        d: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "howItsMade": self.how_its_made,
            "sourceCode": self.source_code,
        }
        if self.hackathon is not None:
            d["hackathon"] = self.hackathon
        return d


@dataclass
class ProjectRecord:
    """Input to ProjectRepository.add_project()."""

    title: str
    project_description: str
    how_its_made: Optional[str] = None
    source_code: Optional[str] = None
    link: Optional[str] = None
    hackathon: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            TITLE: self.title,
            PROJECT_DESCRIPTION: self.project_description,
            HOW_ITS_MADE: self.how_its_made,
            SOURCE_CODE: self.source_code,
            LINK: self.link,
            HACKATHON: self.hackathon,
        }
