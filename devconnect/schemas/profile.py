"""
DevConnect Backend — Profile Schemas
======================================

What:  Request bodies for profile upsert and experience/education entries,
       plus the profile response shape.
How:   Optional text fields are normalized so that blank strings count as
       "not provided"; the service only writes fields that survive that.

Skills:
    Accepted either as a list of strings or as one comma-separated string
    ("python, fastapi,  sql"), the form the original web client submits.
    Both are normalized to a trimmed list with empty items dropped.
"""

import uuid
from datetime import date, datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from devconnect.schemas.user import UserSummary

SOCIAL_NETWORKS = ("youtube", "facebook", "twitter", "instagram", "linkedin")


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


class ProfileUpsert(BaseModel):
    """Body of POST /api/profile. Only `status` and `skills` are required."""
    status: str = Field(max_length=255)
    skills: Union[List[str], str]
    company: Optional[str] = Field(default=None, max_length=255)
    website: Optional[str] = Field(default=None, max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)
    bio: Optional[str] = None
    githubusername: Optional[str] = Field(default=None, max_length=100)
    youtube: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Status is required")
        return v

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: Union[List[str], str]) -> List[str]:
        items = v.split(",") if isinstance(v, str) else v
        skills = [skill.strip() for skill in items if skill and skill.strip()]
        if not skills:
            raise ValueError("Skills is required")
        return skills

    @field_validator(
        "company", "website", "location", "bio", "githubusername", *SOCIAL_NETWORKS
    )
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)

    def profile_fields(self) -> Dict[str, object]:
        """Top-level profile columns that were actually provided."""
        fields = {
            "status": self.status,
            "skills": self.skills,
            "company": self.company,
            "website": self.website,
            "location": self.location,
            "bio": self.bio,
            "githubusername": self.githubusername,
        }
        return {k: v for k, v in fields.items() if v is not None}

    def social_fields(self) -> Dict[str, str]:
        """Social links that were actually provided."""
        links = {name: getattr(self, name) for name in SOCIAL_NETWORKS}
        return {k: v for k, v in links.items() if v is not None}


class _DatedEntry(BaseModel):
    """Fields shared by experience and education entries."""
    model_config = ConfigDict(populate_by_name=True)

    from_: date = Field(alias="from", description="Start date (YYYY-MM-DD)")
    to: Optional[date] = Field(default=None, description="End date; omit when current")
    current: bool = False
    description: Optional[str] = None


class ExperienceCreate(_DatedEntry):
    """Body of PUT /api/profile/experience."""
    title: str
    company: str
    location: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("company")
    @classmethod
    def validate_company(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Company is required")
        return v


class EducationCreate(_DatedEntry):
    """Body of PUT /api/profile/education."""
    school: str
    degree: str
    fieldofstudy: str

    @field_validator("school", "degree", "fieldofstudy")
    @classmethod
    def validate_required_text(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        if not v:
            labels = {"school": "School", "degree": "Degree", "fieldofstudy": "Field of study"}
            raise ValueError(f"{labels[info.field_name]} is required")
        return v


class ExperienceItem(ExperienceCreate):
    id: str


class EducationItem(EducationCreate):
    id: str


class ProfileResponse(BaseModel):
    """
    What:  A profile document with its owner's name and avatar embedded.
    Who:   Returned by every /api/profile route that yields a profile.
    """
    id: uuid.UUID
    user: UserSummary
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    status: str
    githubusername: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    social: Dict[str, str] = Field(default_factory=dict)
    experience: List[ExperienceItem] = Field(default_factory=list)
    education: List[EducationItem] = Field(default_factory=list)
    date: datetime

    model_config = {"from_attributes": True}


class GithubRepo(BaseModel):
    """The subset of GitHub's repository object the client renders."""
    id: int
    name: str
    html_url: str
    description: Optional[str] = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0

    model_config = {"extra": "ignore"}
