"""
Data models for the career portal consumer.

Field names follow the gateway's camelCase JSON; Python attributes are
snake_case. Unknown fields are kept so newer upstream payloads still load.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PortalModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # GraphQL fields are nullable; a null falls back to the field default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class SalaryRange(PortalModel):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "USD"


class Job(PortalModel):
    id: str
    title: Optional[str] = ""
    department: Optional[str] = ""
    location: Optional[str] = ""
    employment_type: Optional[str] = Field("", alias="employmentType")
    experience_level: Optional[str] = Field(None, alias="experienceLevel")
    salary_range: Optional[SalaryRange] = Field(None, alias="salaryRange")
    description: Optional[str] = ""
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    status: Optional[str] = None
    posted_date: Optional[str] = Field(None, alias="postedDate")
    closing_date: Optional[str] = Field(None, alias="closingDate")
    application_count: int = Field(0, alias="applicationCount")
    view_count: int = Field(0, alias="viewCount")
    remote_work: bool = Field(False, alias="remoteWork")
    urgent_hiring: bool = Field(False, alias="urgentHiring")

    @property
    def type(self) -> str:
        """Employment type, as the job board labels it."""
        return self.employment_type or ""


class AIScore(PortalModel):
    overall: Optional[float] = None
    insights: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    recommendation: Optional[str] = None
    generated_at: Optional[str] = Field(None, alias="generatedAt")


class Application(PortalModel):
    id: str
    status: Optional[str] = None
    job_id: Optional[str] = Field(None, alias="jobId")
    applied_date: Optional[str] = Field(None, alias="appliedDate")
    ai_score: Optional[AIScore] = Field(None, alias="aiScore")


class Candidate(PortalModel):
    id: str
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    phone: Optional[str] = None
    location: Optional[str] = None
    headline: Optional[str] = None
    resume_url: Optional[str] = Field(None, alias="resumeUrl")
    linkedin_url: Optional[str] = Field(None, alias="linkedinUrl")
    skills: List[str] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
