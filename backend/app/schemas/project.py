"""Pydantic schemas for project request/response contracts."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from pydantic import BaseModel, Field

from app.utils.project_fields import DISPLAY_STATUS_MAP, DISPLAY_TYPE_MAP

if TYPE_CHECKING:
    from app.services.project_hydrator import ProjectAggregate


class ProjectCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    keywords: List[Any] = Field(default_factory=list)
    team_name: Optional[str] = None
    status: Optional[str] = None
    semester: Optional[str] = None
    competition_name: Optional[str] = None
    award: Optional[str] = None
    external_links: List[Any] = Field(default_factory=list)
    team_members: List[Any] = Field(default_factory=list)
    course_code: Optional[str] = None
    completion_date: Optional[str] = None
    files: List[Any] = Field(default_factory=list)


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    keywords: List[Any] = Field(default_factory=list)
    team_name: Optional[str] = None
    semester: Optional[str] = None
    competition_name: Optional[str] = None
    award: Optional[str] = None
    external_links: List[Any] = Field(default_factory=list)
    team_members: List[Any] = Field(default_factory=list)
    course_code: Optional[str] = None
    completion_date: Optional[str] = None
    files: List[Any] = Field(default_factory=list)


class GradeUpdate(BaseModel):
    grade: Optional[str] = None


class FeedbackUpdate(BaseModel):
    feedback: Optional[str] = None


class StatusUpdate(BaseModel):
    status: Optional[str] = None


class StudentOut(BaseModel):
    id: int
    name: str
    email: str


class FeedbackOut(BaseModel):
    advisor: Optional[str] = None
    coordinator: Optional[str] = None


class ProjectOut(BaseModel):
    id: int
    title: str
    type: str
    type_label: str
    status: str
    status_label: str
    description: str = ""
    submission_date: Optional[date] = None
    last_modified: Optional[date] = None
    students: List[str] = Field(default_factory=list)
    student_details: List[StudentOut] = Field(default_factory=list)
    advisor: str = ""
    advisor_email: str = ""
    advisor_id: Optional[int] = None
    team_name: str = ""
    keywords: List[str] = Field(default_factory=list)
    competition_name: Optional[str] = None
    award: Optional[str] = None
    external_links: List[str] = Field(default_factory=list)
    links: List[str] = Field(default_factory=list)
    files: List[Dict[str, Any]] = Field(default_factory=list)
    team_members: List[Dict[str, Any]] = Field(default_factory=list)
    semester: str
    year: str = ""
    course_id: Optional[int] = None
    course_code: Optional[str] = None
    completion_date: Optional[str] = None
    grade: Optional[str] = None
    feedback: FeedbackOut

    @classmethod
    def from_aggregate(cls, aggregate: "ProjectAggregate") -> "ProjectOut":
        project = aggregate.project
        bag = aggregate.metadata or {}
        advisor = aggregate.advisor
        external_links = bag.get("externalLinks")
        completion_date = bag.get("completionDate")
        if completion_date is None and project.end_date is not None:
            completion_date = project.end_date.isoformat()
        return cls(
            id=project.id,
            title=project.name,
            type=project.project_type,
            type_label=DISPLAY_TYPE_MAP.get(project.project_type, "Other"),
            status=project.status,
            status_label=DISPLAY_STATUS_MAP.get(project.status, "Under Review"),
            description=project.description or "",
            submission_date=project.start_date,
            last_modified=project.end_date,
            students=[s.name for s in aggregate.students],
            student_details=[StudentOut(id=s.id, name=s.name, email=s.email) for s in aggregate.students],
            advisor=advisor.name if advisor else "",
            advisor_email=advisor.email if advisor else "",
            advisor_id=project.advisor_id,
            team_name=project.team_name or "",
            keywords=bag.get("keywords", []),
            competition_name=project.competition_name,
            award=bag.get("award"),
            external_links=external_links if external_links is not None else list(aggregate.links),
            links=list(aggregate.links),
            files=bag.get("files", []),
            team_members=bag.get("teamMembers", []),
            semester="Semester 2" if project.semester == "2" else "Semester 1",
            year=str(project.year) if project.year is not None else "",
            course_id=project.course_id,
            course_code=bag.get("courseCode"),
            completion_date=completion_date,
            grade=aggregate.grade,
            feedback=FeedbackOut(advisor=project.feedback_advisor, coordinator=project.feedback_coordinator),
        )


class ProjectEnvelope(BaseModel):
    project: Optional[ProjectOut] = None


class ProjectListEnvelope(BaseModel):
    projects: List[ProjectOut] = Field(default_factory=list)
