"""SQLAlchemy models for the Project domain.

The tables carry no ORM relationships: every related row is read
separately and stitched together by ``app.services.project_hydrator``. User
references (``advisor_id``, ``student_id``) are weak and have no foreign key, so a
deleted user leaves the project in place.
"""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base


class Project(Base):
    __tablename__ = "project"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    keyword = Column(String(50), default="other")
    description = Column(Text)
    project_type = Column(String(20), nullable=False, default="other")  # academic/competition/service/other
    status = Column(String(20), nullable=False, default="underreview")  # draft/underreview/approved/reject
    semester = Column(String(1), nullable=False, default="1")  # 1/2
    year = Column(Integer, nullable=False)
    team_name = Column(String(255))
    competition_name = Column(String(255))
    start_date = Column(Date)
    end_date = Column(Date)
    advisor_id = Column(Integer)
    course_id = Column(Integer)
    grade = Column(String(2))
    feedback_advisor = Column(Text)
    feedback_coordinator = Column(Text)
    comment_student = Column(Text)  # JSON metadata bag
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index("idx_project_advisor", "advisor_id"),
        Index("idx_project_course", "course_id"),
    )


class TeamMember(Base):
    __tablename__ = "team_member"

    member_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("project.id"), nullable=False)
    student_id = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("student_id", "project_id", name="uq_team_member_student_project"),
        Index("idx_team_member_project", "project_id"),
    )


class Link(Base):
    __tablename__ = "link"

    link_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("project.id"), nullable=False)
    link = Column(Text, nullable=False)

    __table_args__ = (
        Index("idx_link_project", "project_id"),
    )
