"""SQLAlchemy model for courses. Course CRUD lives outside this service; only code lookups happen here."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.database import Base


class Course(Base):
    __tablename__ = "course"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255))
    created_at = Column(DateTime, server_default=func.now())
