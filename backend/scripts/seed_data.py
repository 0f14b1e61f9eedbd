"""Seed the database with demo users, a course and one submitted project."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import SessionLocal, engine, Base
import app.models  # noqa: F401

from app.models.course import Course
from app.models.user import User
from app.schemas.project import ProjectCreate
from app.services.project_creation import create_project
from app.services.table_store import TableStore


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        store = TableStore(db)
        users = store.insert(User, [
            {"name": "Dana Coordinator", "email": "coordinator@uni.edu", "role": "coordinator"},
            {"name": "Dr. Lee", "email": "lee@uni.edu", "role": "advisor"},
            {"name": "Dr. Park", "email": "park@uni.edu", "role": "advisor"},
            {"name": "Alex Kim", "email": "alex@uni.edu", "role": "student"},
            {"name": "Sam Choi", "email": "sam@uni.edu", "role": "student"},
        ])
        store.insert_one(Course, {"course_code": "CS499", "name": "Capstone Project"})

        submitter = users[3]
        aggregate = create_project(store, submitter, ProjectCreate(
            title="Campus Navigation App",
            description="Indoor navigation for the engineering building.",
            type="Capstone",
            keywords=["AI", "mobile"],
            team_name="Wayfinders",
            semester="Semester 1",
            course_code="CS499",
            external_links=["https://github.com/example/wayfinders"],
            team_members=[
                {"name": "Sam Choi", "email": "sam@uni.edu", "role": "student"},
                {"name": "Dr. Lee", "email": "lee@uni.edu", "role": "lecturer"},
            ],
        ))
        print(f"Seeded project {aggregate.project.id} with {len(aggregate.students)} students.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
