"""Service layer package."""

from app.services import (
    table_store,
    metadata_codec,
    user_service,
    auth_service,
    project_hydrator,
    project_creation,
    project_service,
    comment_service,
)
