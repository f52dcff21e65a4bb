"""API Dependencies — hand the process-wide repository and service to route handlers.

Invariants:
    - One PersonRepository per process, built in the lifespan and kept on app.state
    - Routes never construct repositories or touch the driver client

Design Decisions:
    - FastAPI Depends over module globals: tests swap the repository with dependency_overrides
"""

from fastapi import Depends, Request

from personstore.repositories.person_repository import PersonRepository
from personstore.services.person_service import PersonService


def get_repository(request: Request) -> PersonRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise RuntimeError("Document store not initialized")
    return repository


def get_person_service(
    repository: PersonRepository = Depends(get_repository),
) -> PersonService:
    return PersonService(repository)
