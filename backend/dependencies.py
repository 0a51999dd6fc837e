"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating repository and service instances,
following the Dependency Inversion Principle. The Database lives on app.state,
so tests can swap it for an in-memory one.
"""

from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from database import Database
from repositories.job_repository import JobRepository
from repositories.video_repository import VideoRepository
from services.interfaces import IJobService
from services.job_service import JobService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    """Dependency for FastAPI routes"""
    yield from database.get_db()


def get_video_repository(db: Session = Depends(get_db)) -> VideoRepository:
    """
    Factory function for creating VideoRepository instances.

    Args:
        db: Database session (injected)

    Returns:
        VideoRepository instance
    """
    return VideoRepository(db)


def get_job_repository(db: Session = Depends(get_db)) -> JobRepository:
    """
    Factory function for creating JobRepository instances.

    Args:
        db: Database session (injected)

    Returns:
        JobRepository instance
    """
    return JobRepository(db)


def get_job_service(db: Session = Depends(get_db)) -> IJobService:
    """
    Factory function for creating JobService instances.

    Args:
        db: Database session (injected)

    Returns:
        IJobService: Job service implementation
    """
    return JobService(db)
