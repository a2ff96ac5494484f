"""
Database repositories for HireFlow data access.

This module provides repository classes for all database collections,
implementing the repository pattern for clean data access.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .user_repository import UserRepository, get_user_repository
from .job_repository import JobRepository, get_job_repository
from .application_repository import ApplicationRepository, get_application_repository

__all__ = [
    # Base
    "BaseRepository",
    # User
    "UserRepository",
    "get_user_repository",
    # Job
    "JobRepository",
    "get_job_repository",
    # Application
    "ApplicationRepository",
    "get_application_repository",
]
