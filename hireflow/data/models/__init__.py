"""
Pydantic data models and schemas for HireFlow.

This module provides all data models used throughout the application,
including database documents, embedded models, and read views.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, TimestampMixin, utc_now

# User models
from .user import CandidateSummary, User, UserCreate

# Job models
from .job import Job, JobCreate, JobPage, JobSummary

# Match models
from .match import MatchScores, RankedCandidate

# Application models
from .application import (
    Application,
    CandidateApplicationView,
    HistoryEntry,
    JobApplicationView,
)

# Dashboard models
from .dashboard import DashboardStats, JobApplicationCount, StatusCount

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    "utc_now",
    # User
    "CandidateSummary",
    "User",
    "UserCreate",
    # Job
    "Job",
    "JobCreate",
    "JobPage",
    "JobSummary",
    # Match
    "MatchScores",
    "RankedCandidate",
    # Application
    "Application",
    "CandidateApplicationView",
    "HistoryEntry",
    "JobApplicationView",
    # Dashboard
    "DashboardStats",
    "JobApplicationCount",
    "StatusCount",
]
