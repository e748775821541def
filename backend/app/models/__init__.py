"""
Database models
"""
from app.models.applicant import Applicant

__all__ = [
    "Applicant",
]
