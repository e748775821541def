"""
Report Pydantic schemas
"""
from typing import List, Optional, Union
from pydantic import BaseModel

from app.applicants.schemas import GipApplicant, TupadApplicant


class Statistics(BaseModel):
    """Headline counts for a program dashboard"""
    total_applicants: int = 0
    pending: int = 0
    approved: int = 0
    deployed: int = 0
    completed: int = 0
    rejected: int = 0
    resigned: int = 0
    interviewed: int = 0
    barangays_covered: int = 0
    male_count: int = 0
    female_count: int = 0
    pending_male: int = 0
    pending_female: int = 0
    approved_male: int = 0
    approved_female: int = 0
    deployed_male: int = 0
    deployed_female: int = 0
    completed_male: int = 0
    completed_female: int = 0
    rejected_male: int = 0
    rejected_female: int = 0
    resigned_male: int = 0
    resigned_female: int = 0
    interviewed_male: int = 0
    interviewed_female: int = 0


class BarangayStats(BaseModel):
    barangay: str
    total: int
    male: int
    female: int
    pending: int
    approved: int
    deployed: int
    completed: int
    rejected: int
    resigned: int


class StatusStats(BaseModel):
    status: str
    total: int
    male: int
    female: int
    color: str


class GenderStats(BaseModel):
    gender: str
    total: int
    pending: int
    approved: int
    deployed: int
    completed: int
    rejected: int
    resigned: int


class ProgramReport(BaseModel):
    """Everything the dashboard shows for one program and year"""
    program: str
    year: Optional[int] = None
    statistics: Statistics
    barangays: List[BarangayStats]
    statuses: List[StatusStats]
    genders: List[GenderStats]


class DrillDown(BaseModel):
    """Applicants behind one report cell"""
    program: str
    year: Optional[int] = None
    total: int
    items: List[Union[GipApplicant, TupadApplicant]]
