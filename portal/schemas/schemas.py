"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class ExamType(str, Enum):
    regular = "regular"
    revaluation = "revaluation"
    supplementary = "supplementary"


class PlacementStatus(str, Enum):
    upcoming = "upcoming"
    ongoing = "ongoing"
    completed = "completed"


class MaterialType(str, Enum):
    notes = "notes"
    question_paper = "question_paper"
    syllabus = "syllabus"
    lab_manual = "lab_manual"


class MessageRole(str, Enum):
    user = "user"
    assistant = "assistant"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int

class UserResponse(BaseModel):
    user_id: int
    email: str
    is_admin: bool
    is_active: bool
    created_at: datetime


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class ProfileUpsert(BaseModel):
    usn: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=2, max_length=100)
    branch: str = Field(..., min_length=1, max_length=100)
    semester: int = Field(..., ge=1, le=8)
    batch: str = Field(..., min_length=1, max_length=20)

    @field_validator("usn")
    @classmethod
    def normalize_usn(cls, v: str) -> str:
        return v.strip().upper()

class StudentResponse(BaseModel):
    student_id: int
    user_id: int
    usn: str
    name: str
    branch: str
    semester: int
    batch: str
    cgpa: Optional[float] = None
    created_at: datetime

class ProfileSavedResponse(BaseModel):
    student_id: int
    created: bool

class StudentStatsResponse(BaseModel):
    student: StudentResponse
    results_count: int
    materials_count: int


# ============================================================
# RESULT SCHEMAS
# ============================================================

class ResultCreate(BaseModel):
    semester: int = Field(..., ge=1)
    subject: str = Field(..., min_length=1, max_length=200)
    subject_code: str = Field(..., min_length=1, max_length=20)
    internal_marks: Optional[float] = Field(None, ge=0)
    external_marks: Optional[float] = Field(None, ge=0)
    total_marks: Optional[float] = Field(None, ge=0)
    grade: Optional[str] = Field(None, max_length=20)
    credits: int = Field(..., gt=0)
    exam_type: ExamType = ExamType.regular
    academic_year: str = Field(..., min_length=1, max_length=20)

class ResultResponse(BaseModel):
    result_id: int
    student_id: int
    semester: int
    subject: str
    subject_code: str
    internal_marks: Optional[float] = None
    external_marks: Optional[float] = None
    total_marks: Optional[float] = None
    grade: Optional[str] = None
    credits: int
    exam_type: ExamType
    academic_year: str
    created_at: datetime

class SgpaResponse(BaseModel):
    semester: int
    sgpa: Optional[Decimal] = None

class TermSummary(BaseModel):
    semester: int
    sgpa: Optional[Decimal] = None
    subjects: int

class CgpaResponse(BaseModel):
    cgpa: Optional[Decimal] = None
    semesters: List[TermSummary] = []


# ============================================================
# PLACEMENT SCHEMAS
# ============================================================

class PlacementCreate(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    package: Optional[str] = None
    eligible_branches: List[str] = Field(..., min_length=1)
    cgpa_criteria: Optional[float] = Field(None, ge=0, le=10)
    description: str
    application_deadline: Optional[datetime] = None
    drive_date: Optional[datetime] = None
    status: PlacementStatus = PlacementStatus.upcoming
    requirements: Optional[List[str]] = None
    contact_info: Optional[str] = None

    @field_validator("eligible_branches")
    @classmethod
    def dedupe_branches(cls, v: List[str]) -> List[str]:
        branches = []
        for b in v:
            b = b.strip()
            if b and b not in branches:
                branches.append(b)
        if not branches:
            raise ValueError("At least one eligible branch is required")
        return branches

class PlacementStatusUpdate(BaseModel):
    status: PlacementStatus

class PlacementResponse(BaseModel):
    placement_id: int
    company_name: str
    role: str
    package: Optional[str] = None
    eligible_branches: List[str]
    cgpa_criteria: Optional[float] = None
    description: str
    application_deadline: Optional[datetime] = None
    drive_date: Optional[datetime] = None
    status: PlacementStatus
    requirements: Optional[List[str]] = None
    contact_info: Optional[str] = None
    created_at: datetime


# ============================================================
# STUDY MATERIAL SCHEMAS
# ============================================================

class UploadTargetResponse(BaseModel):
    upload_token: str
    upload_url: str

class StoredFileResponse(BaseModel):
    storage_id: str
    filename: str
    size_bytes: int

class MaterialCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    subject: str = Field(..., min_length=1, max_length=200)
    branch: str = Field(..., min_length=1, max_length=100)
    semester: int = Field(..., ge=1, le=8)
    type: MaterialType
    file_id: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None

class MaterialResponse(BaseModel):
    material_id: int
    title: str
    subject: str
    branch: str
    semester: int
    type: MaterialType
    file_id: Optional[str] = None
    file_url: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    uploaded_by: int
    download_count: int = 0
    created_at: datetime


# ============================================================
# CHAT SCHEMAS
# ============================================================

class ChatSessionCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)

class ChatSessionResponse(BaseModel):
    session_id: int
    user_id: int
    title: str
    last_message: Optional[str] = None
    created_at: datetime

class ChatMessageCreate(BaseModel):
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v.strip()

class ChatMessageResponse(BaseModel):
    message_id: int
    session_id: int
    user_id: int
    content: str
    role: MessageRole
    timestamp: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
