"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Response envelopes follow {"success", "message", "data", "count"}; keys the
frontend reads in camelCase are declared with serialization aliases.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List, Any
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    hr = "HR"
    user = "USER"


class JobStatus(str, Enum):
    active = "active"
    expired = "expired"


class ApplicationStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class ResumeStatus(str, Enum):
    uploaded = "uploaded"
    failed = "failed"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.user

    @field_validator("role", mode="before")
    @classmethod
    def upper_case_role(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class AuthUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str

class AuthData(BaseModel):
    token: str
    user: AuthUser

class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    data: AuthData

class LoginResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    data: AuthData


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    salary: str = Field(..., min_length=1, max_length=50)
    location: str = Field(..., min_length=1, max_length=100)

    @field_validator("salary", mode="before")
    @classmethod
    def salary_as_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    salary: Optional[str] = None
    location: Optional[str] = None
    expiry_status: str
    posted_by: int
    posted_by_name: Optional[str] = None
    application_count: Optional[int] = None
    created_at: Optional[datetime] = None
    has_applied: bool = Field(False, serialization_alias="hasApplied")
    application_status: Optional[str] = Field(None, serialization_alias="applicationStatus")

class JobEnvelope(BaseModel):
    success: bool = True
    message: str
    data: JobResponse

class JobListResponse(BaseModel):
    success: bool = True
    message: str
    data: List[JobResponse]
    count: int

class PublicJobListResponse(JobListResponse):
    active_count: int = Field(..., serialization_alias="activeCount")
    expired_count: int = Field(..., serialization_alias="expiredCount")


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    job_id: int
    user_id: int
    status: str
    created_at: Optional[datetime] = None
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    job_location: Optional[str] = None
    job_salary: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None

class ApplyResponse(BaseModel):
    success: bool = True
    message: str
    data: ApplicationResponse
    has_applied: bool = Field(True, serialization_alias="hasApplied")

class ApplicationListResponse(BaseModel):
    success: bool = True
    message: str
    data: List[ApplicationResponse]
    count: int


# ============================================================
# RESUME SCHEMAS
# ============================================================

class ResumeItem(BaseModel):
    id: int
    filename: str
    job_id: Optional[int] = Field(None, serialization_alias="jobId")
    job_title: Optional[str] = Field(None, serialization_alias="jobTitle")
    file_path: str = Field(..., serialization_alias="filePath")
    file_url: Optional[str] = Field(None, serialization_alias="fileUrl")
    cloudinary_url: Optional[str] = Field(None, serialization_alias="cloudinaryUrl")
    status: str
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    download_url: str = Field(..., serialization_alias="downloadUrl")
    view_url: str = Field(..., serialization_alias="viewUrl")

class FailedUpload(BaseModel):
    filename: str
    error: str

class ResumeUploadData(BaseModel):
    uploaded: List[ResumeItem] = []
    failed: List[FailedUpload] = []

class ResumeUploadResponse(BaseModel):
    success: bool = True
    message: str
    data: ResumeUploadData

class ResumeListResponse(BaseModel):
    success: bool = True
    message: str
    data: List[ResumeItem]
    count: int

class ResumeUrlData(BaseModel):
    id: int
    filename: str
    url: str
    download_url: str = Field(..., serialization_alias="downloadUrl")
    api_download_url: Optional[str] = Field(None, serialization_alias="apiDownloadUrl")

class ResumeUrlResponse(BaseModel):
    success: bool = True
    data: ResumeUrlData

class DeletedResume(BaseModel):
    id: int
    filename: str

class ResumeDeleteResponse(BaseModel):
    success: bool = True
    message: str
    data: DeletedResume


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class DashboardAnalytics(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_jobs: int = Field(..., serialization_alias="totalJobs")
    total_active_jobs: int = Field(..., serialization_alias="totalActiveJobs")
    total_expired: int = Field(..., serialization_alias="totalExpired")
    total_applications: int = Field(..., serialization_alias="totalApplications")
    total_resumes_uploaded: int = Field(..., serialization_alias="totalResumesUploaded")
    uploaded_resumes: int = Field(..., serialization_alias="uploadedResumes")
    failed_resumes: int = Field(..., serialization_alias="failedResumes")

class DashboardResponse(BaseModel):
    success: bool = True
    message: str
    data: DashboardAnalytics


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    code: str
