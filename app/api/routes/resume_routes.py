"""
Resume Routes (HR only)

POST /resumes/upload - Upload one or more resumes (field 'resume' or 'resumes', optional jobId)
GET /resumes - List the caller's resumes
DELETE /resumes/{resume_id} - Delete a resume and its stored file
GET /resumes/{resume_id}/url - URLs for viewing/downloading
GET /resumes/{resume_id}/download - Download the file
"""

import logging
import os
from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse
from typing import Optional

from app.core.auth import Principal, get_current_hr
from app.core.config import get_settings
from app.core.errors import AuthorizationError, InvalidUploadError, NotFoundError
from app.models.records import ResumeRecord
from app.services import resume_service
from app.utils.file_upload import (
    attachment_url, delete_stored_file, get_resume_storage, is_remote_path, local_public_path,
    read_upload, select_resume_files, validate_resume_file
)
from app.schemas.schemas import (
    DeletedResume, FailedUpload, ResumeDeleteResponse, ResumeItem, ResumeListResponse,
    ResumeUploadData, ResumeUploadResponse, ResumeUrlData, ResumeUrlResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["Resumes"])


def _base_url(request: Request) -> str:
    return str(request.base_url).rstrip("/")


def _to_item(resume: ResumeRecord, base_url: str, file_url: Optional[str] = None) -> ResumeItem:
    remote = is_remote_path(resume.file_path)
    return ResumeItem(
        id=resume.id,
        filename=resume.filename,
        job_id=resume.job_id,
        job_title=resume.job_title,
        file_path=resume.file_path,
        file_url=file_url,
        cloudinary_url=resume.file_path if remote else None,
        status=resume.status,
        created_at=resume.created_at,
        download_url=f"{base_url}/api/resumes/{resume.id}/download",
        view_url=f"{base_url}/api/resumes/{resume.id}/url",
    )


def _owned_resume(resume_id: int, hr: Principal, denied: str) -> ResumeRecord:
    resume = resume_service.find_resume_by_id(resume_id)
    if resume is None:
        raise NotFoundError("Resume not found")
    if resume.hr_id != hr.id:
        raise AuthorizationError(denied)
    return resume


def _parse_job_id(value) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidUploadError("jobId must be an integer")


@router.post("/upload", response_model=ResumeUploadResponse)
async def upload_resumes(
    request: Request,
    hr: Principal = Depends(get_current_hr),
    storage=Depends(get_resume_storage),
):
    """
    Upload resumes. Each file is stored and recorded independently:
    files that fail are listed under data.failed and the status becomes 207.
    """
    form = await request.form()
    job_id = _parse_job_id(form.get("jobId"))
    files = select_resume_files(form.multi_items())
    for upload in files:
        validate_resume_file(upload)

    # Every file is read and size-checked before anything is stored
    max_bytes = get_settings().max_upload_mb * 1024 * 1024
    contents = [await read_upload(upload, max_bytes) for upload in files]

    base_url = _base_url(request)
    uploaded, failed = [], []

    for upload, content in zip(files, contents):
        try:
            stored = storage.save(upload.filename, content, hr_id=hr.id, job_id=job_id)
            resume = resume_service.create_resume(hr.id, upload.filename, stored.path, job_id=job_id)
        except Exception as e:
            logger.exception("Failed to store resume %s", upload.filename)
            failed.append(FailedUpload(filename=upload.filename, error=str(e)))
            continue
        uploaded.append(_to_item(resume, base_url, file_url=stored.url))

    logger.info("HR %s uploaded %d resume(s), %d failed", hr.id, len(uploaded), len(failed))
    body = ResumeUploadResponse(
        message=f"Processed {len(files)} file(s)",
        data=ResumeUploadData(uploaded=uploaded, failed=failed),
    )
    return JSONResponse(
        status_code=207 if failed else 200,
        content=body.model_dump(mode="json", by_alias=True),
    )


@router.get("", response_model=ResumeListResponse)
async def get_resumes(request: Request, hr: Principal = Depends(get_current_hr)):
    base_url = _base_url(request)
    items = [_to_item(r, base_url) for r in resume_service.find_resumes_by_hr(hr.id)]
    return ResumeListResponse(message="Resumes retrieved successfully", data=items, count=len(items))


@router.delete("/{resume_id}", response_model=ResumeDeleteResponse)
async def delete_resume(resume_id: int, hr: Principal = Depends(get_current_hr),
                        storage=Depends(get_resume_storage)):
    """Delete the stored file (best effort) and then the database row."""
    resume = _owned_resume(resume_id, hr, "Access denied. You can only delete your own resumes.")

    try:
        delete_stored_file(storage, resume.file_path, resume.filename)
    except Exception:
        logger.exception("Error deleting stored file for resume %s (continuing with DB delete)", resume_id)

    if not resume_service.delete_resume_for_hr(hr.id, resume_id):
        raise NotFoundError("Resume not found or access denied")

    return ResumeDeleteResponse(
        message="Resume deleted successfully",
        data=DeletedResume(id=resume.id, filename=resume.filename),
    )


@router.get("/{resume_id}/url", response_model=ResumeUrlResponse)
async def get_resume_url(resume_id: int, request: Request, hr: Principal = Depends(get_current_hr)):
    resume = _owned_resume(resume_id, hr, "Access denied")
    base_url = _base_url(request)
    api_download_url = f"{base_url}/api/resumes/{resume_id}/download"

    if is_remote_path(resume.file_path):
        data = ResumeUrlData(
            id=resume.id, filename=resume.filename, url=resume.file_path,
            download_url=attachment_url(resume.file_path), api_download_url=api_download_url,
        )
    else:
        path = local_public_path(resume.file_path, get_settings().upload_dir)
        data = ResumeUrlData(
            id=resume.id, filename=resume.filename, url=f"{base_url}{path}", download_url=api_download_url,
        )
    return ResumeUrlResponse(data=data)


@router.get("/{resume_id}/download")
async def download_resume(resume_id: int, hr: Principal = Depends(get_current_hr)):
    resume = _owned_resume(resume_id, hr, "Access denied. You can only download your own resumes.")

    if is_remote_path(resume.file_path):
        return RedirectResponse(attachment_url(resume.file_path))

    if not os.path.exists(resume.file_path):
        raise NotFoundError("Resume file not found on server")

    return FileResponse(resume.file_path, media_type="application/octet-stream", filename=resume.filename)
