"""
File Upload Utility - store uploaded resume files.

Backends:
- Local disk under <upload_dir>/resumes/YYYY/MM/<hr_id>/
- Cloudinary, when CLOUDINARY_CLOUD_NAME / _API_KEY / _API_SECRET are all set

Supported formats: PDF, DOC, DOCX, JPG, JPEG, PNG
Max file size: 10MB (MAX_UPLOAD_MB)
"""

import logging
import os
import random
import re
import time
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

import cloudinary
import cloudinary.uploader
from starlette.datastructures import UploadFile

from app.core.config import get_settings
from app.core.errors import FileTooLargeError, InvalidUploadError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {'.pdf', '.doc', '.docx', '.jpg', '.jpeg', '.png'}
RAW_EXTENSIONS = {'.pdf', '.doc', '.docx'}
RESUME_FIELD_NAMES = {'resume', 'resumes'}


@dataclass(frozen=True)
class StoredFile:
    """Where an upload ended up. `url` is set only for remote storage."""
    path: str
    url: Optional[str] = None


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def sanitize_stem(filename: str) -> str:
    """File name without extension, reduced to [A-Za-z0-9_] and 50 chars."""
    stem = os.path.splitext(os.path.basename(filename))[0]
    return re.sub(r'[^a-zA-Z0-9]', '_', stem)[:50]


def build_storage_name(filename: str, job_id: Optional[int] = None) -> str:
    """[job-<id>_]<millis>_<random>_<stem><ext>"""
    prefix = f"job-{job_id}_" if job_id else ""
    millis = int(time.time() * 1000)
    suffix = random.randint(0, 999999)
    return f"{prefix}{millis}_{suffix}_{sanitize_stem(filename)}{get_file_extension(filename)}"


def select_resume_files(items: Sequence[Tuple[str, object]]) -> List[UploadFile]:
    """
    Pick the uploaded files sent under 'resume' or 'resumes'.

    Args:
        items: form (field name, value) pairs, e.g. `form.multi_items()`

    Raises:
        InvalidUploadError: files were sent but none under an accepted name,
            or no files were sent at all
    """
    uploads = [(name, value) for name, value in items if isinstance(value, UploadFile)]
    files = [value for name, value in uploads if name in RESUME_FIELD_NAMES]

    if not files and uploads:
        received = [name for name, _ in uploads]
        raise InvalidUploadError(
            f"Invalid field name. Expected 'resume' or 'resumes', but got: {', '.join(received)}",
            {"receivedFields": received},
        )
    if not files:
        raise InvalidUploadError("No files uploaded")
    return files


def validate_resume_file(upload: UploadFile) -> None:
    """Reject unsupported types before anything is stored."""
    if not upload.filename:
        raise InvalidUploadError("No filename provided")

    ext = get_file_extension(upload.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise InvalidUploadError("Only PDF, DOC, DOCX, JPEG, JPG, PNG files are allowed!")


async def read_upload(upload: UploadFile, max_bytes: int) -> bytes:
    content = await upload.read()
    if len(content) > max_bytes:
        raise FileTooLargeError(f"File too large. Maximum size: {max_bytes // (1024 * 1024)}MB")
    return content


# ============================================================
# LOCAL DISK
# ============================================================

class LocalResumeStorage:
    """Stores resumes on the server's disk; served back via /uploads."""

    def __init__(self, root: str):
        self.root = root

    def save(self, filename: str, content: bytes, hr_id: int, job_id: Optional[int] = None) -> StoredFile:
        now = datetime.now()
        folder = os.path.join(self.root, "resumes", str(now.year), f"{now.month:02d}", str(hr_id))
        os.makedirs(folder, exist_ok=True)

        path = os.path.join(folder, build_storage_name(filename, job_id))
        with open(path, "wb") as f:
            f.write(content)
        return StoredFile(path=path)


def local_public_path(path: str, root: str) -> str:
    """URL path of a locally stored file under the /uploads static mount."""
    relative = os.path.relpath(path, root).replace(os.sep, "/")
    return f"/uploads/{relative}"


# ============================================================
# CLOUDINARY
# ============================================================

class CloudinaryResumeStorage:
    """Stores resumes on Cloudinary; the secure URL is kept as file_path."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        cloudinary.config(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret, secure=True)

    @staticmethod
    def resource_type_for(filename: str) -> str:
        return "raw" if get_file_extension(filename) in RAW_EXTENSIONS else "image"

    def save(self, filename: str, content: bytes, hr_id: int, job_id: Optional[int] = None) -> StoredFile:
        now = datetime.now()
        job_folder = f"job-{job_id}" if job_id else "general"
        folder = f"resumes/{now.year}/{now.month:02d}/{hr_id}/{job_folder}"
        public_id = os.path.splitext(build_storage_name(filename))[0]

        result = cloudinary.uploader.upload(
            content,
            folder=folder,
            public_id=public_id,
            resource_type=self.resource_type_for(filename),
        )
        url = result["secure_url"]
        return StoredFile(path=url, url=url)

    @staticmethod
    def public_id_from_url(url: str) -> Optional[str]:
        """
        https://res.cloudinary.com/<cloud>/<type>/upload/[v123/]<folder>/<id>.<ext>
        -> <folder>/<id>
        """
        if "res.cloudinary.com" not in url:
            return None
        parts = url.split("/")
        if "upload" not in parts:
            return None
        after = "/".join(parts[parts.index("upload") + 1:])
        if not after:
            return None
        after = re.sub(r'^v\d+/', '', after)
        return re.sub(r'\.[^/.]+$', '', after)

    def delete(self, url: str, filename: str) -> None:
        public_id = self.public_id_from_url(url)
        if public_id is None:
            return
        result = cloudinary.uploader.destroy(public_id, resource_type=self.resource_type_for(filename))
        logger.info("Cloudinary deletion of %s: %s", public_id, result.get("result"))


def attachment_url(url: str) -> str:
    """Cloudinary URL that forces a download instead of inline display."""
    return url.replace('/upload/', '/upload/fl_attachment/')


def is_remote_path(path: str) -> bool:
    return path.startswith(("http://", "https://"))


def delete_stored_file(storage, file_path: str, filename: str) -> None:
    """Remove a stored resume from wherever it was saved."""
    if is_remote_path(file_path):
        if isinstance(storage, CloudinaryResumeStorage):
            storage.delete(file_path, filename)
        else:
            logger.warning("Remote file %s left in place: Cloudinary is not configured", file_path)
    elif os.path.exists(file_path):
        os.remove(file_path)
        logger.info("Deleted local file %s", file_path)


def get_resume_storage():
    """FastAPI dependency - storage backend chosen from configuration."""
    settings = get_settings()
    if settings.cloudinary_configured:
        return CloudinaryResumeStorage(
            settings.cloudinary_cloud_name, settings.cloudinary_api_key, settings.cloudinary_api_secret
        )
    return LocalResumeStorage(settings.upload_dir)
