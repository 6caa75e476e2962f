"""Upload helpers that need no HTTP round trip."""

import os
import re

import pytest

from app.core.errors import InvalidUploadError
from app.utils.file_upload import (
    CloudinaryResumeStorage, LocalResumeStorage, attachment_url, build_storage_name, get_file_extension,
    get_resume_storage, is_remote_path, local_public_path, sanitize_stem, select_resume_files
)


def test_get_file_extension():
    assert get_file_extension("CV.PDF") == ".pdf"
    assert get_file_extension("noext") == ""


def test_sanitize_stem():
    assert sanitize_stem("Jane Doe (2024).pdf") == "Jane_Doe__2024_"
    assert len(sanitize_stem("a" * 80 + ".pdf")) == 50


def test_build_storage_name():
    assert re.fullmatch(r"job-4_\d+_\d+_my_cv\.docx", build_storage_name("my cv.docx", job_id=4))
    assert re.fullmatch(r"\d+_\d+_cv\.pdf", build_storage_name("cv.pdf"))


def test_select_resume_files_needs_files():
    with pytest.raises(InvalidUploadError) as exc:
        select_resume_files([("jobId", "3")])
    assert exc.value.message == "No files uploaded"


def test_local_storage_layout(tmp_path):
    stored = LocalResumeStorage(str(tmp_path)).save("cv.pdf", b"data", hr_id=9)

    parts = os.path.relpath(stored.path, tmp_path).split(os.sep)
    assert parts[0] == "resumes"
    assert parts[3] == "9"
    assert stored.url is None
    assert local_public_path(stored.path, str(tmp_path)).startswith("/uploads/resumes/")


def test_cloudinary_helpers():
    url = "https://res.cloudinary.com/demo/raw/upload/v1712345/resumes/2024/05/3/general/17_42_cv.pdf"

    assert CloudinaryResumeStorage.public_id_from_url(url) == "resumes/2024/05/3/general/17_42_cv"
    assert CloudinaryResumeStorage.public_id_from_url("https://example.com/cv.pdf") is None
    assert CloudinaryResumeStorage.resource_type_for("cv.docx") == "raw"
    assert CloudinaryResumeStorage.resource_type_for("cv.png") == "image"
    assert "/upload/fl_attachment/" in attachment_url(url)
    assert is_remote_path(url)
    assert not is_remote_path("/srv/uploads/cv.pdf")


def test_local_storage_when_cloudinary_unset():
    assert isinstance(get_resume_storage(), LocalResumeStorage)
