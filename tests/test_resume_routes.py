"""Resume upload, listing, download and deletion (local storage)."""

import os

from app.core.config import get_settings
from app.utils.file_upload import LocalResumeStorage, StoredFile, get_resume_storage

PDF = b"%PDF-1.4 fake resume"


def _upload(client, account, files, data=None):
    return client.post("/api/resumes/upload", headers=account.headers, files=files, data=data or {})


def test_upload_several_resumes(client, hr, make_job):
    job = make_job(hr)
    response = _upload(client, hr, [
        ("resumes", ("Jane Doe CV.pdf", PDF, "application/pdf")),
        ("resumes", ("john.docx", b"docx bytes", "application/octet-stream")),
    ], data={"jobId": str(job.id)})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["failed"] == []
    assert [r["filename"] for r in data["uploaded"]] == ["Jane Doe CV.pdf", "john.docx"]

    first = data["uploaded"][0]
    assert first["jobId"] == job.id
    assert first["status"] == "uploaded"
    assert first["cloudinaryUrl"] is None
    assert first["downloadUrl"].endswith(f"/api/resumes/{first['id']}/download")
    path = first["filePath"]
    assert path.startswith(os.path.join(get_settings().upload_dir, "resumes"))
    assert os.path.basename(path).startswith(f"job-{job.id}_")
    assert os.path.basename(path).endswith("_Jane_Doe_CV.pdf")
    with open(path, "rb") as f:
        assert f.read() == PDF


def test_upload_under_single_field_name(client, hr):
    response = _upload(client, hr, [("resume", ("cv.png", b"png", "image/png"))])

    assert response.status_code == 200
    assert response.json()["data"]["uploaded"][0]["jobId"] is None


def test_upload_wrong_field_name(client, hr):
    response = _upload(client, hr, [("file", ("cv.pdf", PDF, "application/pdf"))])

    assert response.status_code == 400
    body = response.json()
    assert body["receivedFields"] == ["file"]
    assert "Expected 'resume' or 'resumes'" in body["message"]


def test_upload_without_files(client, hr):
    response = _upload(client, hr, None, data={"jobId": "1"})

    assert response.status_code == 400
    assert response.json()["message"] == "No files uploaded"


def test_upload_rejects_unsupported_type(client, hr):
    response = _upload(client, hr, [("resumes", ("run.exe", b"MZ", "application/octet-stream"))])

    assert response.status_code == 400
    assert response.json()["message"] == "Only PDF, DOC, DOCX, JPEG, JPG, PNG files are allowed!"
    assert client.get("/api/resumes", headers=hr.headers).json()["count"] == 0


def test_upload_rejects_bad_job_id(client, hr):
    response = _upload(client, hr, [("resume", ("cv.pdf", PDF, "application/pdf"))], data={"jobId": "abc"})

    assert response.status_code == 400


def test_partial_failure_reports_207(client, hr, tmp_path):
    local = LocalResumeStorage(str(tmp_path))

    class FlakyStorage:
        def save(self, filename, content, hr_id, job_id=None) -> StoredFile:
            if filename == "broken.pdf":
                raise OSError("disk full")
            return local.save(filename, content, hr_id, job_id)

    client.app.dependency_overrides[get_resume_storage] = lambda: FlakyStorage()
    response = _upload(client, hr, [
        ("resumes", ("good.pdf", PDF, "application/pdf")),
        ("resumes", ("broken.pdf", PDF, "application/pdf")),
    ])

    assert response.status_code == 207
    data = response.json()["data"]
    assert [r["filename"] for r in data["uploaded"]] == ["good.pdf"]
    assert data["failed"] == [{"filename": "broken.pdf", "error": "disk full"}]


def test_job_seeker_cannot_upload(client, seeker):
    response = _upload(client, seeker, [("resume", ("cv.pdf", PDF, "application/pdf"))])
    assert response.status_code == 403


def test_list_download_and_url(client, hr, make_job):
    job = make_job(hr, "Designer")
    _upload(client, hr, [("resume", ("cv.pdf", PDF, "application/pdf"))], data={"jobId": str(job.id)})

    listed = client.get("/api/resumes", headers=hr.headers).json()
    assert listed["count"] == 1
    resume = listed["data"][0]
    assert resume["jobTitle"] == "Designer"

    download = client.get(f"/api/resumes/{resume['id']}/download", headers=hr.headers)
    assert download.status_code == 200
    assert download.content == PDF
    assert "cv.pdf" in download.headers["content-disposition"]

    url = client.get(f"/api/resumes/{resume['id']}/url", headers=hr.headers).json()["data"]
    assert "/uploads/resumes/" in url["url"]
    assert url["downloadUrl"].endswith(f"/api/resumes/{resume['id']}/download")


def test_download_missing_file(client, hr):
    uploaded = _upload(client, hr, [("resume", ("cv.pdf", PDF, "application/pdf"))]).json()["data"]["uploaded"][0]
    os.remove(uploaded["filePath"])

    response = client.get(f"/api/resumes/{uploaded['id']}/download", headers=hr.headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Resume file not found on server"


def test_other_hr_cannot_touch_resume(client, hr, other_hr):
    uploaded = _upload(client, hr, [("resume", ("cv.pdf", PDF, "application/pdf"))]).json()["data"]["uploaded"][0]

    assert client.get(f"/api/resumes/{uploaded['id']}/download", headers=other_hr.headers).status_code == 403
    assert client.get(f"/api/resumes/{uploaded['id']}/url", headers=other_hr.headers).status_code == 403
    assert client.delete(f"/api/resumes/{uploaded['id']}", headers=other_hr.headers).status_code == 403
    assert client.get("/api/resumes", headers=other_hr.headers).json()["count"] == 0


def test_delete_resume_removes_file(client, hr):
    uploaded = _upload(client, hr, [("resume", ("cv.pdf", PDF, "application/pdf"))]).json()["data"]["uploaded"][0]

    response = client.delete(f"/api/resumes/{uploaded['id']}", headers=hr.headers)

    assert response.status_code == 200
    assert response.json()["data"] == {"id": uploaded["id"], "filename": "cv.pdf"}
    assert not os.path.exists(uploaded["filePath"])
    assert client.get("/api/resumes", headers=hr.headers).json()["count"] == 0
    assert client.delete(f"/api/resumes/{uploaded['id']}", headers=hr.headers).status_code == 404


def test_oversized_file_rejects_whole_batch(client, hr, tmp_path, monkeypatch):
    monkeypatch.setattr(get_settings(), "max_upload_mb", 1)
    client.app.dependency_overrides[get_resume_storage] = lambda: LocalResumeStorage(str(tmp_path))

    response = _upload(client, hr, [
        ("resumes", ("small.pdf", PDF, "application/pdf")),
        ("resumes", ("huge.pdf", b"0" * (1024 * 1024 + 10), "application/pdf")),
    ])

    assert response.status_code == 413
    assert response.json() == {
        "success": False,
        "message": "File too large. Maximum size: 1MB",
        "code": "FILE_TOO_LARGE",
    }
    assert client.get("/api/resumes", headers=hr.headers).json()["count"] == 0
    assert list(tmp_path.iterdir()) == []
