import io

import pytest
from starlette.datastructures import Headers, UploadFile

from app.core.errors import UploadError
from app.services.file_storage import FileStorage, display_name, sanitize_filename


def _file(name, content=b"%PDF-1.4", ctype="application/pdf"):
    return UploadFile(
        file=io.BytesIO(content),
        filename=name,
        headers=Headers({"content-type": ctype}),
    )


def test_sanitize_and_display_names():
    assert sanitize_filename("../../etc/pass wd.pdf") == "pass_wd.pdf"
    assert sanitize_filename("") == "document.pdf"
    assert display_name("1712345678901-report.pdf") == "report.pdf"
    assert display_name("report.pdf") == "report.pdf"


def test_save_writes_timestamped_file(settings):
    storage = FileStorage(settings)
    stored = storage.save(_file("Annual Report.pdf"))

    assert stored.endswith("-Annual_Report.pdf")
    assert storage.resolve(stored).read_bytes() == b"%PDF-1.4"
    assert storage.size_of(stored) == 8


def test_octet_stream_pdf_is_accepted(settings):
    stored = FileStorage(settings).save(_file("scan.PDF", ctype="application/octet-stream"))
    assert stored.endswith("scan.PDF")


def test_save_rejects_non_pdf(settings):
    with pytest.raises(UploadError):
        FileStorage(settings).save(_file("photo.png", ctype="image/png"))


def test_save_rejects_oversized_upload(settings):
    small = settings.model_copy(update={"max_upload_mb": 0})
    with pytest.raises(UploadError):
        FileStorage(small).save(_file("big.pdf", content=b"%PDF" + b"x" * 10))


def test_resolve_refuses_paths_outside_root(settings):
    storage = FileStorage(settings)
    assert storage.resolve("../secret.pdf") is None
    assert storage.resolve("..") is None
    assert storage.resolve("/etc/passwd") is None
    assert storage.resolve("ok.pdf") == storage.root / "ok.pdf"
