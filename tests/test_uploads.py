import io
import logging

import pytest
from starlette.datastructures import Headers, UploadFile

from postboard.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    ServerError,
    TooManyFilesError,
    ValidationError,
)
from postboard.core.uploads import ALLOWED_MIME_TYPES, ImageStorage


def make_upload(content=b"data", filename="photo.png", content_type="image/png"):
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def storage(tmp_path):
    return ImageStorage(str(tmp_path / "uploads"), max_file_size=1024, max_files=5)


class TestValidation:
    @pytest.mark.parametrize(
        "content_type, extension",
        [
            ("image/jpeg", ".jpg"),
            ("image/jpg", ".jpg"),
            ("image/png", ".png"),
            ("image/gif", ".gif"),
            ("image/webp", ".webp"),
        ],
    )
    def test_allowed_types(self, storage, content_type, extension):
        assert storage.validate_content_type(content_type) == extension

    @pytest.mark.parametrize("content_type", ["application/pdf", "image/svg+xml", "text/plain", "", None])
    def test_rejected_types(self, storage, content_type):
        with pytest.raises(InvalidFileTypeError):
            storage.validate_content_type(content_type)

    def test_upload_errors_are_validation_errors(self):
        assert issubclass(InvalidFileTypeError, ValidationError)
        assert issubclass(FileTooLargeError, ValidationError)
        assert issubclass(TooManyFilesError, ValidationError)
        assert FileTooLargeError(5 * 1024 * 1024).status_code == 400

    def test_size_at_limit_passes(self, storage):
        storage.validate_size(1024)

    def test_size_over_limit_rejected(self, storage):
        with pytest.raises(FileTooLargeError):
            storage.validate_size(1025)

    def test_default_limits(self, tmp_path):
        default = ImageStorage(str(tmp_path / "d"))
        assert default.max_file_size == 5 * 1024 * 1024
        assert default.max_files == 5
        assert set(ALLOWED_MIME_TYPES) == {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}


class TestReadUploads:
    @pytest.mark.asyncio
    async def test_preserves_submission_order(self, storage):
        uploads = await storage.read_uploads([
            make_upload(b"one", "a.gif", "image/gif"),
            make_upload(b"two", "b.webp", "image/webp"),
        ])
        assert uploads == [(b"one", ".gif"), (b"two", ".webp")]

    @pytest.mark.asyncio
    async def test_sixth_file_rejected(self, storage):
        with pytest.raises(TooManyFilesError):
            await storage.read_uploads([make_upload() for _ in range(6)])

    @pytest.mark.asyncio
    async def test_oversized_file_rejected(self, storage):
        with pytest.raises(FileTooLargeError):
            await storage.read_uploads([make_upload(b"x" * 1025)])

    @pytest.mark.asyncio
    async def test_one_bad_file_rejects_whole_batch(self, storage):
        with pytest.raises(InvalidFileTypeError):
            await storage.read_uploads([make_upload(), make_upload(filename="a.pdf", content_type="application/pdf")])
        assert list(storage.root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_empty_parts_skipped(self, storage):
        uploads = await storage.read_uploads([make_upload(b"", filename="", content_type="application/octet-stream")])
        assert uploads == []


class TestSaveAndDelete:
    @pytest.mark.asyncio
    async def test_save_writes_unique_files(self, storage):
        names = await storage.save([(b"a", ".png"), (b"b", ".png"), (b"c", ".jpg")])
        assert len(set(names)) == 3
        assert names[0].endswith(".png") and names[2].endswith(".jpg")
        assert [storage.path_for(n).read_bytes() for n in names] == [b"a", b"b", b"c"]

    @pytest.mark.asyncio
    async def test_save_failure_cleans_up_and_raises(self, storage, monkeypatch):
        calls = []

        def fake_filename(extension):
            calls.append(extension)
            # second file goes into a directory that does not exist
            return f"ok{extension}" if len(calls) == 1 else f"missing/dir/bad{extension}"

        monkeypatch.setattr(storage, "generate_filename", fake_filename)
        with pytest.raises(ServerError):
            await storage.save([(b"a", ".png"), (b"b", ".png")])
        assert not storage.path_for("ok.png").exists()

    def test_delete_existing_file(self, storage):
        storage.path_for("x.png").write_bytes(b"x")
        assert storage.delete("x.png") is True
        assert not storage.path_for("x.png").exists()

    def test_delete_missing_file_is_logged_not_raised(self, storage, caplog):
        with caplog.at_level(logging.WARNING, logger="postboard.core.uploads"):
            assert storage.delete("gone.png") is False
        assert "gone.png" in caplog.text

    def test_delete_refuses_paths_outside_upload_dir(self, storage, tmp_path):
        outside = tmp_path / "keep.txt"
        outside.write_text("keep")
        assert storage.delete("../keep.txt") is False
        assert outside.exists()

    def test_generated_names_keep_extension(self, storage):
        name = storage.generate_filename(".webp")
        stamp, rest = name.split("-", 1)
        assert stamp.isdigit()
        assert rest.endswith(".webp")
