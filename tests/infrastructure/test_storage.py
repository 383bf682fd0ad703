"""Tests for the image store."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import patch

import pytest

from shop.domain.exceptions import EmptyFileError, StorageFailureError
from shop.infrastructure.storage import ImageStore, extension_from_hint


@pytest.fixture
def store(tmp_path: Path) -> ImageStore:
    """Create store rooted in a not-yet-existing directory."""
    return ImageStore(tmp_path / "uploads")


class TestExtensionFromHint:
    """Tests for extension extraction."""

    @pytest.mark.parametrize(
        ("hint", "expected"),
        [
            ("photo.jpg", ".jpg"),
            ("archive.tar.gz", ".gz"),
            ("README", ""),
            ("", ""),
            (None, ""),
            ("../../etc/passwd", ""),
            ("dir.d/image", ""),
            ("..\\evil\\shot.PNG", ".PNG"),
            ("a.jp\x00g", ""),
            ("photo.jpg\n", ""),
            ("photo.j p g", ""),
            ("photo.", ""),
        ],
    )
    def test_extension(self, hint: str | None, expected: str) -> None:
        """Only the last suffix of the final path component is kept."""
        assert extension_from_hint(hint) == expected


class TestImageStore:
    """Tests for ImageStore.store."""

    def test_store_writes_file(self, store: ImageStore) -> None:
        """Stored bytes are readable under the generated name."""
        stored = store.store("photo.png", b"\x89PNG data")

        assert stored.filename.endswith(".png")
        assert stored.url == f"/uploads/{stored.filename}"
        assert (store.root_dir / stored.filename).read_bytes() == b"\x89PNG data"

    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        """Nested upload directories are created on demand."""
        store = ImageStore(tmp_path / "a" / "b" / "uploads")
        stored = store.store("x.jpg", b"data")
        assert store.path_for(stored.filename).exists()

    def test_directory_recreated_between_calls(self, store: ImageStore) -> None:
        """The directory check runs on every call."""
        first = store.store("a.jpg", b"one")
        (store.root_dir / first.filename).unlink()
        store.root_dir.rmdir()

        second = store.store("a.jpg", b"two")
        assert (store.root_dir / second.filename).read_bytes() == b"two"

    def test_empty_payload_rejected(self, store: ImageStore) -> None:
        """Empty uploads fail and write nothing."""
        with pytest.raises(EmptyFileError):
            store.store("empty.png", b"")
        assert not store.root_dir.exists() or not any(store.root_dir.iterdir())

    def test_same_hint_twice_gives_distinct_files(self, store: ImageStore) -> None:
        """Repeated filenames never collide."""
        first = store.store("photo.jpg", b"first")
        second = store.store("photo.jpg", b"second")

        assert first.filename != second.filename
        assert (store.root_dir / first.filename).read_bytes() == b"first"
        assert (store.root_dir / second.filename).read_bytes() == b"second"

    def test_original_name_discarded(self, store: ImageStore) -> None:
        """Path components in the hint never reach the filesystem."""
        stored = store.store("../../outside.jpg", b"data")
        assert "outside" not in stored.filename
        assert "/" not in stored.filename
        assert (store.root_dir / stored.filename).exists()

    def test_control_characters_in_hint(self, store: ImageStore) -> None:
        """A hint with a NUL byte is stored without an extension."""
        stored = store.store("a.jp\x00g", b"data")
        assert "." not in stored.filename
        assert store.path_for(stored.filename).read_bytes() == b"data"

    def test_discard(self, store: ImageStore) -> None:
        stored = store.store("a.png", b"data")

        store.discard(stored.filename)
        store.discard(stored.filename)

        assert list(store.root_dir.iterdir()) == []

    def test_no_temp_files_left(self, store: ImageStore) -> None:
        """Only the final file remains after a write."""
        stored = store.store("a.gif", b"GIF89a")
        assert [p.name for p in store.root_dir.iterdir()] == [stored.filename]

    def test_concurrent_uploads(self, store: ImageStore) -> None:
        """Simultaneous uploads all succeed with distinct files."""
        payloads = [f"image-{i}".encode() for i in range(20)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda data: store.store("same.jpg", data), payloads))

        assert len({r.filename for r in results}) == len(payloads)
        for result, data in zip(results, payloads):
            assert (store.root_dir / result.filename).read_bytes() == data

    def test_custom_url_prefix(self, tmp_path: Path) -> None:
        """The public prefix is normalized."""
        store = ImageStore(tmp_path, url_prefix="images/")
        stored = store.store("a.jpg", b"data")
        assert stored.url == f"/images/{stored.filename}"

    def test_io_error_becomes_storage_failure(self, store: ImageStore) -> None:
        """OSErrors are wrapped with the cause attached."""
        cause = OSError("disk full")
        with patch("shop.infrastructure.storage.os.replace", side_effect=cause):
            with pytest.raises(StorageFailureError) as exc_info:
                store.store("a.jpg", b"data")

        assert exc_info.value.__cause__ is cause
        assert list(store.root_dir.iterdir()) == []

    def test_directory_creation_failure(self, tmp_path: Path) -> None:
        """A file in place of the directory fails the single call."""
        blocker = tmp_path / "uploads"
        blocker.write_text("not a directory")
        store = ImageStore(blocker)

        with pytest.raises(StorageFailureError) as exc_info:
            store.store("a.jpg", b"data")
        assert isinstance(exc_info.value.__cause__, OSError)
