"""Local filesystem storage for uploaded product images.

Provides:
- Collision-free generated filenames (original names are discarded)
- Atomic writes via temp file + rename
- Public URL construction for stored images
"""

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath, PureWindowsPath
from uuid import uuid4

import structlog

from shop.domain.exceptions import EmptyFileError, StorageFailureError

logger = structlog.get_logger()

_EXTENSION_PATTERN = re.compile(r"\.[A-Za-z0-9]{1,16}")


@dataclass(frozen=True)
class StoredImage:
    """Reference to an image written by ``ImageStore``.

    Attributes:
        url: Public path, e.g. "/uploads/<uuid>.png".
        filename: Generated filename within the uploads directory.
    """

    url: str
    filename: str


def extension_from_hint(filename_hint: str | None) -> str:
    """Get the extension of a client-supplied filename.

    Only the final path component is considered, so directory parts of
    the hint can never leak into the stored name. Suffixes that are not
    short and alphanumeric are dropped.

    Args:
        filename_hint: Original filename, possibly None.

    Returns:
        The last "."-delimited suffix including the dot, or "".
    """
    if not filename_hint:
        return ""
    # Accept both separators regardless of the host platform
    basename = PureWindowsPath(PurePosixPath(filename_hint).name).name
    if "." not in basename:
        return ""
    extension = basename[basename.rindex(".") :]
    return extension if _EXTENSION_PATTERN.fullmatch(extension) else ""


class ImageStore:
    """Writes uploaded images under a root directory.

    Example usage:
        store = ImageStore(Path("uploads"))
        stored = store.store("photo.jpg", data)
        stored.url  # "/uploads/3f0c...e1.jpg"
    """

    def __init__(self, root_dir: str | Path, url_prefix: str = "/uploads") -> None:
        """Initialize image store.

        Args:
            root_dir: Directory that receives uploaded files.
            url_prefix: Public path prefix under which files are served.
        """
        self.root_dir = Path(root_dir)
        self.url_prefix = "/" + url_prefix.strip("/")

    def store(self, filename_hint: str | None, data: bytes) -> StoredImage:
        """Store an uploaded image under a freshly generated name.

        Args:
            filename_hint: Client-supplied filename, used only for its extension.
            data: Raw file content.

        Returns:
            StoredImage with the public URL and generated filename.

        Raises:
            EmptyFileError: If ``data`` is empty.
            StorageFailureError: If the file cannot be written.
        """
        if not data:
            raise EmptyFileError(filename_hint)

        filename = f"{uuid4()}{extension_from_hint(filename_hint)}"
        target = self.root_dir / filename

        try:
            self.root_dir.mkdir(parents=True, exist_ok=True)
            self._write_atomic(target, data)
        except OSError as e:
            logger.error(
                "Failed to store image",
                filename=filename,
                root_dir=str(self.root_dir),
                error=str(e),
            )
            raise StorageFailureError(str(e)) from e

        logger.info(
            "Image stored",
            filename=filename,
            original_filename=filename_hint,
            size_bytes=len(data),
        )

        return StoredImage(url=f"{self.url_prefix}/{filename}", filename=filename)

    def path_for(self, filename: str) -> Path:
        """Get the on-disk path of a stored filename."""
        return self.root_dir / PurePosixPath(filename).name

    def discard(self, filename: str) -> None:
        """Remove a stored image that ended up unreferenced.

        Missing files are ignored.
        """
        self.path_for(filename).unlink(missing_ok=True)
        logger.info("Image discarded", filename=filename)

    def _write_atomic(self, target: Path, data: bytes) -> None:
        """Write to a temp file in the target directory, then rename into place."""
        fd, tmp_name = tempfile.mkstemp(dir=self.root_dir, prefix=".upload-", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
