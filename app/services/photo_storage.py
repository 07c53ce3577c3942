"""
Photo storage for report attachments.

Photos are opaque references on the report: a URL path for local storage,
a public URL for Firebase Storage. The report itself never holds bytes.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import unquote, urlparse
import logging
import os
import uuid

from app.core.exceptions import DependencyError, ValidationError
from app.core.settings import settings

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic"}


def _safe_extension(filename: Optional[str]) -> str:
    extension = os.path.splitext(filename or "")[1].lower()
    return extension if extension in ALLOWED_EXTENSIONS else ""


def check_image(filename: Optional[str], content_type: Optional[str]) -> None:
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError.for_field("photos", f"{filename or 'upload'} is not an image ({content_type})")


class PhotoStorage(ABC):

    name: str = "abstract"

    @abstractmethod
    def save(self, filename: Optional[str], content: bytes, content_type: str) -> str:
        """Store the bytes and return the reference saved on the report."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, ref: str) -> None:
        """Remove a previously saved photo. Unknown references are ignored."""
        raise NotImplementedError

    def discard(self, refs: List[str]) -> None:
        """
        Best-effort removal of photos saved for a submission that failed.
        Errors are logged so the original failure is the one reported.
        """
        for ref in refs:
            try:
                self.delete(ref)
                logger.info(f"Removed orphaned photo {ref}")
            except Exception as e:
                logger.warning(f"Could not remove orphaned photo {ref}: {e}")


class LocalPhotoStorage(PhotoStorage):
    """Writes uploads to a local directory served under /uploads."""

    name = "local"

    def __init__(self, upload_dir: str, url_prefix: str = "/uploads"):
        self.upload_dir = upload_dir
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, filename: Optional[str], content: bytes, content_type: str) -> str:
        unique_filename = f"{uuid.uuid4().hex}{_safe_extension(filename)}"
        file_path = os.path.join(self.upload_dir, unique_filename)
        try:
            os.makedirs(self.upload_dir, exist_ok=True)
            with open(file_path, "wb") as buffer:
                buffer.write(content)
        except OSError as e:
            logger.error(f"Failed to save upload {filename}: {e}")
            raise DependencyError(f"Photo storage failed: {e}") from e
        return f"{self.url_prefix}/{unique_filename}"

    def delete(self, ref: str) -> None:
        if not ref.startswith(f"{self.url_prefix}/"):
            return
        # basename only: a reference can never point outside upload_dir
        file_path = os.path.join(self.upload_dir, os.path.basename(ref))
        if os.path.exists(file_path):
            os.remove(file_path)


class FirebasePhotoStorage(PhotoStorage):
    """Uploads to the Firebase Storage bucket and returns the public URL."""

    name = "firebase"

    def __init__(self, bucket, prefix: str = "reports"):
        self.bucket = bucket
        self.prefix = prefix

    def save(self, filename: Optional[str], content: bytes, content_type: str) -> str:
        blob_name = f"{self.prefix}/{uuid.uuid4().hex}{_safe_extension(filename)}"
        try:
            blob = self.bucket.blob(blob_name)
            blob.upload_from_string(content, content_type=content_type)
            blob.make_public()
        except Exception as e:
            logger.error(f"Failed to upload {blob_name} to Firebase Storage: {e}", exc_info=True)
            raise DependencyError(f"Photo upload failed: {e}") from e
        logger.info(f"Photo uploaded: {blob_name}")
        return blob.public_url

    def _blob_name(self, ref: str) -> Optional[str]:
        # public_url is https://storage.googleapis.com/<bucket>/<quoted blob name>
        path = unquote(urlparse(ref).path).lstrip("/")
        bucket_prefix = f"{self.bucket.name}/"
        if not path.startswith(bucket_prefix):
            return None
        blob_name = path[len(bucket_prefix):]
        return blob_name if blob_name.startswith(f"{self.prefix}/") else None

    def delete(self, ref: str) -> None:
        blob_name = self._blob_name(ref)
        if blob_name:
            self.bucket.blob(blob_name).delete()


_photo_storage: Optional[PhotoStorage] = None


def get_photo_storage() -> PhotoStorage:
    global _photo_storage
    if _photo_storage is None:
        if (settings.PHOTO_STORAGE or "local").lower() == "firebase":
            from app.config.firebase import get_bucket

            _photo_storage = FirebasePhotoStorage(get_bucket())
        else:
            _photo_storage = LocalPhotoStorage(settings.UPLOAD_DIR)
        logger.info(f"Photo storage initialized: {_photo_storage.name}")
    return _photo_storage
