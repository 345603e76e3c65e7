# poster_app/core/cloudinary_client.py
import logging
from functools import lru_cache
from typing import Any, BinaryIO, Protocol, Union

import cloudinary
import cloudinary.api
import cloudinary.uploader

from poster_app.core.config import Settings, get_settings
from poster_app.core.errors import UpstreamError
from poster_app.schemas.poster import UploadedAsset

log = logging.getLogger(__name__)

# A local path, a remote URL, or an open binary file
UploadSource = Union[str, BinaryIO]


class ImageClient(Protocol):
    """
    The remote image capabilities the poster workflows rely on.

    Any object with these three methods can stand in for Cloudinary,
    e.g. a recording fake in tests.
    """

    def upload(
        self,
        file: UploadSource,
        *,
        folder: str | None = None,
        transformation: list[dict[str, Any]] | None = None,
    ) -> UploadedAsset: ...

    def delete(self, public_ids: list[str]) -> None: ...

    def list(self) -> list[UploadedAsset]: ...


class CloudinaryClient:
    """
    ImageClient backed by the Cloudinary SDK.

    - Credentials come from Settings and are applied once, at construction.
    - Every SDK failure (bad credentials, network, rejected transformation)
      is re-raised as UpstreamError with the upstream message attached.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,  # Always use HTTPS URLs
        )

    def upload(
        self,
        file: UploadSource,
        *,
        folder: str | None = None,
        transformation: list[dict[str, Any]] | None = None,
    ) -> UploadedAsset:
        """
        Upload an image, optionally into a folder and with an incoming
        transformation applied before it is stored.

        Raises:
            UpstreamError: if Cloudinary rejects the upload.
        """
        options: dict[str, Any] = {"resource_type": "image"}
        if folder:
            options["folder"] = folder
        if transformation:
            options["transformation"] = transformation

        log.info("Uploading image to Cloudinary (folder=%s, steps=%d)", folder, len(transformation or []))
        try:
            result = cloudinary.uploader.upload(file, **options)
        except Exception as e:
            raise UpstreamError("upload", e) from e
        return UploadedAsset.model_validate(result)

    def delete(self, public_ids: list[str]) -> None:
        """
        Delete assets by public id.

        Unknown ids are reported by Cloudinary as "not_found" in the
        response body; that is not treated as an error here.
        """
        log.info("Deleting Cloudinary assets: %s", public_ids)
        try:
            cloudinary.api.delete_resources(public_ids)
        except Exception as e:
            raise UpstreamError("delete", e) from e

    def list(self) -> list[UploadedAsset]:
        """List uploaded images in the order Cloudinary returns them."""
        try:
            result = cloudinary.api.resources(
                type="upload",
                resource_type="image",
                max_results=self.settings.LIST_MAX_RESULTS,
            )
        except Exception as e:
            raise UpstreamError("list", e) from e
        return [UploadedAsset.model_validate(r) for r in result.get("resources", [])]


@lru_cache
def get_image_client() -> ImageClient:
    """
    FastAPI dependency returning the process-wide Cloudinary client.

    Tests override this via `app.dependency_overrides`.
    """
    return CloudinaryClient(get_settings())
