# poster_app/services/poster_service.py
import logging

from poster_app.core.cloudinary_client import ImageClient, UploadSource
from poster_app.core.config import Settings
from poster_app.core.errors import CleanupError, ConfigurationError, UpstreamError
from poster_app.schemas.poster import ProductInput, UploadedAsset
from poster_app.services.poster_builder import (
    build_poster_transformation,
    denormalize_public_id,
    normalize_public_id,
)

log = logging.getLogger(__name__)


class PosterService:
    """
    Business logic for promotional posters.

    Responsibilities:
      - upload the raw product photo, compose the poster, clean up
      - list and delete posters held by the image service
      - no HTTP concerns (errors are raised as PosterError subclasses)
    """

    def __init__(self, client: ImageClient, settings: Settings):
        self.client = client
        self.settings = settings

    # ----- Creation -----

    def create_poster(self, product: ProductInput, photo: UploadSource) -> UploadedAsset:
        """
        Compose a poster for `product` around the uploaded `photo`.

        Steps (strictly sequential):
          1. upload the raw photo (no folder, no transformation)
          2. upload the base template with the overlay pipeline into
             POSTER_FOLDER, referencing the photo from step 1
          3. delete the raw photo (best-effort)

        Raises:
            ConfigurationError: if the poster template is missing; nothing is
                uploaded in that case.
            UpstreamError: if step 1 or step 2 fails. When step 2 fails the
                raw photo from step 1 is NOT deleted.
        """
        problem = self.settings.base_image_problem()
        if problem:
            raise ConfigurationError(problem, {"BASE_IMAGE_PATH": self.settings.BASE_IMAGE_PATH})

        photo_asset = self.client.upload(photo)

        steps = build_poster_transformation(
            photo_asset.public_id,
            product.name,
            product.price,
            product.discount_percentage,
        )

        try:
            poster = self.client.upload(
                self.settings.base_image_source,
                folder=self.settings.POSTER_FOLDER,
                transformation=[step.to_transformation() for step in steps],
            )
        except UpstreamError:
            # TODO: compensate by deleting the raw photo once orphan cleanup is agreed on
            log.warning("Poster composition failed; raw photo '%s' left orphaned", photo_asset.public_id)
            raise

        self._delete_photo(photo_asset.public_id)
        return poster

    def _delete_photo(self, public_id: str) -> None:
        """Best-effort removal of the intermediate photo."""
        try:
            self.client.delete([public_id])
        except UpstreamError as e:
            err = CleanupError(public_id, e)
            log.warning("%s: %s", err, err.details["cause"])

    # ----- Gallery -----

    def list_posters(self) -> list[UploadedAsset]:
        return self.client.list()

    def delete_poster(self, public_id: str) -> str:
        """
        Delete a poster.

        Accepts either the folder path ("posters/shoe") or its
        ':'-delimited form ("posters:shoe").

        Returns:
            The normalized identifier.
        """
        reference = normalize_public_id(public_id)
        self.client.delete([denormalize_public_id(reference)])
        return reference
