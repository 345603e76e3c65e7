# poster_app/routers/images.py
from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    UploadFile,
    status,
)
from pydantic import ValidationError as PydanticValidationError

from poster_app.core.cloudinary_client import ImageClient, get_image_client
from poster_app.core.config import Settings, get_settings
from poster_app.core.errors import ValidationError
from poster_app.schemas.poster import (
    AssetListResponse,
    AssetResponse,
    DeletedAsset,
    DeleteResponse,
    ProductInput,
)
from poster_app.services.poster_service import PosterService

router = APIRouter(prefix="/images", tags=["Images"])


def get_poster_service(
    client: ImageClient = Depends(get_image_client),
    settings: Settings = Depends(get_settings),
) -> PosterService:
    return PosterService(client, settings)


def parse_product_form(
    name: str | None,
    price: str | None,
    discount_percentage: str | None,
    image: UploadFile | None,
) -> ProductInput:
    """
    Validate the multipart fields into a ProductInput.

    All problems are collected into a single ValidationError so the client
    sees every bad field at once.
    """
    raw = {"name": name, "price": price, "discountPercentage": discount_percentage}
    errors: list[dict[str, str]] = []
    product = None

    try:
        product = ProductInput.model_validate(
            {k: v for k, v in raw.items() if v is not None}
        )
    except PydanticValidationError as e:
        for err in e.errors():
            errors.append({"field": str(err["loc"][0]), "message": err["msg"]})

    if image is None or not image.filename:
        errors.append({"field": "image", "message": "Field required"})

    if errors:
        raise ValidationError(errors)
    return product


@router.get("", response_model=AssetListResponse)
def list_images(service: PosterService = Depends(get_poster_service)):
    """
    List every uploaded image.

    - Order is whatever Cloudinary returns; no paging or filtering.
    """
    return AssetListResponse(result=service.list_posters())


@router.post(
    "",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Compose a promotional poster from a product photo",
)
def create_image(
    name: str | None = Form(None),
    price: str | None = Form(None),
    discount_percentage: str | None = Form(None, alias="discountPercentage"),
    image: UploadFile | None = File(None),
    service: PosterService = Depends(get_poster_service),
):
    """
    Upload a product photo and get back the composed poster.

    - A PNG with a transparent background works best.
    - The raw photo is removed from Cloudinary once the poster exists.
    """
    product = parse_product_form(name, price, discount_percentage, image)
    poster = service.create_poster(product, image.file)
    return AssetResponse(result=poster)


@router.delete(
    "/{public_id:path}",
    response_model=DeleteResponse,
    summary="Delete an image by public id",
)
def delete_image(
    public_id: str,
    service: PosterService = Depends(get_poster_service),
):
    """
    Delete an image.

    - `public_id` may use ':' in place of '/' for foldered assets.
    """
    if not public_id.strip("/: "):
        raise ValidationError([{"field": "public_id", "message": "Field required"}])

    reference = service.delete_poster(public_id)
    return DeleteResponse(result=DeletedAsset(public_id=reference))
