# poster_app/schemas/poster.py
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProductInput(BaseModel):
    """
    Product details submitted with the poster form.

    - Keys follow the form field names (`discountPercentage`).
    - `discount_percentage` is not bounds-checked: values outside 0-100
      simply produce a negative or inflated "now" price.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str
    price: float = Field(gt=0, allow_inf_nan=False)
    discount_percentage: float = Field(alias="discountPercentage", allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class UploadedAsset(BaseModel):
    """
    An image hosted by Cloudinary, as returned by upload / list calls.

    Serialized to clients with camelCase keys (`publicId`, `secureUrl`).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    public_id: str
    secure_url: str
    width: int
    height: int
    format: str | None = None
    bytes: int | None = None
    folder: str | None = None
    created_at: str | None = None


# -------- Transformation steps --------


class TextOverlayStep(BaseModel):
    """
    A text layer composited onto the base image.

    `to_transformation()` renders the dict shape the Cloudinary SDK
    accepts inside an upload `transformation` list.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    font_size: int
    font_family: str = "Arial"
    font_weight: str | None = "bold"
    stroke: str | None = None
    decoration: str | None = None
    letter_spacing: int = 2

    border: str | None = None
    background: str | None = None
    color: str = "#FFFFFF"
    gravity: str = "north"
    y: int = 0

    def to_transformation(self) -> dict[str, Any]:
        overlay = {
            "font_family": self.font_family,
            "font_size": self.font_size,
            "font_weight": self.font_weight,
            "stroke": self.stroke,
            "decoration": self.decoration,
            "letter_spacing": self.letter_spacing,
            "text": self.text,
        }
        step: dict[str, Any] = {
            "overlay": {k: v for k, v in overlay.items() if v is not None},
            "border": self.border,
            "background": self.background,
            "color": self.color,
            "gravity": self.gravity,
            "y": self.y,
        }
        return {k: v for k, v in step.items() if v is not None}


class ImageOverlayStep(BaseModel):
    """
    An uploaded image layered onto the base image.

    `overlay` is the ':'-delimited public id of the asset.
    """

    model_config = ConfigDict(frozen=True)

    overlay: str
    width: int
    height: int
    crop: str = "fill"
    gravity: str = "north"
    y: int = 0

    def to_transformation(self) -> dict[str, Any]:
        return {
            "overlay": self.overlay,
            "width": self.width,
            "height": self.height,
            "crop": self.crop,
            "gravity": self.gravity,
            "y": self.y,
        }


TransformationStep = Union[TextOverlayStep, ImageOverlayStep]


# -------- Response envelopes --------


class AssetResponse(BaseModel):
    message: str = "Success"
    result: UploadedAsset


class AssetListResponse(BaseModel):
    message: str = "Success"
    result: list[UploadedAsset]


class DeletedAsset(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    public_id: str


class DeleteResponse(BaseModel):
    message: str = "Success"
    result: DeletedAsset
