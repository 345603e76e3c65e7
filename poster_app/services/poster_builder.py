# poster_app/services/poster_builder.py
"""
Builds the Cloudinary transformation pipeline for a Black Friday poster.

The pipeline is layered onto the base template in order; later steps
render on top of earlier ones anchored at the same gravity:

    banner -> sub-banner -> product photo -> name
           -> discount label -> old price (struck) -> new price

Pure data shaping: nothing here talks to Cloudinary.
"""
from poster_app.schemas.poster import (
    ImageOverlayStep,
    TextOverlayStep,
    TransformationStep,
)

# --- Layout ---

GRAVITY = "north"
BORDER = "5px_solid_black"
STROKE = "stroke"

WHITE = "#FFFFFF"
BLACK = "#000000"
RED = "#FF0000"

PRODUCT_IMAGE_SIZE = 800


def normalize_public_id(public_id: str) -> str:
    """
    Turn a folder path public id into the ':'-delimited form Cloudinary
    expects when an asset is referenced as a layer ("posters/shoe" ->
    "posters:shoe").

    Idempotent.
    """
    return public_id.replace("/", ":")


def denormalize_public_id(reference: str) -> str:
    """Inverse of normalize_public_id, for Admin API calls."""
    return reference.replace(":", "/")


def discounted_price(price: float, discount_percentage: float) -> float:
    return price - price * discount_percentage / 100


def format_amount(value: float) -> str:
    """
    Default number-to-text conversion, minus the trailing '.0' on whole
    numbers: 100.0 -> "100", 79.992 -> "79.992".
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_poster_transformation(
    product_image_public_id: str,
    name: str,
    price: float,
    discount_percentage: float,
) -> list[TransformationStep]:
    """
    Build the seven overlay steps for a product poster.

    Args:
        product_image_public_id: public id of the already uploaded product photo.
        name: product name shown under the photo.
        price: original price (USD).
        discount_percentage: percentage off; not bounds-checked.

    Returns:
        Steps in rendering order. Only the texts and the photo reference
        depend on the arguments.
    """
    now_price = discounted_price(price, discount_percentage)

    return [
        TextOverlayStep(
            text="BLACK FRIDAY",
            font_size=120,
            stroke=STROKE,
            border=BORDER,
            color=WHITE,
            gravity=GRAVITY,
            y=100,
        ),
        TextOverlayStep(
            text="MEGA DEALS",
            font_size=150,
            stroke=STROKE,
            border=BORDER,
            background=RED,
            color=BLACK,
            gravity=GRAVITY,
            y=300,
        ),
        ImageOverlayStep(
            overlay=normalize_public_id(product_image_public_id),
            width=PRODUCT_IMAGE_SIZE,
            height=PRODUCT_IMAGE_SIZE,
            crop="fill",
            gravity=GRAVITY,
            y=500,
        ),
        TextOverlayStep(
            text=name,
            font_size=80,
            stroke=STROKE,
            border=BORDER,
            color=WHITE,
            gravity=GRAVITY,
            y=1400,
        ),
        TextOverlayStep(
            text=f"{format_amount(discount_percentage)} percent off",
            font_size=40,
            background=RED,
            color=BLACK,
            gravity=GRAVITY,
            y=1500,
        ),
        TextOverlayStep(
            text=f"was USD {format_amount(price)}",
            font_size=40,
            stroke=STROKE,
            decoration="strikethrough",
            border=BORDER,
            color=WHITE,
            gravity=GRAVITY,
            y=1600,
        ),
        TextOverlayStep(
            text=f"now USD {format_amount(now_price)}",
            font_size=60,
            stroke=STROKE,
            border=BORDER,
            color=WHITE,
            gravity=GRAVITY,
            y=1700,
        ),
    ]
