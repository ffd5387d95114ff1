from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class ProductCreate(BaseModel):
    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    material: Optional[str] = None
    category: Optional[str] = None
    dim_width: Optional[float] = None
    dim_height: Optional[float] = None
    dim_depth: Optional[float] = None
    dim_sku: Optional[str] = None
    weight: Optional[float] = None
    slug: Optional[str] = None
    main_image_url: Optional[str] = None
    variation_names: Optional[List[str]] = None
    variation_images: Optional[List[str]] = None
    variation_prices: Optional[List[float]] = None
    variation_color_codes: Optional[List[str]] = None
    variation_texture_urls: Optional[List[str]] = None
    model_3d_url: Optional[str] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    material: Optional[str] = None
    category: Optional[str] = None
    dim_width: Optional[float] = None
    dim_height: Optional[float] = None
    dim_depth: Optional[float] = None
    dim_sku: Optional[str] = None
    weight: Optional[float] = None
    slug: Optional[str] = None
    main_image_url: Optional[str] = None
    variation_names: Optional[List[str]] = None
    variation_images: Optional[List[str]] = None
    variation_prices: Optional[List[float]] = None
    variation_color_codes: Optional[List[str]] = None
    variation_texture_urls: Optional[List[str]] = None
    model_3d_url: Optional[str] = None


class Product(BaseModel):
    """Catalog product as served to the designer (document-style `$id`)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="$id")
    name: str
    description: Optional[str] = None
    material: Optional[str] = None
    category: Optional[str] = None
    dim_width: Optional[float] = None
    dim_height: Optional[float] = None
    dim_depth: Optional[float] = None
    dim_sku: Optional[str] = None
    weight: Optional[float] = None
    slug: Optional[str] = None
    main_image_url: Optional[str] = None
    variation_count: int = 0
    variation_names: Optional[List[str]] = None
    variation_images: Optional[List[str]] = None
    variation_prices: Optional[List[float]] = None
    variation_color_codes: Optional[List[str]] = None
    variation_texture_urls: Optional[List[str]] = None
    model_3d_url: Optional[str] = None


VARIATION_FIELDS = [
    "variation_names",
    "variation_images",
    "variation_prices",
    "variation_color_codes",
    "variation_texture_urls",
]
