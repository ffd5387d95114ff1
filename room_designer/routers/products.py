from fastapi import APIRouter, HTTPException
from typing import List
import uuid
import json

from room_designer.db.connection import get_db
from room_designer.models.product import Product, ProductCreate, ProductUpdate, VARIATION_FIELDS
from room_designer.config import PRODUCT_MODELS
from room_designer.utils import cleanup_entity_files

router = APIRouter()

PRODUCT_SELECT = """
    SELECT id, name, description, material, category,
           dim_width, dim_height, dim_depth, dim_sku, weight,
           slug, main_image_url, variations, model_3d_url, model_path
    FROM products
"""

COLUMN_FIELDS = [
    "name", "description", "material", "category",
    "dim_width", "dim_height", "dim_depth", "dim_sku", "weight",
    "slug", "main_image_url", "model_3d_url",
]


def row_to_response(row) -> Product:
    product_id = row[0]
    variations = json.loads(row[12]) if row[12] else {}

    model_url = row[13]
    if not model_url and row[14]:
        model_url = f"/api/files/products/{product_id}/model"

    names = variations.get("variation_names") or []

    return Product(
        id=product_id,
        name=row[1],
        description=row[2],
        material=row[3],
        category=row[4],
        dim_width=row[5],
        dim_height=row[6],
        dim_depth=row[7],
        dim_sku=row[8],
        weight=row[9],
        slug=row[10],
        main_image_url=row[11],
        variation_count=len(names),
        model_3d_url=model_url,
        **{field: variations.get(field) for field in VARIATION_FIELDS}
    )


@router.get("/", response_model=List[Product])
def get_all_products():
    db = get_db()
    rows = db.execute(f"{PRODUCT_SELECT} ORDER BY created_at").fetchall()
    return [row_to_response(row) for row in rows]


@router.get("/categories")
def get_categories():
    db = get_db()
    rows = db.execute("SELECT DISTINCT category FROM products WHERE category IS NOT NULL").fetchall()
    return sorted([row[0] for row in rows])


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str):
    db = get_db()
    row = db.execute(f"{PRODUCT_SELECT} WHERE id = ?", [product_id]).fetchone()
    if not row:
        raise HTTPException(404, "Product not found")
    return row_to_response(row)


@router.post("/", response_model=Product)
def create_product(product: ProductCreate):
    db = get_db()
    product_id = product.id or str(uuid.uuid4())
    variations = {field: getattr(product, field) for field in VARIATION_FIELDS if getattr(product, field)}

    columns = ["id"] + COLUMN_FIELDS + ["variations"]
    values = [product_id] + [getattr(product, field) for field in COLUMN_FIELDS]
    values.append(json.dumps(variations) if variations else None)

    placeholders = ", ".join(["?"] * len(columns))
    db.execute(f"INSERT INTO products ({', '.join(columns)}) VALUES ({placeholders})", values)

    return get_product(product_id)


@router.put("/{product_id}", response_model=Product)
def update_product(product_id: str, product: ProductUpdate):
    db = get_db()
    existing = db.execute("SELECT variations FROM products WHERE id = ?", [product_id]).fetchone()
    if not existing:
        raise HTTPException(404, "Product not found")

    updates = []
    values = []

    for field in COLUMN_FIELDS:
        value = getattr(product, field)
        if value is not None:
            updates.append(f"{field} = ?")
            values.append(value)

    changed_variations = {f: getattr(product, f) for f in VARIATION_FIELDS if getattr(product, f) is not None}
    if changed_variations:
        variations = json.loads(existing[0]) if existing[0] else {}
        variations.update(changed_variations)
        updates.append("variations = ?")
        values.append(json.dumps(variations))

    if updates:
        values.append(product_id)
        db.execute(f"UPDATE products SET {', '.join(updates)} WHERE id = ?", values)

    return get_product(product_id)


@router.delete("/{product_id}")
def delete_product(product_id: str):
    db = get_db()
    db.execute("DELETE FROM products WHERE id = ?", [product_id])

    cleanup_entity_files(
        product_id,
        image_dirs=[],
        other_files=[PRODUCT_MODELS / f"{product_id}.glb"]
    )

    return {"status": "deleted"}
