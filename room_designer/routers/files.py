import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, UploadFile, File
from fastapi.responses import FileResponse
from PIL import UnidentifiedImageError

from room_designer.db.connection import get_db
from room_designer.config import PROJECT_THUMBNAILS, PRODUCT_MODELS
from room_designer.model_processor import ModelProcessor, dimensions_from_bounds
from room_designer.utils import IMAGE_EXTENSIONS, cleanup_image_files, resize_thumbnail

logger = logging.getLogger(__name__)

router = APIRouter()


def find_file(directory: Path, base_name: str, extensions: list) -> Path | None:
    for ext in extensions:
        path = directory / f"{base_name}.{ext}"
        if path.exists():
            return path
    return None


# ============ Project Thumbnails ============

@router.post("/projects/{project_id}/thumbnail")
async def upload_project_thumbnail(project_id: str, file: UploadFile = File(...)):
    """
    Upload a canvas capture as the project thumbnail.
    The image is downscaled and stored as PNG, replacing any previous thumbnail.
    """
    content = await file.read()
    try:
        png = resize_thumbnail(content)
    except UnidentifiedImageError:
        raise HTTPException(400, "Thumbnail is not a valid image")

    cleanup_image_files(PROJECT_THUMBNAILS, project_id)
    PROJECT_THUMBNAILS.mkdir(parents=True, exist_ok=True)
    path = PROJECT_THUMBNAILS / f"{project_id}.png"
    path.write_bytes(png)

    url = f"/api/files/projects/{project_id}/thumbnail"

    # The project row may not exist yet when a new design is saved
    db = get_db()
    db.execute(
        "UPDATE design_projects SET thumbnail_path = ?, thumbnail_url = ? WHERE id = ?",
        [str(path), url, project_id]
    )

    return {"status": "uploaded", "url": url}


@router.get("/projects/{project_id}/thumbnail")
def get_project_thumbnail(project_id: str):
    path = find_file(PROJECT_THUMBNAILS, project_id, IMAGE_EXTENSIONS)
    if not path:
        raise HTTPException(404, "Thumbnail not found")
    return FileResponse(path)


@router.delete("/projects/{project_id}/thumbnail")
def delete_project_thumbnail(project_id: str):
    cleanup_image_files(PROJECT_THUMBNAILS, project_id)

    db = get_db()
    db.execute(
        "UPDATE design_projects SET thumbnail_path = NULL, thumbnail_url = NULL WHERE id = ?",
        [project_id]
    )
    return {"status": "deleted"}


# ============ Product Models ============

@router.post("/products/{product_id}/model")
async def upload_product_model(product_id: str, file: UploadFile = File(...)):
    """
    Upload a product model (GLB file).
    The origin is moved to the bottom-center; products without dimensions
    get them from the model's bounding box, in meters.
    """
    db = get_db()
    row = db.execute(
        "SELECT dim_width, dim_height, dim_depth FROM products WHERE id = ?",
        [product_id]
    ).fetchone()
    if not row:
        raise HTTPException(404, "Product not found")

    content = await file.read()

    processor = ModelProcessor()
    try:
        result = processor.process_glb(content, origin_placement='bottom-center')
    except ValueError as e:
        raise HTTPException(400, str(e))

    PRODUCT_MODELS.mkdir(parents=True, exist_ok=True)
    model_path = PRODUCT_MODELS / f"{product_id}.glb"
    model_path.write_bytes(result['glb'])

    updates = ["model_path = ?"]
    values = [str(model_path)]

    if not all(row):
        dims = dimensions_from_bounds(result['bounds'])
        logger.info(f"Product {product_id} dimensions from model: {dims}")
        for column, value in dims.items():
            updates.append(f"{column} = ?")
            values.append(value)

    values.append(product_id)
    db.execute(f"UPDATE products SET {', '.join(updates)} WHERE id = ?", values)

    return {"status": "uploaded", "path": str(model_path), "bounds": result['bounds']}


@router.get("/products/{product_id}/model")
def get_product_model(product_id: str):
    path = PRODUCT_MODELS / f"{product_id}.glb"
    if not path.exists():
        raise HTTPException(404, "Model not found")
    return FileResponse(path, media_type="model/gltf-binary")
