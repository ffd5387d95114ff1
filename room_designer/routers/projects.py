from fastapi import APIRouter, HTTPException
from typing import List
import uuid
import json
import logging

from room_designer.db.connection import get_db
from room_designer.models.project import DesignProject, ProjectCreate, ProjectUpdate
from room_designer.config import PROJECT_THUMBNAILS
from room_designer.events import publish
from room_designer.utils import cleanup_entity_files

logger = logging.getLogger(__name__)

PROJECT_SELECT = """
    SELECT id, name, description, designer_id, customer_ids, thumbnail_url,
           status, room, camera, furniture, created_at, updated_at
    FROM design_projects
"""

# Request field -> column
COLUMNS = {
    "name": "name",
    "description": "description",
    "designerId": "designer_id",
    "thumbnailUrl": "thumbnail_url",
    "status": "status",
    "room": "room",
    "camera": "camera",
    "furniture": "furniture",
}

SCENE_FIELDS = ("room", "camera", "furniture")

router = APIRouter()


def row_to_response(row) -> DesignProject:
    return DesignProject(
        id=row[0],
        name=row[1],
        description=row[2],
        designerId=row[3],
        customerId=json.loads(row[4]) if row[4] else None,
        thumbnailUrl=row[5],
        status=row[6] or "Draft",
        room=row[7],
        camera=row[8],
        furniture=row[9],
        createdAt=str(row[10]) if row[10] else None,
        updated_at=str(row[11]) if row[11] else None
    )


def check_scene_json(project) -> None:
    """Reject scene fields that are not JSON text."""
    for field in SCENE_FIELDS:
        value = getattr(project, field)
        if value is None:
            continue
        try:
            json.loads(value)
        except json.JSONDecodeError:
            raise HTTPException(400, f"'{field}' must be JSON-encoded")


@router.get("/", response_model=List[DesignProject])
def get_all_projects():
    db = get_db()
    rows = db.execute(f"{PROJECT_SELECT} ORDER BY updated_at DESC").fetchall()
    return [row_to_response(row) for row in rows]


@router.get("/designer/{designer_id}", response_model=List[DesignProject])
def get_designer_projects(designer_id: str):
    db = get_db()
    rows = db.execute(
        f"{PROJECT_SELECT} WHERE designer_id = ? ORDER BY updated_at DESC",
        [designer_id]
    ).fetchall()
    return [row_to_response(row) for row in rows]


@router.get("/{project_id}", response_model=DesignProject)
def get_project(project_id: str):
    db = get_db()
    row = db.execute(f"{PROJECT_SELECT} WHERE id = ?", [project_id]).fetchone()
    if not row:
        raise HTTPException(404, "Project not found")
    return row_to_response(row)


@router.post("/", response_model=DesignProject)
def create_project(project: ProjectCreate):
    check_scene_json(project)

    db = get_db()
    project_id = str(uuid.uuid4())
    customer_ids = json.dumps(project.customerId) if project.customerId else None

    db.execute(
        """
        INSERT INTO design_projects (id, name, description, designer_id, customer_ids,
                                     thumbnail_url, status, room, camera, furniture)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [project_id, project.name, project.description, project.designerId, customer_ids,
         project.thumbnailUrl, project.status, project.room, project.camera, project.furniture]
    )

    logger.info(f"Created project {project_id} for designer {project.designerId}")
    publish("project_saved", {"id": project_id, "designerId": project.designerId})
    return get_project(project_id)


@router.put("/{project_id}", response_model=DesignProject)
def update_project(project_id: str, project: ProjectUpdate):
    db = get_db()
    existing = db.execute("SELECT id FROM design_projects WHERE id = ?", [project_id]).fetchone()
    if not existing:
        raise HTTPException(404, "Project not found")

    check_scene_json(project)

    updates = []
    values = []

    for field, column in COLUMNS.items():
        value = getattr(project, field)
        if value is not None:
            updates.append(f"{column} = ?")
            values.append(value)
    if project.customerId is not None:
        updates.append("customer_ids = ?")
        values.append(json.dumps(project.customerId))

    if updates:
        updates.append("updated_at = CURRENT_TIMESTAMP")
        values.append(project_id)
        db.execute(f"UPDATE design_projects SET {', '.join(updates)} WHERE id = ?", values)

    updated = get_project(project_id)
    publish("project_saved", {"id": project_id, "designerId": updated.designerId})
    return updated


@router.delete("/{project_id}")
def delete_project(project_id: str):
    db = get_db()
    existing = db.execute("SELECT id FROM design_projects WHERE id = ?", [project_id]).fetchone()
    if not existing:
        raise HTTPException(404, "Project not found")

    db.execute("DELETE FROM design_projects WHERE id = ?", [project_id])
    cleanup_entity_files(project_id, image_dirs=[PROJECT_THUMBNAILS])

    publish("project_deleted", {"id": project_id})
    return {"status": "deleted"}
