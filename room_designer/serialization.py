"""
Conversion between the nested in-memory project shape and the flat stored shape,
where room, camera and furniture are independently JSON-encoded text fields.
"""

import json
import logging

from pydantic import BaseModel, ValidationError

from room_designer.models.project import ParsedDesignProject

logger = logging.getLogger(__name__)

SCENE_FIELDS = ("room", "camera", "furniture")


class ProjectFormatError(Exception):
    """Stored project could not be decoded."""
    pass


def _plain(value):
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def stringify_project(project: dict) -> dict:
    """Encode the scene fields that are present; pass everything else through."""
    result = {k: v for k, v in project.items() if k not in SCENE_FIELDS}
    for field in SCENE_FIELDS:
        if project.get(field) is not None:
            result[field] = json.dumps(_plain(project[field]))
    return result


def parse_project(project: dict) -> ParsedDesignProject:
    """Decode a flat stored project. Raises ProjectFormatError on bad data."""
    data = dict(project)
    try:
        for field in SCENE_FIELDS:
            if isinstance(data.get(field), str):
                data[field] = json.loads(data[field])
        return ParsedDesignProject.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        project_id = project.get("$id") or project.get("id")
        raise ProjectFormatError(f"Project {project_id} has invalid scene data: {e}") from e
