from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal

from room_designer.models.scene import RoomSettings, CameraSettings, FurnitureItem

ProjectStatus = Literal["Draft", "In Progress", "Completed"]


class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None
    designerId: str
    customerId: Optional[List[str]] = None
    thumbnailUrl: Optional[str] = None
    status: ProjectStatus = "Draft"
    room: str
    camera: str
    furniture: str


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    designerId: Optional[str] = None
    customerId: Optional[List[str]] = None
    thumbnailUrl: Optional[str] = None
    status: Optional[ProjectStatus] = None
    room: Optional[str] = None
    camera: Optional[str] = None
    furniture: Optional[str] = None


class DesignProject(BaseModel):
    """Flat persisted project; room, camera and furniture are JSON text."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="$id")
    name: str
    description: Optional[str] = None
    designerId: str
    customerId: Optional[List[str]] = None
    thumbnailUrl: Optional[str] = None
    status: ProjectStatus = "Draft"
    room: str
    camera: str
    furniture: str
    createdAt: Optional[str] = None
    updated_at: Optional[str] = None


class ParsedDesignProject(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="$id")
    # A bare scene snapshot carries no project metadata
    name: Optional[str] = None
    description: Optional[str] = None
    designerId: Optional[str] = None
    customerId: Optional[List[str]] = None
    thumbnailUrl: Optional[str] = None
    status: ProjectStatus = "Draft"
    room: RoomSettings
    camera: CameraSettings
    furniture: List[FurnitureItem] = []
    createdAt: Optional[str] = None
    updated_at: Optional[str] = None
