from pydantic import BaseModel
from typing import Optional, Tuple

Vector3 = Tuple[float, float, float]


class RoomSettings(BaseModel):
    width: float
    length: float
    height: float
    wallColor: str
    floorColor: str


class RoomPreset(RoomSettings):
    name: str

    def to_settings(self) -> RoomSettings:
        return RoomSettings(**self.model_dump(exclude={"name"}))


class CameraSettings(BaseModel):
    position: Vector3
    target: Optional[Vector3] = None
    viewAngle: float


class Dimensions(BaseModel):
    width: float = 1
    height: float = 1
    depth: float = 1


class FurnitureItem(BaseModel):
    id: str
    instanceId: str
    name: str
    model: str
    position: Vector3
    rotation: Vector3 = (0.0, 0.0, 0.0)
    scale: float = 1
    textureUrl: Optional[str] = None
    dimensions: Dimensions = Dimensions()
    dimensionSku: str = "cm"
