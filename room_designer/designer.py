"""
Room designer scene store.

Holds one editing session: the room, the camera pose and the furniture placed
in the room, plus the pointer to the design project being edited. Scene
mutations are synchronous and never raise for bad input; they return an
Outcome instead. Project persistence goes through an async project service
(see project_client.ProjectServiceClient).
"""

import logging
import math
import random
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from room_designer.models.product import Product
from room_designer.models.project import ParsedDesignProject
from room_designer.models.scene import (
    RoomSettings, RoomPreset, CameraSettings, FurnitureItem, Dimensions, Vector3
)
from room_designer.presets import (
    DEFAULT_ROOM, DEFAULT_CAMERA, ViewType, calculate_initial_camera_position, camera_for_view
)
from room_designer.project_client import ProjectServiceClient, ProjectServiceError
from room_designer.serialization import ProjectFormatError, parse_project, stringify_project
from room_designer.units import to_meters

logger = logging.getLogger(__name__)

MIN_SCALE = 0.1
PLACEMENT_JITTER = 0.5
AXES = {"x": 0, "y": 1, "z": 2}


class Outcome(str, Enum):
    APPLIED = "applied"
    NO_CHANGE = "no_change"


@dataclass
class ViewportBinding:
    """
    Live handles from the rendering surface, read only at capture time.

    `camera` exposes `position` and `fov`; `controls` exposes `target`.
    Vectors may be sequences or objects with x/y/z attributes.
    """
    camera: Any = None
    controls: Any = None


def _vec(value) -> Vector3:
    if hasattr(value, "x"):
        return (float(value.x), float(value.y), float(value.z))
    x, y, z = value
    return (float(x), float(y), float(z))


def _clamp(value: float, low: float, high: float) -> float:
    # Footprint wider than the room on this axis: pin to the room's midpoint
    if low > high:
        return (low + high) / 2
    return min(max(value, low), high)


def clamp_to_room(item: FurnitureItem, position: Vector3, room: RoomSettings) -> Vector3:
    """Clamp the horizontal part of `position` so the item's footprint stays in the room."""
    half_width = to_meters(item.dimensions.width, item.dimensionSku) / 2
    half_depth = to_meters(item.dimensions.depth, item.dimensionSku) / 2

    x, y, z = position
    return (
        _clamp(x, half_width, room.width - half_width),
        y,
        _clamp(z, half_depth, room.length - half_depth),
    )


class RoomDesigner:
    def __init__(
        self,
        service: Optional[Any] = None,
        rng: Optional[random.Random] = None,
        id_factory: Optional[Callable[[], str]] = None
    ):
        self.service = service or ProjectServiceClient()
        self._rng = rng or random.Random()
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))

        self.room: RoomSettings = DEFAULT_ROOM.model_copy()
        self.camera: CameraSettings = DEFAULT_CAMERA.model_copy()
        self.furniture: list[FurnitureItem] = []
        self.products: list[Product] = []

        self.current_product_id: Optional[str] = None
        self.selected_item_index: Optional[int] = None
        self.dragging_enabled = True
        self.current_project: Optional[ParsedDesignProject] = None

        self.is_loading = False
        self.is_saving = False

    @property
    def selected_item(self) -> Optional[FurnitureItem]:
        if self._in_range(self.selected_item_index):
            return self.furniture[self.selected_item_index]
        return None

    def _in_range(self, index: Optional[int]) -> bool:
        return index is not None and 0 <= index < len(self.furniture)

    def _replace_item(self, index: int, **changes) -> Outcome:
        if not self._in_range(index):
            logger.debug(f"Ignoring update for furniture index {index}")
            return Outcome.NO_CHANGE
        self.furniture[index] = self.furniture[index].model_copy(update=changes)
        return Outcome.APPLIED

    # ============ Room & camera ============

    def update_room_dimensions(self, **dimensions) -> Outcome:
        """Merge fields into the room. Placed furniture is not re-clamped."""
        fields = {k: v for k, v in dimensions.items() if k in RoomSettings.model_fields}
        ignored = set(dimensions) - set(fields)
        if ignored:
            logger.warning(f"Ignoring unknown room fields: {sorted(ignored)}")
        if not fields:
            return Outcome.NO_CHANGE
        self.room = self.room.model_copy(update=fields)
        return Outcome.APPLIED

    def apply_room_preset(self, preset: RoomSettings, frame_camera: bool = False) -> Outcome:
        """
        Replace the room with a preset's settings.

        With `frame_camera`, the camera is also moved back far enough to see
        the whole room, looking at its center.
        """
        if isinstance(preset, RoomPreset):
            self.room = preset.to_settings()
        else:
            self.room = preset.model_copy()
        if frame_camera:
            self.camera = CameraSettings(
                position=calculate_initial_camera_position(self.room),
                target=(self.room.width / 2, self.room.height / 2, self.room.length / 2),
                viewAngle=self.camera.viewAngle,
            )
        return Outcome.APPLIED

    def reconcile_bounds(self) -> Outcome:
        """Re-clamp every placed item into the current room."""
        outcome = Outcome.NO_CHANGE
        for index, item in enumerate(self.furniture):
            clamped = clamp_to_room(item, item.position, self.room)
            if clamped != tuple(item.position):
                self.furniture[index] = item.model_copy(update={"position": clamped})
                outcome = Outcome.APPLIED
        return outcome

    def update_camera(self, **camera) -> Outcome:
        fields = {k: v for k, v in camera.items() if k in CameraSettings.model_fields}
        if not fields:
            return Outcome.NO_CHANGE
        self.camera = self.camera.model_copy(update=fields)
        return Outcome.APPLIED

    def set_view(self, view: ViewType) -> Outcome:
        self.camera = camera_for_view(self.room, view, self.camera.viewAngle)
        return Outcome.APPLIED

    def capture_current_camera_state(self, viewport: Optional[ViewportBinding] = None) -> CameraSettings:
        """
        Copy the live camera pose from `viewport` into the store.

        Without a viewport, or while either handle is not attached yet, the
        last known camera settings are returned unchanged.
        """
        if viewport is None or viewport.camera is None or viewport.controls is None:
            return self.camera

        self.camera = CameraSettings(
            position=_vec(viewport.camera.position),
            target=_vec(viewport.controls.target),
            viewAngle=float(viewport.camera.fov),
        )
        return self.camera

    # ============ Furniture ============

    def add_furniture(self, product: Union[Product, dict]) -> Outcome:
        if isinstance(product, dict):
            try:
                product = Product.model_validate(product)
            except ValidationError as e:
                logger.error(f"Cannot add furniture: invalid product ({e.error_count()} errors)")
                return Outcome.NO_CHANGE

        if not product.model_3d_url:
            logger.error(f"Cannot add furniture: product {product.id} has no 3D model")
            return Outcome.NO_CHANGE

        position = (
            self.room.width / 2 + self._rng.uniform(-PLACEMENT_JITTER, PLACEMENT_JITTER),
            0.0,
            self.room.length / 2 + self._rng.uniform(-PLACEMENT_JITTER, PLACEMENT_JITTER),
        )
        textures = product.variation_texture_urls or []

        self.furniture.append(FurnitureItem(
            id=product.id,
            instanceId=self._new_id(),
            name=product.name,
            model=product.model_3d_url,
            position=position,
            rotation=(0.0, 0.0, 0.0),
            scale=1,
            textureUrl=textures[0] if textures else "",
            dimensions=Dimensions(
                width=product.dim_width or 1,
                height=product.dim_height or 1,
                depth=product.dim_depth or 1,
            ),
            dimensionSku=product.dim_sku or "cm",
        ))

        self.current_product_id = product.id
        self.selected_item_index = len(self.furniture) - 1
        return Outcome.APPLIED

    def update_furniture_position(self, index: int, new_position: Vector3) -> Outcome:
        if not self._in_range(index):
            return Outcome.NO_CHANGE
        clamped = clamp_to_room(self.furniture[index], tuple(new_position), self.room)
        return self._replace_item(index, position=clamped)

    def update_furniture_texture(self, index: int, texture_url: str) -> Outcome:
        return self._replace_item(index, textureUrl=texture_url)

    def rotate_furniture(self, index: int, axis: str, degrees: float) -> Outcome:
        if axis not in AXES or not self._in_range(index):
            return Outcome.NO_CHANGE
        rotation = list(self.furniture[index].rotation)
        rotation[AXES[axis]] += math.radians(degrees)
        return self._replace_item(index, rotation=tuple(rotation))

    def adjust_scale(self, index: int, factor: float) -> Outcome:
        if not self._in_range(index):
            return Outcome.NO_CHANGE
        scale = max(MIN_SCALE, self.furniture[index].scale * factor)
        return self._replace_item(index, scale=scale)

    def remove_furniture(self, index: int) -> Outcome:
        # Selection is cleared even when a different item was selected
        self.selected_item_index = None
        if not self._in_range(index):
            return Outcome.NO_CHANGE
        del self.furniture[index]
        return Outcome.APPLIED

    def select_furniture(self, index: Optional[int]) -> Outcome:
        if index is not None and not self._in_range(index):
            return Outcome.NO_CHANGE
        self.selected_item_index = index
        return Outcome.APPLIED

    def toggle_dragging(self) -> bool:
        self.dragging_enabled = not self.dragging_enabled
        return self.dragging_enabled

    # ============ Catalog ============

    async def load_products(self) -> list[Product]:
        self.is_loading = True
        try:
            documents = await self.service.get_all_products()
            self.products = [Product.model_validate(doc) for doc in documents]
        except (ProjectServiceError, ValidationError, TypeError) as e:
            logger.error(f"Error loading products: {e}")
            return []
        finally:
            self.is_loading = False
        return self.products

    # ============ Projects ============

    async def save_project(self, project_info: dict, viewport: Optional[ViewportBinding] = None) -> bool:
        """
        Create or update the current design project from the scene.

        Returns False on failure; the scene and current project are unchanged.
        Concurrent calls are not serialized here, callers gate on is_saving.
        """
        self.capture_current_camera_state(viewport)

        scene = {"room": self.room, "camera": self.camera, "furniture": self.furniture}
        self.is_saving = True
        try:
            if self.current_project and self.current_project.id:
                fields = stringify_project({**project_info, **scene})
                saved = await self.service.update_project(self.current_project.id, fields)
            else:
                fields = stringify_project({**project_info, **scene})
                if not fields.get("status"):
                    fields["status"] = "Draft"
                saved = await self.service.create_project(fields)
            project = parse_project(saved)
        except (ProjectServiceError, ProjectFormatError) as e:
            logger.error(f"Error saving project: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error saving project: {e}")
            return False
        finally:
            self.is_saving = False

        self.current_project = project
        logger.info(f"Saved design project {project.id}")
        return True

    async def load_project(self, project_id: str) -> Optional[ParsedDesignProject]:
        """Replace the whole scene with a stored project. None on failure."""
        self.is_loading = True
        try:
            stored = await self.service.get_project(project_id)
            project = parse_project(stored)
        except (ProjectServiceError, ProjectFormatError) as e:
            logger.error(f"Error loading project {project_id}: {e}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error loading project {project_id}: {e}")
            return None
        finally:
            self.is_loading = False

        self.room = project.room
        self.camera = project.camera
        self.furniture = list(project.furniture)
        self.current_project = project
        self.selected_item_index = None
        logger.info(f"Loaded design project {project_id} ({len(self.furniture)} items)")
        return project

    async def delete_project(self, project_id: str) -> bool:
        """Delete a stored project. The scene on screen is left as is."""
        try:
            await self.service.delete_project(project_id)
        except ProjectServiceError as e:
            logger.error(f"Error deleting project {project_id}: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error deleting project {project_id}: {e}")
            return False

        if self.current_project and self.current_project.id == project_id:
            self.current_project = None
        return True

    def create_new_project(self) -> Outcome:
        self.room = DEFAULT_ROOM.model_copy()
        self.camera = DEFAULT_CAMERA.model_copy()
        self.furniture = []
        self.current_project = None
        self.selected_item_index = None
        return Outcome.APPLIED
