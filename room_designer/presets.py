"""
Room presets and camera poses derived from room dimensions.
"""

from typing import Literal, Optional

from room_designer.models.scene import RoomPreset, RoomSettings, CameraSettings, Vector3

ViewType = Literal["default", "overhead", "front"]

DEFAULT_ROOM = RoomSettings(
    width=8,
    length=8,
    height=3,
    wallColor="#f5f5f5",
    floorColor="#e0e0e0",
)

DEFAULT_CAMERA = CameraSettings(
    position=(8, 5, 16),
    target=(4, 1.5, 4),
    viewAngle=50,
)

ROOM_PRESETS = [
    RoomPreset(name="Living Room", width=8, length=10, height=3, wallColor="#f0e6d2", floorColor="#8b5a2b"),
    RoomPreset(name="Bedroom", width=6, length=8, height=3, wallColor="#e6f0f2", floorColor="#a0a0a0"),
    RoomPreset(name="Office", width=5, length=6, height=2.8, wallColor="#ffffff", floorColor="#c0c0c0"),
    RoomPreset(name="Dining", width=7, length=7, height=3, wallColor="#fffbe6", floorColor="#bfa76a"),
    RoomPreset(name="Kids Room", width=5, length=5, height=2.7, wallColor="#fce4ec", floorColor="#f8bbd0"),
    RoomPreset(name="Bathroom", width=5, length=5, height=2.5, wallColor="#e0f7fa", floorColor="#b2ebf2"),
]


def get_room_preset(name: str) -> Optional[RoomPreset]:
    """Look up a preset by name, ignoring case."""
    for preset in ROOM_PRESETS:
        if preset.name.lower() == name.lower():
            return preset
    return None


def calculate_initial_camera_position(room: RoomSettings) -> Vector3:
    distance = max(room.width, room.length) * 1.5
    return (room.width / 2, room.height / 2, distance)


def camera_for_view(room: RoomSettings, view: ViewType, view_angle: float = DEFAULT_CAMERA.viewAngle) -> CameraSettings:
    """
    Camera pose for one of the quick views.

    - default: fixed pose looking at the room center
    - overhead: above the room center, looking straight down
    - front: in front of the room along +z, looking at the back wall
    """
    if view == "overhead":
        height = max(room.width, room.length) * 0.75
        position = (room.width / 2, height * 1.5, room.length / 2)
        target = (room.width / 2, 0, room.length / 2)
    elif view == "front":
        position = (room.width / 2, room.height / 2, room.length * 1.5)
        target = (room.width / 2, room.height / 2, 0)
    else:
        position = DEFAULT_CAMERA.position
        target = (room.width / 2, room.height / 2, room.length / 2)

    return CameraSettings(position=position, target=target, viewAngle=view_angle)
