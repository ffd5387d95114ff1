import json

import pytest

from room_designer.models.scene import RoomSettings, CameraSettings, FurnitureItem, Dimensions
from room_designer.serialization import stringify_project, parse_project, ProjectFormatError


def make_scene():
    return {
        "room": RoomSettings(width=6, length=8, height=3, wallColor="#e6f0f2", floorColor="#a0a0a0"),
        "camera": CameraSettings(position=(8, 5, 16), target=(3, 1.5, 4), viewAngle=50),
        "furniture": [
            FurnitureItem(
                id="prod-sofa",
                instanceId="inst-1",
                name="Oak Sofa",
                model="/models/sofa.glb",
                position=(2, 0, 3),
                rotation=(0, 1.5708, 0),
                scale=1.2,
                textureUrl="/textures/oak.jpg",
                dimensions=Dimensions(width=200, height=90, depth=95),
                dimensionSku="cm",
            )
        ],
    }


def test_stringify_encodes_scene_fields_only():
    flat = stringify_project({"name": "Loft", "designerId": "d1", **make_scene()})

    assert flat["name"] == "Loft"
    assert flat["designerId"] == "d1"
    assert json.loads(flat["room"])["width"] == 6
    assert json.loads(flat["camera"])["position"] == [8, 5, 16]
    assert json.loads(flat["furniture"])[0]["instanceId"] == "inst-1"


def test_stringify_skips_missing_scene_fields():
    flat = stringify_project({"name": "Loft", "room": None})
    assert flat == {"name": "Loft"}


def test_round_trip_restores_scene():
    scene = make_scene()
    flat = stringify_project({"$id": "p1", "name": "Loft", "designerId": "d1", **scene})

    parsed = parse_project(flat)

    assert parsed.id == "p1"
    assert parsed.room == scene["room"]
    assert parsed.camera == scene["camera"]
    assert parsed.furniture == scene["furniture"]


def test_round_trip_bare_scene():
    scene = make_scene()
    parsed = parse_project(stringify_project(scene))

    assert parsed.name is None
    assert parsed.designerId is None
    assert parsed.room == scene["room"]
    assert parsed.camera == scene["camera"]
    assert parsed.furniture == scene["furniture"]


def test_round_trip_empty_furniture():
    scene = {**make_scene(), "furniture": []}
    parsed = parse_project(stringify_project(scene))

    assert parsed.furniture == []
    assert parsed.room == scene["room"]


def test_parse_rejects_malformed_scene():
    flat = stringify_project({"$id": "p1", "name": "Loft", "designerId": "d1", **make_scene()})
    flat["furniture"] = "[{not json"

    with pytest.raises(ProjectFormatError):
        parse_project(flat)


def test_parse_rejects_missing_room_fields():
    flat = stringify_project({"name": "Loft", "designerId": "d1", **make_scene()})
    flat["room"] = json.dumps({"width": 3})

    with pytest.raises(ProjectFormatError):
        parse_project(flat)
