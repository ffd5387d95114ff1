import asyncio
import json
import random
from types import SimpleNamespace

import pytest

from room_designer.designer import RoomDesigner, ViewportBinding
from room_designer.serialization import stringify_project

pytestmark = pytest.mark.anyio


@pytest.fixture
def designer(service):
    store = RoomDesigner(service=service, rng=random.Random(3))
    service.observer = store
    return store


def stored_project(project_id="p1", width=5):
    return {
        **stringify_project({
            "name": "Studio",
            "designerId": "designer-1",
            "status": "In Progress",
            "room": {"width": width, "length": 6, "height": 2.8, "wallColor": "#fff", "floorColor": "#ccc"},
            "camera": {"position": [1, 2, 3], "target": [2, 0, 3], "viewAngle": 40},
            "furniture": [{
                "id": "prod-lamp",
                "instanceId": "lamp-1",
                "name": "Lamp",
                "model": "/models/lamp.glb",
                "position": [1, 0, 1],
                "rotation": [0, 0, 0],
                "scale": 1,
                "dimensions": {"width": 30, "height": 150, "depth": 30},
                "dimensionSku": "cm",
            }],
        }),
        "$id": project_id,
    }


async def test_save_new_project_creates_draft(designer, service, sofa):
    designer.add_furniture(sofa)

    assert await designer.save_project({"name": "Living", "designerId": "designer-1"}) is True

    name, fields = service.calls[-1]
    assert name == "create_project"
    assert fields["status"] == "Draft"
    assert json.loads(fields["room"])["width"] == 8
    assert json.loads(fields["furniture"])[0]["id"] == "prod-sofa"

    assert designer.current_project is not None
    assert designer.current_project.id in service.projects
    assert designer.current_project.furniture[0].name == "Oak Sofa"
    assert designer.is_saving is False
    assert service.saving_seen == [True]


async def test_save_existing_project_updates(designer, service, sofa):
    await designer.save_project({"name": "Living", "designerId": "designer-1"})
    project_id = designer.current_project.id

    designer.add_furniture(sofa)
    assert await designer.save_project({"name": "Living v2"}) is True

    name, updated_id, fields = service.calls[-1]
    assert name == "update_project"
    assert updated_id == project_id
    assert "status" not in fields
    assert designer.current_project.name == "Living v2"
    assert len(designer.current_project.furniture) == 1


async def test_save_captures_camera_first(designer, service):
    viewport = ViewportBinding(
        camera=SimpleNamespace(position=(2, 3, 4), fov=35),
        controls=SimpleNamespace(target=(1, 1, 1)),
    )
    await designer.save_project({"name": "Cam", "designerId": "d"}, viewport=viewport)

    _, fields = service.calls[-1]
    assert json.loads(fields["camera"]) == {"position": [2, 3, 4], "target": [1, 1, 1], "viewAngle": 35}


async def test_failed_save_returns_false_and_keeps_state(designer, service, sofa):
    designer.add_furniture(sofa)
    service.fail = True

    assert await designer.save_project({"name": "Living", "designerId": "designer-1"}) is False
    assert designer.current_project is None
    assert len(designer.furniture) == 1
    assert designer.is_saving is False


async def test_concurrent_saves_are_not_guarded(designer, service):
    results = await asyncio.gather(
        designer.save_project({"name": "A", "designerId": "d"}),
        designer.save_project({"name": "A", "designerId": "d"}),
    )

    assert results == [True, True]
    assert [c[0] for c in service.calls] == ["create_project", "create_project"]
    assert service.saving_seen == [True, True]


async def test_load_project_replaces_scene(designer, service, sofa):
    service.projects["p1"] = stored_project()
    designer.add_furniture(sofa)
    designer.add_furniture(sofa)

    project = await designer.load_project("p1")

    assert project.id == "p1"
    assert designer.current_project is project
    assert designer.room.width == 5
    assert designer.camera.viewAngle == 40
    assert [item.instanceId for item in designer.furniture] == ["lamp-1"]
    assert designer.selected_item_index is None
    assert designer.is_loading is False


async def test_load_missing_project_returns_none(designer, sofa):
    designer.add_furniture(sofa)

    assert await designer.load_project("missing") is None
    assert len(designer.furniture) == 1
    assert designer.room.width == 8
    assert designer.is_loading is False


async def test_load_malformed_project_applies_nothing(designer, service):
    broken = stored_project()
    broken["furniture"] = "not json"
    service.projects["p1"] = broken

    assert await designer.load_project("p1") is None
    assert designer.room.width == 8
    assert designer.current_project is None


async def test_delete_current_project_clears_pointer_only(designer, service):
    service.projects["p1"] = stored_project()
    await designer.load_project("p1")

    assert await designer.delete_project("p1") is True
    assert designer.current_project is None
    assert designer.room.width == 5
    assert len(designer.furniture) == 1


async def test_delete_other_project_keeps_pointer(designer, service):
    service.projects["p1"] = stored_project("p1")
    service.projects["p2"] = stored_project("p2")
    await designer.load_project("p1")

    assert await designer.delete_project("p2") is True
    assert designer.current_project.id == "p1"


async def test_delete_failure_returns_false(designer):
    assert await designer.delete_project("missing") is False


async def test_load_products(service, designer, sofa):
    service.products = [sofa]

    products = await designer.load_products()

    assert [p.id for p in products] == ["prod-sofa"]
    assert designer.is_loading is False
    assert designer.add_furniture(products[0]).value == "applied"


async def test_load_products_failure(service, designer):
    service.fail = True
    assert await designer.load_products() == []
