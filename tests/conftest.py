import asyncio
import copy
import os
import tempfile
import uuid

import pytest

# Keep storage out of the package directory; must happen before room_designer.config is imported
os.environ.setdefault("ROOM_DESIGNER_DATA_DIR", tempfile.mkdtemp(prefix="room-designer-test-"))

from fastapi.testclient import TestClient  # noqa: E402

from room_designer.db.connection import init_databases, close_databases  # noqa: E402
from room_designer.main import app  # noqa: E402
from room_designer.project_client import ProjectServiceError  # noqa: E402


@pytest.fixture
def anyio_backend():
    return 'asyncio'


@pytest.fixture
def db(tmp_path):
    init_databases(tmp_path / "designer.db")
    yield
    close_databases()


@pytest.fixture
def client(db):
    return TestClient(app)


class FakeProjectService:
    """In-memory stand-in for ProjectServiceClient."""

    def __init__(self, products=None):
        self.projects: dict[str, dict] = {}
        self.products = products or []
        self.calls: list[tuple] = []
        self.fail = False
        self.observer = None
        self.saving_seen: list[bool] = []

    def _check(self, name, *args):
        self.calls.append((name,) + args)
        if self.observer is not None:
            self.saving_seen.append(self.observer.is_saving)
        if self.fail:
            raise ProjectServiceError(f"{name} failed")

    async def get_all_products(self):
        self._check("get_all_products")
        return copy.deepcopy(self.products)

    async def get_project(self, project_id):
        self._check("get_project", project_id)
        if project_id not in self.projects:
            raise ProjectServiceError(f"GET /api/projects/{project_id} failed: 404")
        return copy.deepcopy(self.projects[project_id])

    async def create_project(self, fields):
        self._check("create_project", fields)
        await asyncio.sleep(0)
        project_id = str(uuid.uuid4())
        self.projects[project_id] = {**fields, "$id": project_id}
        return copy.deepcopy(self.projects[project_id])

    async def update_project(self, project_id, fields):
        self._check("update_project", project_id, fields)
        await asyncio.sleep(0)
        if project_id not in self.projects:
            raise ProjectServiceError(f"PUT /api/projects/{project_id} failed: 404")
        self.projects[project_id].update(fields)
        return copy.deepcopy(self.projects[project_id])

    async def delete_project(self, project_id):
        self._check("delete_project", project_id)
        if project_id not in self.projects:
            raise ProjectServiceError(f"DELETE /api/projects/{project_id} failed: 404")
        del self.projects[project_id]
        return True


@pytest.fixture
def service():
    return FakeProjectService()


SOFA = {
    "$id": "prod-sofa",
    "name": "Oak Sofa",
    "dim_width": 2,
    "dim_height": 0.9,
    "dim_depth": 2,
    "dim_sku": "m",
    "variation_texture_urls": ["/textures/oak.jpg", "/textures/walnut.jpg"],
    "model_3d_url": "/models/sofa.glb",
}


@pytest.fixture
def sofa():
    return dict(SOFA)
