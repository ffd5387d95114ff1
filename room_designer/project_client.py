"""
Async client for the design project / catalog service.
This is the persistence collaborator used by the RoomDesigner store.
"""

import base64
import logging
from typing import Optional, Union

import httpx

from room_designer.config import API_URL, API_TIMEOUT

logger = logging.getLogger(__name__)


class ProjectServiceError(Exception):
    """Error talking to the project service."""
    pass


def decode_data_url(data_url: str) -> bytes:
    """Decode a `data:image/png;base64,...` URL (as produced by a canvas capture)."""
    if "," not in data_url:
        raise ValueError("Not a data URL")
    return base64.b64decode(data_url.split(",", 1)[1])


class ProjectServiceClient:
    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = API_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport
        ) as client:
            try:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
            except httpx.TimeoutException:
                raise ProjectServiceError(f"{method} {path} timed out")
            except httpx.HTTPStatusError as e:
                raise ProjectServiceError(f"{method} {path} failed: {e.response.status_code}")
            except httpx.RequestError as e:
                raise ProjectServiceError(f"{method} {path} error: {str(e)}")
        return response

    async def _json(self, method: str, path: str, **kwargs):
        """Request and decode a JSON body. A non-JSON body is a service error."""
        response = await self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError:
            raise ProjectServiceError(f"{method} {path} returned a non-JSON body")

    # ============ Catalog ============

    async def get_all_products(self) -> list[dict]:
        return await self._json("GET", "/api/products/")

    # ============ Design projects ============

    async def get_project(self, project_id: str) -> dict:
        return await self._json("GET", f"/api/projects/{project_id}")

    async def get_designer_projects(self, designer_id: str) -> list[dict]:
        return await self._json("GET", f"/api/projects/designer/{designer_id}")

    async def create_project(self, fields: dict) -> dict:
        project = await self._json("POST", "/api/projects/", json=fields)
        logger.info(f"Created design project {project.get('$id')}")
        return project

    async def update_project(self, project_id: str, fields: dict) -> dict:
        return await self._json("PUT", f"/api/projects/{project_id}", json=fields)

    async def delete_project(self, project_id: str) -> bool:
        await self._request("DELETE", f"/api/projects/{project_id}")
        return True

    # ============ Thumbnails ============

    async def upload_thumbnail(self, project_id: str, image: Union[bytes, str]) -> str:
        """Upload a thumbnail (raw bytes or data URL) and return its URL."""
        if isinstance(image, str):
            image = decode_data_url(image)

        body = await self._json(
            "POST",
            f"/api/files/projects/{project_id}/thumbnail",
            files={"file": (f"project-{project_id}.png", image, "image/png")}
        )
        if "url" not in body:
            raise ProjectServiceError(f"Thumbnail upload for {project_id} returned no url")
        return body["url"]

    async def delete_thumbnail(self, project_id: str) -> bool:
        """Delete a project's thumbnail. Failures are logged, not raised."""
        try:
            await self._request("DELETE", f"/api/files/projects/{project_id}/thumbnail")
            return True
        except ProjectServiceError as e:
            logger.error(f"Error deleting thumbnail for {project_id}: {e}")
            return False

    async def update_project_thumbnail(
        self,
        project_id: str,
        image: Union[bytes, str],
        current_thumbnail_url: Optional[str] = None
    ) -> str:
        """Replace a project's thumbnail, removing the previous one first."""
        if current_thumbnail_url:
            await self.delete_thumbnail(project_id)
        return await self.upload_thumbnail(project_id, image)
