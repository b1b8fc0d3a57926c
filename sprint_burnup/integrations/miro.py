"""
Miro Integration for Sprint Burn-Up Board

Places shapes and images on a Miro board through the REST API v2.
"""

import logging
from typing import Literal, Optional

import httpx
from pydantic import BaseModel

from ..exceptions import MiroAPIError

logger = logging.getLogger(__name__)

MIRO_API_URL = "https://api.miro.com/v2"


# Pydantic models for request bodies
class Position(BaseModel):
    x: float
    y: float
    origin: Literal["center"] = "center"


class Geometry(BaseModel):
    width: float
    height: float


class ShapeData(BaseModel):
    content: str


class ShapeRequest(BaseModel):
    data: ShapeData
    position: Position
    geometry: Geometry


class ImageData(BaseModel):
    url: str


class ImageRequest(BaseModel):
    data: ImageData
    position: Position


class MiroClient:
    """
    Miro REST API client for one board.

    Usage:
        client = MiroClient(token="miro_token", board_id="uXjVO123=")
        shape = await client.create_shape("Sprint 1", x=0, y=0, width=150, height=50)
        image = await client.create_image("https://quickchart.io/chart?c=...", x=1000, y=0)
    """

    def __init__(
        self,
        token: str,
        board_id: str,
        url: str = MIRO_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if not all([token, board_id]):
            raise ValueError("Miro token and board id are required")

        self.token = token
        self.board_id = board_id
        self.url = url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Accept": "application/json"
        }

    async def _request(
        self,
        method: str,
        endpoint: str,
        payload: BaseModel
    ) -> dict:
        """Make authenticated request against this board."""
        url = f"{self.url}/boards/{self.board_id}{endpoint}"
        logger.debug("%s %s", method, url)

        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    json=payload.model_dump(),
                    headers=self.headers,
                    timeout=self.timeout
                )
            except httpx.HTTPError as e:
                raise MiroAPIError.from_transport_error(e) from e

            if response.is_error:
                raise MiroAPIError.from_response(response)
            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError as e:
                raise MiroAPIError.from_invalid_body(response) from e

    async def create_shape(
        self,
        content: str,
        x: float,
        y: float,
        width: float,
        height: float
    ) -> dict:
        """Create a rectangle shape centred on (x, y) holding the given text."""
        payload = ShapeRequest(
            data=ShapeData(content=content),
            position=Position(x=x, y=y),
            geometry=Geometry(width=width, height=height)
        )
        return await self._request("POST", "/shapes", payload)

    async def create_image(self, image_url: str, x: float, y: float) -> dict:
        """Create an image widget from a public URL, centred on (x, y)."""
        payload = ImageRequest(
            data=ImageData(url=image_url),
            position=Position(x=x, y=y)
        )
        return await self._request("POST", "/images", payload)
