"""
DineOnCampus fetcher – one GET per call, decoded into a typed response.
"""

from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from core.errors import DecodeError
from core.infra.http import HttpClient

from .schemas import DiningHallResponse, OperationHoursResponse

logger = logging.getLogger(__name__)

__all__ = ["MenuFetcher"]

ModelT = TypeVar("ModelT", bound=BaseModel)


class MenuFetcher:
    """Fetches menu and weekly-schedule payloads from the location API."""

    name = "MenuFetcher"

    def __init__(self, http: Optional[HttpClient] = None, *, timeout: float = 30.0) -> None:
        self._http = http or HttpClient(timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_):
        await self._http.close()

    async def fetch(self, url: str, model: Type[ModelT]) -> ModelT:
        """GET ``url`` and validate the JSON body against ``model``.

        Raises :class:`~core.errors.TransportError` when the request fails and
        :class:`~core.errors.DecodeError` when the body does not match.
        """
        body = await self._http.get_bytes(url)
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(url, f"{e.error_count()} validation error(s), first: {e.errors()[0]['msg']}") from e

    async def fetch_menu(self, url: str) -> DiningHallResponse:
        return await self.fetch(url, DiningHallResponse)

    async def fetch_operation_hours(self, url: str) -> OperationHoursResponse:
        return await self.fetch(url, OperationHoursResponse)
