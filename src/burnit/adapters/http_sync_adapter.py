"""HTTPX-backed sync adapter talking to the Burnit REST API."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, TypeVar

import httpx

from burnit.domain.entries import FoodEntry
from burnit.domain.errors import (
    NetworkError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from burnit.domain.favorites import FavoriteFood, favorite_from_entry
from burnit.domain.goals import Goal
from burnit.serialization import (
    entry_create_payload,
    entry_from_dict,
    goal_from_dict,
    goal_to_dict,
    patch_to_dict,
)
from burnit.services.sync import SyncAdapter

T = TypeVar("T")


@dataclass
class HttpxSyncAdapter(SyncAdapter):
    """Sync adapter that persists through the REST backend."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def create(cls, base_url: str, timeout: float = 10.0) -> "HttpxSyncAdapter":
        """Create an adapter with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def create_entry(self, entry: FoodEntry) -> FoodEntry:
        response = await self._request(
            "POST", "/foods", json=entry_create_payload(entry)
        )
        return _decode(response, entry_from_dict)

    async def update_entry(self, entry_id: int, patch: dict[str, object]) -> None:
        await self._request("PUT", f"/foods/{entry_id}", json=patch_to_dict(patch))

    async def delete_entry(self, entry_id: int) -> None:
        await self._request("DELETE", f"/foods/{entry_id}")

    async def list_entries(
        self,
        day: date,
        meal_type: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[FoodEntry]:
        params: dict[str, str] = {"date": day.isoformat()}
        if meal_type:
            params["meal_type"] = meal_type
        if is_favorite is not None:
            params["is_favorite"] = "true" if is_favorite else "false"
        response = await self._request("GET", "/foods", params=params)
        return _decode(response, _entries_from_rows)

    async def get_goal(self, day: date) -> Goal:
        response = await self._request("GET", f"/goals/{day.isoformat()}")
        goal = _decode(response, goal_from_dict)
        return goal if goal.day else replace(goal, day=day)

    async def set_goal(self, goal: Goal) -> Goal:
        response = await self._request("POST", "/goals", json=goal_to_dict(goal))
        return _decode(response, goal_from_dict)

    async def list_favorites(self) -> list[FavoriteFood]:
        response = await self._request(
            "GET", "/foods", params={"is_favorite": "true"}
        )
        entries = _decode(response, _entries_from_rows)
        return [favorite_from_entry(entry) for entry in entries]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(  # type: ignore[no-untyped-def]
        self, method: str, path: str, **kwargs
    ) -> httpx.Response:
        try:
            response = await self.http_client.request(
                method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs
            )
        except httpx.TransportError as exc:
            raise NetworkError(f"{method} {path} failed: {exc}") from exc
        if response.status_code == httpx.codes.BAD_REQUEST:
            raise ValidationError(_error_message(response))
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(_error_message(response))
        if response.is_error:
            raise ServerError(_error_message(response))
        return response


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"HTTP {response.status_code}"


def _decode(response: httpx.Response, parse: Callable[[Any], T]) -> T:
    """Parse a successful response body, treating a malformed one as a server fault."""
    try:
        return parse(response.json())
    except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as exc:
        raise ServerError(
            f"Malformed response from {response.request.method} "
            f"{response.request.url.path}: {exc}"
        ) from exc


def _entries_from_rows(rows: list[dict[str, object]]) -> list[FoodEntry]:
    if not isinstance(rows, list):
        raise TypeError(f"expected a list of entries, got {type(rows).__name__}")
    return [entry_from_dict(row) for row in rows]
