"""HTTP client for the samay-sahayak API.

Used by the CLI views; every call maps one-to-one onto an API endpoint and
returns the decoded JSON envelope.
"""

import logging
from typing import Any

import httpx

from . import config
from .exceptions import ApiError

logger = logging.getLogger(__name__)

API_TIMEOUT = 60.0


class PlannerApiClient:
    """Async client for the planner REST API.

    Use as an async context manager::

        async with PlannerApiClient() as api:
            result = await api.fetch_timetables("u1")
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_prefix: str | None = None,
        timeout: float = API_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.api_prefix = api_prefix if api_prefix is not None else config.API_PREFIX
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}{self.api_prefix}",
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "PlannerApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise ApiError(
                "Request timed out", status_code=504, details=str(e)
            ) from e
        except httpx.HTTPError as e:
            raise ApiError(
                "Network error. Please check your connection and ensure the backend is running.",
                status_code=503,
                details=str(e),
            ) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if response.is_error:
            logger.error("%s %s returned %d", method, path, response.status_code)
            raise ApiError(
                body.get("error") or f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                details=body.get("details"),
            )
        return body

    # Generation

    async def generate_timetable(
        self,
        tasks: list[dict],
        technique: dict,
        session_config: dict,
        user_preferences: dict | None = None,
    ) -> dict:
        return await self._request(
            "POST",
            "/generate-timetable",
            json={
                "tasks": tasks,
                "technique": technique,
                "sessionConfig": session_config,
                "userPreferences": user_preferences,
            },
        )

    async def generate_ceo_timetable(
        self, random_plan: str, user_preferences: dict | None = None
    ) -> dict:
        return await self._request(
            "POST",
            "/generate-ceo-timetable",
            json={"randomPlan": random_plan, "userPreferences": user_preferences},
        )

    # Timetables

    async def save_timetable(self, user_id: str, timetable: dict) -> dict:
        return await self._request(
            "POST", "/timetables", json={"userId": user_id, "timetable": timetable}
        )

    async def fetch_timetables(self, user_id: str) -> dict:
        return await self._request("GET", "/timetables", params={"userId": user_id})

    async def get_timetable(self, timetable_id: str) -> dict:
        return await self._request("GET", f"/timetables/{timetable_id}")

    async def delete_timetable(self, timetable_id: str) -> dict:
        return await self._request("DELETE", f"/timetables/{timetable_id}")

    # Analytics

    async def save_analytics(self, analytics: dict) -> dict:
        return await self._request("POST", "/analytics", json=analytics)

    async def fetch_analytics(
        self,
        user_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> dict:
        """Fetch records and aggregate metrics; omitted bounds are open."""
        params = {"userId": user_id}
        if start_date:
            params["startDate"] = start_date
        if end_date:
            params["endDate"] = end_date
        return await self._request("GET", "/analytics", params=params)

    async def update_task_completion(
        self, user_id: str, date: str, task_id: str, completed: bool
    ) -> dict:
        return await self._request(
            "PUT",
            "/analytics/task",
            json={"userId": user_id, "date": date, "taskId": task_id, "completed": completed},
        )

    async def reset_analytics(self, user_id: str) -> dict:
        return await self._request("DELETE", "/analytics", params={"userId": user_id})

    async def health(self) -> dict:
        return await self._request("GET", "/health")
