"""Async HTTP client for the MERN Buddy API.

The session (token and user) lives on an explicit ``Session`` object owned
by the caller; it is loaded on login and cleared on logout.
"""
import asyncio
from datetime import datetime
from typing import Any, Optional

import httpx

from mern_buddy.models.goal import Goal, GoalCreate, GoalUpdate
from mern_buddy.models.stats import Dashboard
from mern_buddy.models.topic import Topic, TopicCategory, TopicCreate, TopicUpdate
from mern_buddy.models.user import User
from mern_buddy.utils.stats import compute_progress_stats


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class Session:
    """Authenticated user state for one client."""

    def __init__(self, token: Optional[str] = None, user: Optional[User] = None):
        self.token = token
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        """Whether a token is loaded."""
        return self.token is not None

    def load(self, token: str, user: Optional[User] = None) -> None:
        """Start a session after a successful login."""
        self.token = token
        self.user = user

    def clear(self) -> None:
        """Forget the token and user (logout or failed login)."""
        self.token = None
        self.user = None


class MernBuddyClient:
    """
    Client for the MERN Buddy REST API.

    Failed calls raise ApiError carrying the server's message. Nothing is
    retried and no local state is changed before the server confirms.

    Example:
        async with MernBuddyClient("http://localhost:5000") as client:
            await client.login("me@example.com", "secret123")
            dashboard = await client.load_dashboard()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        session: Optional[Session] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session or Session()
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport)

    async def __aenter__(self) -> "MernBuddyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    def _headers(self) -> dict:
        if not self.session.is_authenticated:
            return {}
        return {"Authorization": f"Bearer {self.session.token}"}

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.reason_phrase

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        """
        Send a request with the session token and decode the JSON body.

        Raises:
            ApiError: If the server answers with a 4xx or 5xx status
        """
        response = await self._http.request(
            method, path, json=json, headers=self._headers()
        )
        if response.is_error:
            raise ApiError(response.status_code, self._error_message(response))
        return response.json()

    # Auth

    async def register(self, email: str, password: str, name: str = "") -> User:
        """Create an account. Does not log in."""
        data = await self._request(
            "POST",
            "/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        return User.model_validate(data)

    async def login(self, email: str, password: str) -> User:
        """Log in and load the session with the token and user."""
        data = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        self.session.load(data["access_token"])
        try:
            user = await self.me()
        except Exception:
            self.session.clear()
            raise
        self.session.user = user
        return user

    def logout(self) -> None:
        """Drop the session; the server keeps no session state."""
        self.session.clear()

    async def me(self) -> User:
        """Fetch the user the session token belongs to."""
        return User.model_validate(await self._request("GET", "/auth/me"))

    # Topics

    async def list_topics(self) -> list[Topic]:
        """All of the caller's topics, newest first."""
        data = await self._request("GET", "/topics")
        return [Topic.model_validate(item) for item in data]

    async def list_topics_by_category(self, category: TopicCategory | str) -> list[Topic]:
        """The caller's topics in one MERN category."""
        category = TopicCategory(category)
        data = await self._request("GET", f"/topics/category/{category.value}")
        return [Topic.model_validate(item) for item in data]

    async def create_topic(self, topic: TopicCreate) -> Topic:
        """Create a topic owned by the session user."""
        data = await self._request(
            "POST", "/topics", json=topic.model_dump(mode="json", by_alias=True)
        )
        return Topic.model_validate(data)

    async def update_topic(self, topic_id: str, topic_update: TopicUpdate) -> Topic:
        """Send only the fields set on ``topic_update``."""
        data = await self._request(
            "PUT",
            f"/topics/{topic_id}",
            json=topic_update.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return Topic.model_validate(data)

    async def delete_topic(self, topic_id: str) -> dict:
        """Permanently delete a topic."""
        return await self._request("DELETE", f"/topics/{topic_id}")

    # Goals

    async def list_goals(self) -> list[Goal]:
        """All of the caller's goals, soonest target date first."""
        data = await self._request("GET", "/goals")
        return [Goal.model_validate(item) for item in data]

    async def list_upcoming_goals(self) -> list[Goal]:
        """Uncompleted goals due within the server's upcoming window."""
        data = await self._request("GET", "/goals/upcoming")
        return [Goal.model_validate(item) for item in data]

    async def create_goal(self, goal: GoalCreate) -> Goal:
        """Create an uncompleted goal owned by the session user."""
        data = await self._request(
            "POST", "/goals", json=goal.model_dump(mode="json", by_alias=True)
        )
        return Goal.model_validate(data)

    async def update_goal(self, goal_id: str, goal_update: GoalUpdate) -> Goal:
        """Send only the fields set on ``goal_update``."""
        data = await self._request(
            "PUT",
            f"/goals/{goal_id}",
            json=goal_update.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return Goal.model_validate(data)

    async def delete_goal(self, goal_id: str) -> dict:
        """Permanently delete a goal."""
        return await self._request("DELETE", f"/goals/{goal_id}")

    # Dashboard

    async def load_dashboard(self, now: Optional[datetime] = None) -> Dashboard:
        """
        Fetch topics and goals concurrently and compute the stats locally.

        Either fetch failing fails the whole load.
        """
        topics, goals = await asyncio.gather(self.list_topics(), self.list_goals())
        return Dashboard(
            topics=topics,
            goals=goals,
            stats=compute_progress_stats(topics, goals, now=now),
        )
