"""Async HTTP client for the club's players and player-details endpoints.

Endpoints (relative to ``settings.api_base_url``):

    GET  /players                      -> list of player documents
    GET  /player-details/{username}    -> one stat record
    PUT  /player-details/{username}    -> {"success": bool, "message": str}
    POST /players/{username}/like      -> {"likes": int}

Usage::

    async with ClubApiClient() as client:
        roster = await client.list_players()
        stats = await client.get_player_details("rsharma")
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from clubstats.config import settings
from clubstats.stats.errors import FetchError, SaveError
from clubstats.stats.models import PlayerIdentity, StatRecord
from clubstats.utils import async_retry

logger = structlog.get_logger(__name__)


class ClubApiClient:
    """Thin wrapper over ``httpx.AsyncClient``.

    Pass ``client`` to reuse an existing ``httpx.AsyncClient`` (tests inject
    one built on ``httpx.MockTransport``); it is then not closed by us.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.fetch_timeout,
        )

    async def __aenter__(self) -> ClubApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @async_retry(max_attempts=2, base_delay=0.5, exceptions=(httpx.TransportError,))
    async def list_players(self) -> list[PlayerIdentity]:
        """Fetch the full roster, all statuses included.

        Player documents that fail validation (no username, say) are logged
        and skipped.
        """
        resp = await self._client.get("/players")
        resp.raise_for_status()
        players: list[PlayerIdentity] = []
        for doc in resp.json():
            try:
                players.append(PlayerIdentity.model_validate(doc))
            except ValidationError as exc:
                logger.warning("player_skipped", document=doc, error=str(exc))
        return players

    @async_retry(max_attempts=2, base_delay=0.5, exceptions=(httpx.TransportError,))
    async def _get_details(self, username: str) -> httpx.Response:
        return await self._client.get(f"/player-details/{username}")

    async def get_player_details(self, username: str) -> StatRecord:
        """Fetch one player's stat record.

        Raises:
            FetchError: On a non-2xx response or a network failure.
        """
        try:
            resp = await self._get_details(username)
        except httpx.HTTPError as exc:
            raise FetchError(username, str(exc)) from exc
        if not resp.is_success:
            raise FetchError(username, f"HTTP {resp.status_code}")
        return StatRecord.model_validate(resp.json())

    @async_retry(max_attempts=3, base_delay=1.0, exceptions=(httpx.TransportError,))
    async def _put_details(self, username: str, body: dict[str, Any]) -> httpx.Response:
        return await self._client.put(
            f"/player-details/{username}", json=body, timeout=settings.save_timeout
        )

    async def put_player_details(self, username: str, record: StatRecord) -> str:
        """Overwrite a player's full stat record.

        Returns:
            The server's confirmation message.

        Raises:
            SaveError: On a non-2xx response, ``success: false``, or a
                network failure.
        """
        try:
            resp = await self._put_details(username, record.to_document())
        except httpx.HTTPError as exc:
            raise SaveError(username, str(exc)) from exc

        try:
            payload = resp.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        if not resp.is_success or not payload.get("success", False):
            reason = payload.get("message") or f"HTTP {resp.status_code}"
            raise SaveError(username, reason)

        logger.info("player_details_saved", username=username)
        return payload.get("message", "")

    async def like_player(self, username: str, liked: bool = True) -> int:
        """Add (or withdraw) a like and return the new like count."""
        resp = await self._client.post(f"/players/{username}/like", json={"liked": liked})
        resp.raise_for_status()
        return int(resp.json()["likes"])
