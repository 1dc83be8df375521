# -*- coding: utf-8 -*-
"""
    wellnesshub.client
    ~~~~~~~~~~~~~~~~~~

    Async client for the WellnessHub API and debounced autosave of edited drafts.
"""

import asyncio
from datetime import datetime
from typing import Any

import httpx

from common.config import CONFIG
from common.core import get_component_logger
from common.models import api as ma
from common.models.enums import SessionStatus
from common.models.session import PublishedSession, Session
from common.models.validation import utc_now

logger = get_component_logger()

WELLNESSHUB_URL = str(CONFIG.WELLNESSHUB_URL).rstrip("/")


class SessionsClient:
    """
    Client for the session and auth endpoints.

    Non-2xx responses raise `httpx.HTTPStatusError`.

    :param base_url: API base URL (without the API prefix)
    :param token: auth token of the caller
    :param transport: custom httpx transport (e.g. ASGI transport for an in-process app)
    """

    def __init__(
            self,
            base_url: str = WELLNESSHUB_URL,
            token: str | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/") + CONFIG.API_PREFIX
        self.token = token
        self.transport = transport

    @property
    def headers(self) -> dict[str, str]:
        headers = {"accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        async with httpx.AsyncClient(transport=self.transport) as client:
            res = await client.request(
                method=method,
                url=f"{self.base_url}{path}",
                headers=self.headers,
                timeout=httpx.Timeout(10, connect=5),
                **kwargs,
            )

        res.raise_for_status()
        return res.json()

    ##########
    ## AUTH ##
    ##########

    async def register(self, email: str, password: str) -> ma.AuthToken:
        res = ma.AuthToken.model_validate(
            await self._request("POST", "/auth/register", json={"email": email, "password": password})
        )
        self.token = res.token
        return res

    async def login(self, email: str, password: str) -> ma.AuthToken:
        res = ma.AuthToken.model_validate(
            await self._request("POST", "/auth/login", json={"email": email, "password": password})
        )
        self.token = res.token
        return res

    ##############
    ## SESSIONS ##
    ##############

    async def list_published(self) -> list[PublishedSession]:
        return [PublishedSession.model_validate(x) for x in await self._request("GET", "/sessions")]

    async def list_mine(self, status: SessionStatus | None = None) -> list[Session]:
        params = {"status": SessionStatus(status).value} if status else None
        return [Session.model_validate(x) for x in await self._request("GET", "/sessions/my-sessions", params=params)]

    async def get_session(self, session_id: str) -> Session:
        return Session.model_validate(await self._request("GET", f"/sessions/my-sessions/{session_id}"))

    async def save_draft(
            self,
            title: str,
            tags: str | list[str] | None = None,
            json_file_url: str | None = None,
            session_id: str | None = None,
    ) -> ma.SessionEnvelope:
        payload = self._save_payload(title, tags, json_file_url, session_id)
        return ma.SessionEnvelope.model_validate(
            await self._request("POST", "/sessions/my-sessions/save-draft", json=payload)
        )

    async def publish(
            self,
            title: str,
            json_file_url: str,
            tags: str | list[str] | None = None,
            session_id: str | None = None,
    ) -> ma.SessionEnvelope:
        payload = self._save_payload(title, tags, json_file_url, session_id)
        return ma.SessionEnvelope.model_validate(
            await self._request("POST", "/sessions/my-sessions/publish", json=payload)
        )

    async def delete_session(self, session_id: str) -> ma.Message:
        return ma.Message.model_validate(await self._request("DELETE", f"/sessions/my-sessions/{session_id}"))

    @staticmethod
    def _save_payload(title, tags, json_file_url, session_id) -> dict[str, Any]:
        payload = {"title": title, "tags": tags if tags is not None else []}

        # empty URL is not sent at all
        if json_file_url and json_file_url.strip():
            payload["json_file_url"] = json_file_url
        if session_id:
            payload["sessionId"] = session_id

        return payload


class DraftAutoSaver:
    """
    Save the edited session as a draft after a period of inactivity.

    Every `schedule` call replaces the pending (not yet started) save, so only the last scheduled
    state is saved. A save already sent to the API is never cancelled: the next one waits for it,
    so that the session ID returned by the first save is reused and no duplicate session is created.

    :param client: API client of the caller
    :param session_id: ID of the edited session (None for a new one)
    :param delay: inactivity in seconds before saving
    """

    def __init__(self, client: SessionsClient, session_id: str | None = None, delay: float | None = None):
        self.client = client
        self.session_id = session_id
        self.delay = CONFIG.AUTOSAVE_DELAY if delay is None else delay

        self.status = ""
        self.last_saved: datetime | None = None
        self._task: asyncio.Task | None = None
        self._saving: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return any(t is not None and not t.done() for t in (self._task, self._saving))

    def schedule(self, title: str, tags: str | list[str] | None = None, json_file_url: str | None = None):
        """Schedule a save of the given editor state; an empty title only cancels the pending save."""

        self.cancel()

        if not title or not title.strip():
            return

        self._task = asyncio.get_running_loop().create_task(self._save_later(title, tags, json_file_url))

    def cancel(self):
        """Cancel the pending save; a save in flight still finishes."""

        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def flush(self):
        """Wait for the pending save and the save in flight (if any) to finish."""

        if tasks := {t for t in (self._task, self._saving) if t is not None}:
            await asyncio.wait(tasks)

    async def _save_later(self, title: str, tags: str | list[str] | None, json_file_url: str | None):
        await asyncio.sleep(self.delay)

        if self._saving is not None:
            await asyncio.wait({self._saving})

        # separate task, cancelling `_task` from now on leaves the request running
        self._saving = asyncio.get_running_loop().create_task(self._save(title, tags, json_file_url))
        await asyncio.wait({self._saving})

    async def _save(self, title: str, tags: str | list[str] | None, json_file_url: str | None):
        self.status = "saving"

        try:
            res = await self.client.save_draft(
                title=title,
                tags=tags,
                json_file_url=json_file_url,
                session_id=self.session_id,
            )
        except httpx.HTTPError as e:
            self.status = "failed"
            logger.warning("Autosave of session %s failed: %s", self.session_id or "(new)", e)
            return

        self.session_id = res.session.id
        self.last_saved = utc_now()
        self.status = "saved"
        logger.debug("Autosaved session %s", self.session_id)
