"""Gist storage adapter.

Implements the core SnippetStorePort. The gist is treated as a single text
document: reads and writes target one file, the configured filename or the
gist's first file.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from adapters.github_events import auth_headers


class GistStore:
    """Reads and overwrites the content of one gist file."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        gist_id: str,
        token: str,
        filename: Optional[str] = None,
    ) -> None:
        self._client = client
        self._gist_id = gist_id
        self._token = token
        self._filename = filename
        # Name of the file picked by the last get(), reused by update().
        self._resolved_filename: Optional[str] = filename

    def _endpoint(self) -> str:
        return f"/gists/{self._gist_id}"

    async def _fetch(self) -> dict[str, Any]:
        response = await self._client.get(self._endpoint(), headers=auth_headers(self._token))
        response.raise_for_status()
        return response.json()

    def _pick_file(self, gist: dict[str, Any]) -> Optional[dict[str, Any]]:
        files = gist.get("files") or {}
        if self._filename:
            return files.get(self._filename)
        # The API returns files keyed by name in insertion order.
        return next(iter(files.values()), None)

    async def _read_content(self, target: dict[str, Any]) -> Optional[str]:
        # Large files come back truncated; the full text lives at raw_url.
        if target.get("truncated") and target.get("raw_url"):
            response = await self._client.get(target["raw_url"], headers=auth_headers(self._token))
            response.raise_for_status()
            return response.text
        return target.get("content")

    async def get(self) -> Optional[str]:
        """Return the current file content, or None when there is no file yet."""

        target = self._pick_file(await self._fetch())
        if target is None:
            return None
        self._resolved_filename = target.get("filename") or self._filename
        return await self._read_content(target)

    async def update(self, content: str) -> None:
        """Overwrite the file content in a single PATCH."""

        filename = self._resolved_filename
        if not filename:
            target = self._pick_file(await self._fetch())
            if target is None:
                raise RuntimeError(
                    f"Gist {self._gist_id} has no file to update; set gist.filename in config.json"
                )
            filename = self._resolved_filename = target["filename"]

        response = await self._client.patch(
            self._endpoint(),
            json={"files": {filename: {"content": content}}},
            headers=auth_headers(self._token),
        )
        response.raise_for_status()
