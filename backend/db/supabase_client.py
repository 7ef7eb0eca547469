"""Minimal Supabase PostgREST client used by backend repositories only."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any
from urllib.error import HTTPError
from urllib.parse import urlencode
from urllib.request import Request, urlopen


@dataclass(slots=True)
class SupabaseSettings:
    url: str
    service_role_key: str


class SupabaseClient:
    def __init__(self, settings: SupabaseSettings) -> None:
        self.settings = settings

    def _headers(self) -> dict[str, str]:
        api_key = self.settings.service_role_key
        return {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    def _send(self, request: Request) -> list[dict[str, Any]]:
        try:
            with urlopen(request) as response:  # noqa: S310 - URL comes from trusted env config
                return json.loads(response.read().decode("utf-8"))
        except HTTPError as exc:
            body = exc.read().decode("utf-8", errors="replace")[:500]
            raise RuntimeError(
                f"Supabase request failed with status {exc.code}: {body}"
            ) from exc

    def get_rows(
        self,
        *,
        table: str,
        query: dict[str, str | int] | list[tuple[str, str | int]],
    ) -> list[dict[str, Any]]:
        """Fetch rows from PostgREST; repeated filter keys are kept via `doseq`."""

        encoded_query = urlencode(query, doseq=True)
        request = Request(
            url=f"{self.settings.url}/rest/v1/{table}?{encoded_query}",
            headers=self._headers(),
            method="GET",
        )
        return self._send(request)

    def post_rows(
        self,
        *,
        table: str,
        payload: dict[str, object] | list[dict[str, object]],
        query: dict[str, str | int] | None = None,
    ) -> list[dict[str, Any]]:
        """Insert rows and return the created representation."""

        suffix = f"?{urlencode(query, doseq=True)}" if query else ""
        request = Request(
            url=f"{self.settings.url}/rest/v1/{table}{suffix}",
            data=json.dumps(payload).encode("utf-8"),
            headers=self._headers(),
            method="POST",
        )
        return self._send(request)
