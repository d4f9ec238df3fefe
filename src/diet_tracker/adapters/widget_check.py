"""Reachability check for the feedback widget script."""

from dataclasses import dataclass

import httpx

from diet_tracker.services.feedback import ScriptChecker


@dataclass
class HttpxScriptChecker(ScriptChecker):
    """Issues a HEAD request against the widget script URL."""

    script_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 3

    @classmethod
    def create(cls, script_url: str) -> "HttpxScriptChecker":
        """Create a checker with a managed httpx session."""
        return cls(script_url=script_url, http_client=httpx.AsyncClient())

    async def is_reachable(self) -> bool:
        """Return True when the script URL answers with a success status."""
        response = await self.http_client.head(
            self.script_url, timeout=self.timeout_seconds, follow_redirects=True
        )
        return response.is_success

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
