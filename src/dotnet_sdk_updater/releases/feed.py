"""HTTP client for the .NET release notes feed."""

from __future__ import annotations

import asyncio

import httpx
from pydantic import ValidationError

from dotnet_sdk_updater import __version__
from dotnet_sdk_updater.constants import (
    DEFAULT_HTTP_RETRIES,
    DEFAULT_RELEASES_BASE_URL,
    HTTP_RETRY_DELAY_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    RELEASES_FILE_NAME,
    USER_AGENT,
)
from dotnet_sdk_updater.errors import FeedUnavailableError
from dotnet_sdk_updater.logging import get_logger
from dotnet_sdk_updater.releases.models import ReleaseChannel

log = get_logger("dotnet_sdk_updater.releases.feed")


class ReleaseFeedClient:
    """Downloads and parses ``releases.json`` for a channel.

    Transport errors and 5xx responses are retried up to ``retries`` extra
    times with a linear back-off.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_RELEASES_BASE_URL,
        retries: int = DEFAULT_HTTP_RETRIES,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        retry_delay: float = HTTP_RETRY_DELAY_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._retries = retries
        self._timeout = timeout
        self._retry_delay = retry_delay

    def url_for(self, channel: str) -> str:
        return f"{self._base_url}/{channel}/{RELEASES_FILE_NAME}"

    async def get_channel(self, channel: str) -> ReleaseChannel:
        """Fetch the release channel document for *channel*.

        Raises:
            FeedUnavailableError: The document could not be downloaded or
                does not look like a release channel.
        """
        url = self.url_for(channel)
        log.debug("release_feed_downloading", channel=channel, url=url)

        resp = await self._get(channel, url)

        if resp.status_code >= 400:
            raise FeedUnavailableError(
                channel,
                f"Failed to get releases JSON for channel {channel} - HTTP status {resp.status_code}",
                status_code=resp.status_code,
            )

        if not resp.content.strip():
            raise FeedUnavailableError(channel, f"Failed to get releases JSON for channel {channel}.")

        try:
            release_channel = ReleaseChannel.model_validate_json(resp.content)
        except ValidationError as exc:
            raise FeedUnavailableError(
                channel, f"Failed to get releases JSON for channel {channel}: {exc}"
            ) from exc

        log.debug(
            "release_feed_downloaded",
            channel=channel,
            latest_sdk=release_channel.latest_sdk,
            releases=len(release_channel.releases),
        )
        return release_channel

    async def _get(self, channel: str, url: str) -> httpx.Response:
        headers = {"User-Agent": f"{USER_AGENT}/{__version__}"}
        attempts = self._retries + 1

        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            for attempt in range(attempts):
                try:
                    resp = await client.get(url, headers=headers)
                except httpx.RequestError as exc:
                    log.warning(
                        "release_feed_request_failed",
                        channel=channel,
                        attempt=attempt + 1,
                        error=str(exc),
                    )
                    if attempt == attempts - 1:
                        raise FeedUnavailableError(
                            channel, f"Failed to get releases JSON for channel {channel}: {exc}"
                        ) from exc
                else:
                    if resp.status_code < 500 or attempt == attempts - 1:
                        return resp
                    log.warning(
                        "release_feed_server_error",
                        channel=channel,
                        attempt=attempt + 1,
                        status=resp.status_code,
                    )

                await asyncio.sleep(self._retry_delay * (attempt + 1))

        # Unreachable: the final attempt either returns or raises.
        raise FeedUnavailableError(channel, f"Failed to get releases JSON for channel {channel}.")
