"""HTTP helpers shared by the page-based strategies."""

import httpx

from yt_transcript_extractor.config import Settings
from yt_transcript_extractor.errors import HTTPStatusError, NetworkError


def build_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.youtube_base_url.rstrip("/"),
        headers={
            "User-Agent": settings.user_agent,
            "Accept-Language": settings.accept_language,
        },
        timeout=settings.http_timeout,
        follow_redirects=True,
    )


async def request(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
    """Send a request, mapping transport failures and bad statuses to NetworkError."""
    try:
        resp = await client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        raise NetworkError(f"Request to {url} failed: {e}") from e
    if not resp.is_success:
        raise HTTPStatusError(resp.status_code, url)
    return resp


async def fetch_watch_page(client: httpx.AsyncClient, video_id: str) -> str:
    resp = await request(client, "GET", "/watch", params={"v": video_id})
    return resp.text
