"""HTTP fetching with aiohttp: one page per call, failures reported, never raised."""

import asyncio
import logging
import time
from typing import Optional
import aiohttp
from .config import DEFAULT_HEADERS, DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT
from .types import FetchResult
from .utils import is_html_content

logger = logging.getLogger(__name__)

# Truncate very large pages before link extraction
MAX_CONTENT_CHARS = 5_000_000


def create_crawler_session(
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT
) -> aiohttp.ClientSession:
    """Create aiohttp session for sequential crawling."""
    timeout_config = aiohttp.ClientTimeout(total=timeout)

    # Only one request is ever in flight
    connector = aiohttp.TCPConnector(
        limit=1,
        ttl_dns_cache=300,
    )

    headers = DEFAULT_HEADERS.copy()
    if user_agent:
        headers["User-Agent"] = user_agent

    return aiohttp.ClientSession(
        connector=connector,
        timeout=timeout_config,
        headers=headers,
        raise_for_status=False  # Handle status codes manually
    )


class PageFetcher:
    """Fetches pages over a shared aiohttp session."""

    def __init__(self, session: aiohttp.ClientSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout

    async def fetch(self, url: str) -> FetchResult:
        """
        Issue a GET for url.

        Network errors, timeouts and non-2xx statuses come back as a
        FetchResult with ``error`` set. The body is only read for HTML.
        """
        start_time = time.monotonic()
        request_kwargs = {"allow_redirects": True}
        if self.timeout is not None:
            request_kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with self.session.get(url, **request_kwargs) as response:
                content_type = response.headers.get("content-type", "")
                status_code = response.status

                if not 200 <= status_code < 300:
                    return FetchResult(
                        url=url,
                        status_code=status_code,
                        content_type=content_type,
                        error=f"HTTP {status_code}",
                        response_time=time.monotonic() - start_time
                    )

                content = ""
                if is_html_content(content_type):
                    content = await response.text(errors="replace")
                    if len(content) > MAX_CONTENT_CHARS:
                        content = content[:MAX_CONTENT_CHARS]
                        logger.warning(f"Truncated large page: {url}")

                return FetchResult(
                    url=url,
                    status_code=status_code,
                    content_type=content_type,
                    html=content,
                    response_time=time.monotonic() - start_time
                )

        except asyncio.TimeoutError:
            error = "Request timed out"
        except aiohttp.ClientError as e:
            error = str(e) or e.__class__.__name__
        except UnicodeDecodeError as e:
            error = f"Could not decode response: {e}"

        return FetchResult(
            url=url,
            error=error,
            response_time=time.monotonic() - start_time
        )
