"""HTTP retrieval of the source image."""

from __future__ import annotations

import requests
from loguru import logger

from image_recognition.errors import FetchError


def fetch_image(url: str, timeout: float | None = 30.0) -> bytes:
    """Download ``url`` with a single GET and return the response body.

    Raises:
        FetchError: On network errors, timeouts, invalid URLs, or a
            non-2xx status.
    """
    logger.debug(f"GET {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else "?"
        raise FetchError(f"GET {url} returned HTTP {status}") from exc
    except requests.RequestException as exc:
        raise FetchError(f"GET {url} failed: {exc}") from exc

    logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return response.content
