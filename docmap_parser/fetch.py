"""Fetch docmaps from the enhanced preprints docmap API."""

from typing import Any, Optional

import httpx
import structlog

from docmap_parser.config import Settings, get_settings

logger = structlog.get_logger(__name__)


class DocmapFetchError(Exception):
    """Error while fetching docmaps over HTTP."""

    pass


def _get_json(url: str, params: Optional[dict[str, str]], settings: Settings, client: Optional[httpx.Client]) -> Any:
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.request_timeout)

    logger.info("fetching_docmap", url=url, params=params)
    try:
        response = client.get(url, params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        logger.error("docmap_fetch_failed", url=url, status=e.response.status_code)
        raise DocmapFetchError(
            f"Docmap API returned {e.response.status_code} for {e.request.url}"
        ) from e
    except httpx.HTTPError as e:
        logger.error("docmap_fetch_failed", url=url, error=str(e))
        raise DocmapFetchError(f"Failed to fetch {url}: {e}") from e
    except ValueError as e:
        raise DocmapFetchError(f"Docmap API returned invalid JSON for {url}") from e
    finally:
        if owns_client:
            client.close()


def fetch_docmap(
    manuscript_id: str,
    settings: Optional[Settings] = None,
    client: Optional[httpx.Client] = None,
) -> dict[str, Any]:
    """Fetch the docmap of one manuscript by its publisher manuscript id.

    Args:
        manuscript_id: Publisher manuscript id (e.g. ``"85111"``).
        settings: Settings to use, defaults to the cached settings.
        client: Optional httpx client, mainly for tests.

    Returns:
        The docmap as a JSON object.

    Raises:
        DocmapFetchError: If the request fails.
    """
    settings = settings or get_settings()
    url = f"{settings.api_base_url.rstrip('/')}/by-publisher/{settings.publisher}/get-by-manuscript-id"
    return _get_json(url, {"manuscript_id": manuscript_id}, settings, client)


def fetch_docmap_index(
    settings: Optional[Settings] = None,
    client: Optional[httpx.Client] = None,
) -> list[dict[str, Any]]:
    """Fetch the index of all docmaps.

    Raises:
        DocmapFetchError: If the request fails or the index has no docmaps.
    """
    settings = settings or get_settings()
    data = _get_json(f"{settings.api_base_url.rstrip('/')}/index", None, settings, client)

    docmaps = data.get("docmaps") if isinstance(data, dict) else None
    if not isinstance(docmaps, list):
        raise DocmapFetchError("Docmap index response has no docmaps list")

    logger.info("docmap_index_fetched", count=len(docmaps))
    return docmaps
