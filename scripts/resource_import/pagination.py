"""Cursor-based pagination over Confluent Cloud list endpoints.

List responses carry ``metadata.next``: unset or empty on the last page,
otherwise a URL embedding the ``page_token`` query parameter for the next
request.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional
from urllib.parse import parse_qs, urlsplit

from scripts.resource_import.exceptions import CollectionError, PaginationError

logger = logging.getLogger("resource_import.pagination")

PAGE_TOKEN_QUERY_PARAMETER = "page_token"

# Documented maximum page size is 100; stay one below it
LIST_PAGE_SIZE = 99

FetchPage = Callable[[Optional[str]], tuple[list[dict], dict]]


def extract_page_token(next_page_url: str) -> str:
    """Return the page token embedded in a next-page URL."""
    try:
        query = urlsplit(next_page_url).query
    except ValueError as exc:
        raise PaginationError(
            f"could not parse {next_page_url!r} into URL, {exc}"
        ) from exc

    values = parse_qs(query).get(PAGE_TOKEN_QUERY_PARAMETER, [])
    page_token = values[0] if values else ""
    if not page_token:
        raise PaginationError(
            f"could not parse the value for {PAGE_TOKEN_QUERY_PARAMETER!r} "
            f"query parameter from {next_page_url!r}"
        )
    return page_token


def next_page_token(metadata: Optional[dict[str, Any]]) -> Optional[str]:
    """Token for the following page, or None when this page is the last."""
    next_url = (metadata or {}).get("next")
    if not next_url:
        return None
    return extract_page_token(next_url)


def collect_all(fetch_page: FetchPage, kind: str) -> list[dict]:
    """Fetch every page in order and return the concatenated items.

    ``fetch_page`` is called with ``None`` for the first page and with the
    extracted token afterwards, and returns ``(items, metadata)``. Any failure
    discards everything collected so far.
    """
    items: list[dict] = []
    page_token: Optional[str] = None
    pages = 0

    while True:
        try:
            batch, metadata = fetch_page(page_token)
            pages += 1
            items.extend(batch)
            page_token = next_page_token(metadata)
        except CollectionError:
            raise
        except Exception as exc:
            raise CollectionError(f"error reading {kind}: {exc}") from exc
        if page_token is None:
            break

    logger.debug(
        "Collected %d %s", len(items), kind,
        extra={"pages": pages, "resources": len(items)},
    )
    return items
