"""
Paginated SLO listing.

Datadog returns SLOs in pages of at most ``limit`` items and reports the
total count in ``metadata.page.total_count``.
"""

from __future__ import annotations

import asyncio
from typing import Any, AsyncIterator, Awaitable, Callable, Protocol

import structlog

from sloreport.config import DEFAULT_PAGE_DELAY_SECONDS
from sloreport.core.errors import ListError, RemoteError, TransportError
from sloreport.slos.models import SLO

logger = structlog.get_logger()

SleepFunc = Callable[[float], Awaitable[None]]


class SLOListingClient(Protocol):
    async def list_slos(
        self, *, limit: int, offset: int = 0, tags_query: str = ""
    ) -> dict[str, Any]: ...


def _total_count(response: dict[str, Any]) -> int | None:
    page = (response.get("metadata") or {}).get("page") or {}
    total = page.get("total_count")
    return int(total) if total is not None else None


async def iter_slo_pages(
    client: SLOListingClient,
    *,
    limit: int,
    tags_query: str = "",
    page_delay: float = DEFAULT_PAGE_DELAY_SECONDS,
    sleep: SleepFunc = asyncio.sleep,
) -> AsyncIterator[list[SLO]]:
    """
    Yield SLOs one page at a time, starting from offset 0.

    The offset advances by the number of items each page returned, and the
    sequence stops once the accumulated count reaches the reported total.

    Raises:
        TransportError: If a page request fails
        RemoteError: If a page cannot be parsed
    """
    offset = 0
    loaded = 0
    total: int | None = None

    while True:
        if loaded:
            await sleep(page_delay)

        response = await client.list_slos(limit=limit, offset=offset, tags_query=tags_query)
        try:
            page = [SLO.from_dict(item) for item in response.get("data") or []]
            page_total = _total_count(response)
        except (AttributeError, TypeError, ValueError) as exc:
            raise RemoteError(f"malformed SLO listing: {exc}", details={"offset": offset}) from exc
        loaded += len(page)
        offset += len(page)

        if total is None:
            total = page_total
            if total is None:
                logger.warning("slo_list_missing_total", loaded=loaded)
                total = loaded

        logger.info("slo_page_loaded", loaded=loaded, total=total)
        yield page

        if loaded >= total:
            return
        if not page:
            logger.warning("slo_list_short", loaded=loaded, total=total)
            return


async def list_all_slos(
    client: SLOListingClient,
    *,
    limit: int,
    tags_query: str = "",
    page_delay: float = DEFAULT_PAGE_DELAY_SECONDS,
    sleep: SleepFunc = asyncio.sleep,
) -> list[SLO]:
    """
    Return every SLO matching ``tags_query``.

    Raises:
        ListError: If any page request fails; partial results are discarded
    """
    if tags_query:
        logger.info("querying_slos_for_tag", tags_query=tags_query)

    slos: list[SLO] = []
    try:
        async for page in iter_slo_pages(
            client,
            limit=limit,
            tags_query=tags_query,
            page_delay=page_delay,
            sleep=sleep,
        ):
            slos.extend(page)
    except (TransportError, RemoteError) as exc:
        raise ListError(
            f"unable to list SLOs: {exc.message}",
            details={"loaded": len(slos)},
        ) from exc

    return slos
