"""
Cursor-following enumeration over provider list calls.
"""

import logging
from typing import Callable, Iterator, TypeVar

from lambdawrap.providers.base import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[str | None], Page[T]]


def iter_pages(fetch_page: PageFetcher) -> Iterator[T]:
    """
    Yield every item of a paginated listing, in page order.

    ``fetch_page`` is called with ``None`` first and then with the cursor
    returned by the previous page, until a page comes back without a cursor
    (None or empty string).

    Example:
        versions = iter_pages(lambda cursor: provider.list_versions(name, cursor))
    """
    cursor = None
    pages = 0
    while True:
        page = fetch_page(cursor)
        pages += 1
        logger.debug(
            "Fetched page %d (%d items, more=%s)", pages, len(page.items), bool(page.next_cursor)
        )
        yield from page.items
        if not page.next_cursor:
            return
        cursor = page.next_cursor


def paginate(fetch_page: PageFetcher) -> list[T]:
    """Collect every item of a paginated listing into a list."""
    return list(iter_pages(fetch_page))
