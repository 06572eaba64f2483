"""
Pagination walker shared by every listing (tags, repositories, members, commits).
"""

from collections.abc import Callable, Iterator
from typing import Any

from .data_models import Page

NextPageFn = Callable[[Any], Page]


def iter_pages(first_page: Page, next_page_fn: NextPageFn) -> Iterator[Page]:
    """
    Yield pages lazily, starting with ``first_page``.

    A page is only fetched when the caller asks for it, so breaking out of the
    loop stops all further requests.

    Args:
        first_page: Page returned by the initial listing call
        next_page_fn: Fetches the page a cursor points at

    Yields:
        Page objects in order
    """
    page = first_page
    yield page
    while page.next_cursor is not None:
        page = next_page_fn(page.next_cursor)
        yield page


def collect_all(first_page: Page, next_page_fn: NextPageFn) -> list[Any]:
    """
    Concatenate the items of every page, preserving page and item order.

    Args:
        first_page: Page returned by the initial listing call
        next_page_fn: Fetches the page a cursor points at

    Returns:
        All items across all pages
    """
    items: list[Any] = []
    for page in iter_pages(first_page, next_page_fn):
        items.extend(page.items)
    return items
