"""Sequential draining of cursor-paginated Linear connections."""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from .models import CommentPage, IssuePage

PageT = TypeVar("PageT", IssuePage, CommentPage)


async def iter_pages(
    fetch_page: Callable[[str | None], Awaitable[PageT]],
) -> AsyncIterator[PageT]:
    """Yield pages of one connection in order until it is exhausted.

    ``fetch_page`` is called with ``None`` for the first page and with the
    previous page's ``end_cursor`` afterwards. Each request is awaited before
    the next one is issued; Linear cursors are only valid in sequence.

    Iteration stops when ``has_next_page`` is false or when the API reports
    more pages without supplying a cursor. A page left empty after the client
    rejected its malformed nodes is still followed to the next cursor.

    Example:
        >>> async for page in iter_pages(lambda after: client.issues(f, after)):
        ...     handle(page.nodes)
    """
    after: str | None = None
    while True:
        page = await fetch_page(after)
        yield page
        if not page.page_info.has_next_page or not page.page_info.end_cursor:
            return
        after = page.page_info.end_cursor
