"""Server-side clamping of pagination parameters."""

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def clamp_pagination(page: int | None, page_size: int | None) -> tuple[int, int, int]:
    """
    Clamp caller input to page >= 1 and 1 <= page_size <= 100.

    Returns (page, page_size, offset). Missing or zero values fall back to defaults.
    """
    current_page = max(1, page or 1)
    current_size = min(MAX_PAGE_SIZE, max(1, page_size or DEFAULT_PAGE_SIZE))
    offset = (current_page - 1) * current_size
    return current_page, current_size, offset
