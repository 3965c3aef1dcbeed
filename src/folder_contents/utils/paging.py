"""RFC 5988 paging links for listing responses."""

from typing import Dict

from starlette.datastructures import URL

PAGING_RELATIONS = ("first", "prev", "next", "last")


def _page_url(base_url: URL, limit: int, offset: int) -> str:
    return str(base_url.include_query_params(limit=limit, offset=offset))


def build_paging_links(base_url: str, total: int, limit: int, offset: int) -> Dict[str, str]:
    """Build the first/prev/next/last links for one page of a listing.

    Every other query parameter of ``base_url`` is kept, only ``limit`` and
    ``offset`` are overridden. No links are produced for an empty listing.

    Args:
        base_url: Absolute URL of the listing, without paging parameters
        total: Number of items in the full listing
        limit: Page size
        offset: Offset of the current page

    Returns:
        Mapping of relation name to absolute URL, only for applicable relations
    """
    if total <= 0:
        return {}

    url = URL(base_url)
    links = {"first": _page_url(url, limit, 0)}

    if offset > 0:
        links["prev"] = _page_url(url, limit, max(0, offset - limit))

    if offset + limit < total:
        links["next"] = _page_url(url, limit, offset + limit)

    # first offset of the final page
    links["last"] = _page_url(url, limit, ((total - 1) // limit) * limit)

    return {rel: links[rel] for rel in PAGING_RELATIONS if rel in links}


def format_link_header(links: Dict[str, str]) -> str:
    """Render paging links as a ``Link`` header value."""
    return ", ".join(f'<{url}>; rel="{rel}"' for rel, url in links.items())
