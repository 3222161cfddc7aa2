"""Page-based listing on top of Flask-SQLAlchemy's ``Query.paginate``.

Reads ``page`` and ``perPage`` from the query string and returns the page
items with camelCase ``meta`` and ``links`` blocks.
"""
from urllib.parse import urlencode

from flask import request

MAX_PER_PAGE = 100
DEFAULT_PER_PAGE = 20


def _page_args():
    page = request.args.get("page", 1, type=int) or 1
    per_page = request.args.get("perPage", DEFAULT_PER_PAGE, type=int) or DEFAULT_PER_PAGE
    return max(page, 1), min(max(per_page, 1), MAX_PER_PAGE)


def _url(page, per_page):
    args = request.args.to_dict()
    args.update(page=page, perPage=per_page)
    return f"{request.base_url}?{urlencode(args)}"


def paginate(query):
    """Return ``(items, meta, links)`` for the requested page of ``query``.

    Pages past the end are clamped to the last page.
    """
    page, per_page = _page_args()
    result = query.paginate(page=page, per_page=per_page, error_out=False)
    if result.pages and page > result.pages:
        result = query.paginate(page=result.pages, per_page=per_page, error_out=False)

    links = {"self": _url(result.page, per_page)}
    if result.has_prev:
        links["prev"] = _url(result.prev_num, per_page)
    if result.has_next:
        links["next"] = _url(result.next_num, per_page)

    meta = {
        "page": result.page,
        "perPage": per_page,
        "totalItems": result.total,
        "totalPages": max(result.pages, 1),
    }
    return result.items, meta, links
