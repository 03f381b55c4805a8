"""Catalog service - paginated scheme listing."""

from dataclasses import dataclass

from django.core.paginator import EmptyPage, Paginator

from pointman.conf import pointman_settings
from pointman.models import Scheme


@dataclass
class SchemePage:
    """One page of schemes plus pagination info."""

    items: list[Scheme]
    current_page: int
    total_pages: int
    total_schemes: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1


def list_schemes(page: int = 1, limit: int | None = None) -> SchemePage:
    """
    List schemes, newest first.

    Pages past the end are empty rather than clamped to the last page.
    """
    limit = limit or pointman_settings.SCHEMES_PAGE_SIZE
    limit = max(1, min(limit, pointman_settings.SCHEMES_MAX_PAGE_SIZE))
    page = max(1, page)

    paginator = Paginator(Scheme.objects.order_by("-created_at", "-id"), limit)
    try:
        items = list(paginator.page(page).object_list)
    except EmptyPage:
        items = []

    total = paginator.count
    return SchemePage(
        items=items,
        current_page=page,
        total_pages=paginator.num_pages if total else 0,
        total_schemes=total,
    )
