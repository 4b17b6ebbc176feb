"""Document normalization: re-derive page ids and repair sitemap/selection references"""

from manifold.core.models import (
    BuilderProjectDoc, PageDoc, PageSeoDoc, ProjectMetadata, SiteDoc, SitemapDoc,
)
from manifold.core.utils.slug import HOME_PAGE_ID, resolve_collisions


FALLBACK_ROOT_ID = "page-home"


def root_page() -> PageDoc:
    """The page synthesized for new projects and for documents with no pages."""
    return PageDoc(
        id=HOME_PAGE_ID,
        title="Home",
        route="/",
        seo=PageSeoDoc(title="Home", description=""),
        blocks=[],
    )


def default_doc(metadata: ProjectMetadata) -> BuilderProjectDoc:
    """Seed document for a project: one root page, site info taken from metadata."""
    home = root_page()
    return BuilderProjectDoc(
        site=SiteDoc(site_name=metadata.name, base_url=metadata.site_url),
        sitemap=SitemapDoc(page_order=[home.id], root_page_id=home.id),
        pages=[home],
        selected_page_id=home.id,
    )


def _resolve(page_id: str, id_map: dict[str, str], valid: set[str]) -> str | None:
    mapped = id_map.get(page_id, page_id)
    return mapped if mapped in valid else None


def normalize_doc(doc: BuilderProjectDoc) -> BuilderProjectDoc:
    """Return a canonical copy of doc.

    Page ids are recomputed from routes in document order (first occurrence wins
    the bare id); pages are matched by position only, never by content.
    pageOrder keeps still-valid entries in their given order, then appends any
    missing page in page order. Root falls back to the first pageOrder entry and
    selection falls back to root. Idempotent, since routes are never modified.
    """
    source = doc.pages or [root_page()]
    new_ids = resolve_collisions(p.route for p in source)

    id_map: dict[str, str] = {}
    pages = []
    for page, new_id in zip(source, new_ids):
        id_map[page.id] = new_id
        pages.append(page.model_copy(update={"id": new_id}, deep=True))

    valid = set(new_ids)
    page_order: list[str] = []
    for page_id in doc.sitemap.page_order:
        mapped = _resolve(page_id, id_map, valid)
        if mapped is not None and mapped not in page_order:
            page_order.append(mapped)
    page_order.extend(pid for pid in new_ids if pid not in page_order)

    root_id = _resolve(doc.sitemap.root_page_id, id_map, valid)
    if root_id is None:
        root_id = page_order[0] if page_order else FALLBACK_ROOT_ID

    selected_id = _resolve(doc.selected_page_id, id_map, valid) or root_id

    return BuilderProjectDoc(
        site=doc.site.model_copy(),
        sitemap=SitemapDoc(page_order=page_order, root_page_id=root_id),
        pages=pages,
        selected_page_id=selected_id,
    )
