"""Directory store: load/save a BuilderProjectDoc against a <slug>.manifold directory"""

import logging
from pathlib import Path

from manifold.core.models import (
    BuilderProjectDoc, PageDoc, ProjectMetadata, SiteDoc, SitemapDoc,
)
from manifold.core.normalize import default_doc, normalize_doc
from manifold.core.utils.scan import iter_parsed, json_files
from manifold.core.errors import ProjectStorageError
from manifold.crud.files import ensure_dir, read_model, write_model


PROJECT_META_FILE = "project.json"
SITE_FILE = "site.json"
SITEMAP_FILE = "sitemap.json"
PAGES_DIR = "pages"

logger = logging.getLogger(__name__)


def read_metadata(project_dir: Path) -> ProjectMetadata:
    return read_model(project_dir / PROJECT_META_FILE, ProjectMetadata)


def write_metadata(project_dir: Path, metadata: ProjectMetadata) -> None:
    write_model(project_dir / PROJECT_META_FILE, metadata)


def _page_files(pages_dir: Path) -> list[Path]:
    try:
        return json_files(pages_dir)
    except OSError as e:
        raise ProjectStorageError(f"Failed reading pages dir {pages_dir}: {e}") from e


def _remove_stale(pages_dir: Path, keep: set[Path]) -> None:
    """Delete *.json files not in keep. Failures are ignored; the save already succeeded."""
    for path in _page_files(pages_dir):
        if path in keep:
            continue
        try:
            path.unlink()
            logger.debug("Removed stale page file %s", path)
        except OSError as e:
            logger.debug("Could not remove %s: %s", path, e)


def save_doc(project_dir: Path, doc: BuilderProjectDoc) -> BuilderProjectDoc:
    """Normalize doc, write site/sitemap/page files, and drop page files no longer in doc.

    Returns the normalized document that was written.
    """
    normalized = normalize_doc(doc)
    pages_dir = project_dir / PAGES_DIR
    ensure_dir(pages_dir)

    write_model(project_dir / SITE_FILE, normalized.site)
    write_model(project_dir / SITEMAP_FILE, normalized.sitemap)

    written = set()
    for page in normalized.pages:
        page_path = pages_dir / f"{page.id}.json"
        write_model(page_path, page)
        written.add(page_path)

    _remove_stale(pages_dir, written)
    logger.info("Saved %d page(s) to %s", len(normalized.pages), project_dir)
    return normalized


def _bootstrap(project_dir: Path, metadata: ProjectMetadata) -> BuilderProjectDoc:
    logger.info("Bootstrapping default document in %s", project_dir)
    return save_doc(project_dir, default_doc(metadata))


def _order_pages(scanned: list[PageDoc], sitemap: SitemapDoc) -> list[PageDoc]:
    """Pages listed in the sitemap first, in sitemap order; the rest sorted by title."""
    by_id = {page.id: page for page in scanned}
    ordered = [by_id.pop(page_id) for page_id in sitemap.page_order if page_id in by_id]
    return ordered + sorted(by_id.values(), key=lambda p: p.title)


def load_doc(project_dir: Path) -> BuilderProjectDoc:
    """Load, repair, and re-persist the project's document.

    Missing site/sitemap/pages (or no readable page files) bootstraps a default
    document. Page files that fail to parse are skipped. Every load writes its
    normalized result back to disk.
    """
    metadata = read_metadata(project_dir)
    site_path = project_dir / SITE_FILE
    sitemap_path = project_dir / SITEMAP_FILE
    pages_dir = project_dir / PAGES_DIR

    if not (site_path.exists() and sitemap_path.exists() and pages_dir.exists()):
        return _bootstrap(project_dir, metadata)

    site = read_model(site_path, SiteDoc)
    sitemap = read_model(sitemap_path, SitemapDoc)
    scanned = list(iter_parsed(_page_files(pages_dir), lambda p: read_model(p, PageDoc)))
    if not scanned:
        return _bootstrap(project_dir, metadata)

    loaded = BuilderProjectDoc(
        site=site,
        sitemap=sitemap,
        pages=_order_pages(scanned, sitemap),
        selected_page_id="",
    )
    return save_doc(project_dir, loaded)
