"""Unit tests for core/normalize.py"""

import pytest

from manifold.core.models import (
    BlockDoc, BuilderProjectDoc, PageDoc, ProjectMetadata, SiteDoc, SitemapDoc, dump_json,
)
from manifold.core.normalize import default_doc, normalize_doc, root_page


# --- helpers ---

def _page(route: str, page_id: str = "", title: str = "", blocks: list = None) -> PageDoc:
    return PageDoc(id=page_id, title=title, route=route, blocks=blocks or [])


def _doc(pages: list, page_order: list = None, root: str = "", selected: str = "") -> BuilderProjectDoc:
    return BuilderProjectDoc(
        site=SiteDoc(site_name="Demo", base_url="https://demo.example.com"),
        sitemap=SitemapDoc(page_order=page_order or [], root_page_id=root),
        pages=pages,
        selected_page_id=selected,
    )


@pytest.fixture(name="drifted")
def drifted_fixture() -> BuilderProjectDoc:
    """A document with stale ids, duplicate routes, and dangling references."""
    return _doc(
        pages=[
            _page("/", "page-1", "Home"),
            _page("/About", "old-about", "About"),
            _page("/about", "dup", "About again"),
            _page("/contact", "", "Contact"),
        ],
        page_order=["dup", "ghost", "page-1", "old-about", "page-1"],
        root="ghost",
        selected="old-about",
    )


# --- empty documents ---

def test_empty_pages_get_root_page():
    """A document without pages gets the synthesized home page."""
    result = normalize_doc(_doc([]))
    assert [p.id for p in result.pages] == ["home"]
    assert result.pages[0].route == "/"
    assert result.sitemap.page_order == ["home"]
    assert result.sitemap.root_page_id == "home"
    assert result.selected_page_id == "home"


# --- id derivation ---

def test_ids_rederived_from_routes(drifted):
    """Ids come from routes; duplicates get numeric suffixes in document order."""
    result = normalize_doc(drifted)
    assert [p.id for p in result.pages] == ["home", "about", "about-2", "contact"]


def test_id_independent_of_prior_id_and_content():
    """Two pages with the same route get the same id regardless of id, title, or blocks."""
    a = normalize_doc(_doc([_page("/team", "x", "Team")]))
    b = normalize_doc(_doc([_page("/team", "y", "Other", [BlockDoc(id="b1", type="hero", props={"k": 1})])]))
    assert a.pages[0].id == b.pages[0].id == "team"


def test_about_collision_first_wins():
    """'/About' then '/about' yields about and about-2."""
    result = normalize_doc(_doc([_page("/About"), _page("/about")]))
    assert [p.id for p in result.pages] == ["about", "about-2"]
    reversed_result = normalize_doc(_doc([_page("/about", title="lower"), _page("/About", title="upper")]))
    assert [(p.id, p.title) for p in reversed_result.pages] == [("about", "lower"), ("about-2", "upper")]


# --- sitemap repair ---

def test_page_order_mapped_deduped_and_completed(drifted):
    """Old ids are mapped, unknown ids dropped, duplicates removed, missing pages appended."""
    result = normalize_doc(drifted)
    assert result.sitemap.page_order == ["about-2", "home", "about", "contact"]


def test_page_order_is_exactly_page_ids(drifted):
    result = normalize_doc(drifted)
    assert sorted(result.sitemap.page_order) == sorted(p.id for p in result.pages)
    assert len(result.sitemap.page_order) == len(set(result.sitemap.page_order))


def test_valid_current_ids_pass_through():
    """pageOrder entries that already are current ids keep their relative order."""
    doc = _doc([_page("/a", "a"), _page("/b", "b"), _page("/c", "c")], page_order=["c", "a"])
    assert normalize_doc(doc).sitemap.page_order == ["c", "a", "b"]


def test_root_falls_back_to_first_in_order(drifted):
    """A dangling root resolves to the first pageOrder entry."""
    assert normalize_doc(drifted).sitemap.root_page_id == "about-2"


def test_root_mapped_through_old_id():
    doc = _doc([_page("/"), _page("/blog", "legacy-blog")], root="legacy-blog")
    assert normalize_doc(doc).sitemap.root_page_id == "blog"


def test_selected_mapped_through_old_id(drifted):
    assert normalize_doc(drifted).selected_page_id == "about"


def test_selected_falls_back_to_root():
    doc = _doc([_page("/"), _page("/blog")], root="blog", selected="nowhere")
    result = normalize_doc(doc)
    assert result.selected_page_id == result.sitemap.root_page_id == "blog"


# --- purity / idempotence ---

def test_normalize_does_not_mutate_input(drifted):
    before = dump_json(drifted)
    normalize_doc(drifted)
    assert dump_json(drifted) == before


def test_normalize_is_idempotent(drifted):
    """normalize(normalize(doc)) serializes byte-identically to normalize(doc)."""
    once = normalize_doc(drifted)
    twice = normalize_doc(once)
    assert dump_json(twice) == dump_json(once)


def test_block_payload_untouched():
    """Opaque block props survive normalization unchanged."""
    props = {"items": [{"title": "A", "nested": {"n": 1}}], "flag": True, "count": 3}
    doc = _doc([_page("/", blocks=[BlockDoc(id="b1", type="feature_grid", props=props)])])
    assert normalize_doc(doc).pages[0].blocks[0].props == props


# --- defaults ---

def test_default_doc_uses_metadata():
    metadata = ProjectMetadata(
        name="Demo", slug="demo", site_url="https://demo.example.com",
        created_at="2026-01-01T00:00:00+00:00", updated_at="2026-01-01T00:00:00+00:00",
    )
    doc = default_doc(metadata)
    assert doc.site.site_name == "Demo"
    assert doc.site.base_url == "https://demo.example.com"
    assert doc.pages == [root_page()]
    assert doc.sitemap.page_order == ["home"]
    assert dump_json(normalize_doc(doc)) == dump_json(doc)
