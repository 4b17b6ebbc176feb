"""Document and project models persisted as camelCase JSON"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case input; dump with by_alias=True for camelCase output."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectMetadata(CamelModel):
    """Contents of project.json, one per project directory."""
    name:       str
    slug:       str
    site_url:   str
    created_at: str
    updated_at: str


class ProjectRecord(CamelModel):
    """Read-only projection of ProjectMetadata plus the directory path; never persisted."""
    id:         str             # absolute project path
    name:       str
    path:       str
    updated_at: str
    site_url:   str


class SiteDoc(CamelModel):
    site_name: str
    base_url:  str


class SitemapDoc(CamelModel):
    page_order:   list[str] = Field(default_factory=list)
    root_page_id: str = ""


class PageSeoDoc(CamelModel):
    title:       str = ""
    description: str = ""


class BlockStyleDoc(CamelModel):
    """Per-block style overrides; unset fields are omitted on write."""
    variant:          str = "default"
    margin_top:       Optional[str] = None
    margin_bottom:    Optional[str] = None
    padding_top:      Optional[str] = None
    padding_right:    Optional[str] = None
    padding_bottom:   Optional[str] = None
    padding_left:     Optional[str] = None
    border_width:     Optional[str] = None
    border_style:     Optional[str] = None
    border_color:     Optional[str] = None
    border_radius:    Optional[str] = None
    background_color: Optional[str] = None
    text_color:       Optional[str] = None
    font_size:        Optional[str] = None
    primitive_styles: Optional[dict[str, dict[str, str]]] = None


class BlockDoc(CamelModel):
    id:              str
    type:            str                 # open tag, interpreted by the front-end
    props:           Any = Field(default_factory=dict)
    visibility:      str = "visible"
    style_overrides: BlockStyleDoc = Field(default_factory=BlockStyleDoc)


class PageDoc(CamelModel):
    id:     str = ""                     # re-derived from route on every normalization
    title:  str = ""
    route:  str
    seo:    PageSeoDoc = Field(default_factory=PageSeoDoc)
    blocks: list[BlockDoc] = Field(default_factory=list)


class BuilderProjectDoc(CamelModel):
    """The whole editable document; the unit of load and save."""
    site:             SiteDoc
    sitemap:          SitemapDoc = Field(default_factory=SitemapDoc)
    pages:            list[PageDoc] = Field(default_factory=list)
    selected_page_id: str = ""


def dump_json(model: BaseModel) -> str:
    """Pretty-printed camelCase JSON with unset optional fields dropped."""
    return model.model_dump_json(by_alias=True, exclude_none=True, indent=2)
