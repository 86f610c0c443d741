from .images import DriveThumbnailRewriter
from .pages import Page, build_index, load_source_manifest, page_count, paginate

__all__ = [
    "DriveThumbnailRewriter",
    "Page",
    "build_index",
    "load_source_manifest",
    "page_count",
    "paginate",
]
