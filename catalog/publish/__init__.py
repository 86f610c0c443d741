from .writer import publish_catalog, read_json, render_json, write_json

__all__ = ["publish_catalog", "read_json", "render_json", "write_json"]
