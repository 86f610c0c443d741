from .tree import SIDECAR_FILENAME, ArenaEntry, NodeArena, crawl, parse_sidecar

__all__ = ["SIDECAR_FILENAME", "ArenaEntry", "NodeArena", "crawl", "parse_sidecar"]
