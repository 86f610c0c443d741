"""
Build errors.

Per-item problems (MalformedSidecar, UnrecognizedImageSource) are caught where
they are raised and never stop a build. Structural problems (InvalidManifestShape,
FileSystemError) propagate to the entry point and abort the run.
"""


class CatalogBuildError(Exception):
    """Base class for every error the catalog build can raise."""


class MalformedSidecar(CatalogBuildError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Malformed sidecar {path}: {reason}")
        self.path = path
        self.reason = reason


class UnrecognizedImageSource(CatalogBuildError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Unrecognized image source: {url!r}")
        self.url = url


class InvalidManifestShape(CatalogBuildError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid manifest shape: {reason}")
        self.reason = reason


class FileSystemError(CatalogBuildError):
    def __init__(self, path: object, cause: BaseException) -> None:
        super().__init__(f"File system error at {path}: {cause}")
        self.path = str(path)
        self.cause = cause
