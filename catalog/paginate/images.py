from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from catalog.errors import UnrecognizedImageSource
from models import Product


@dataclass(frozen=True)
class DriveThumbnailRewriter:
    """
    Turns Google Drive share links (drive.google.com/...?id=<file>) into the
    direct thumbnail endpoint so they can be used as <img> sources.
    Anything else is returned verbatim.
    """

    host: str = "drive.google.com"
    id_param: str = "id"
    thumbnail_path: str = "/thumbnail"
    size: str = "w1000"

    def rewrite(self, value: str) -> str:
        try:
            file_id = self._file_id(value)
        except UnrecognizedImageSource:
            return value
        query = urlencode({"id": file_id, "sz": self.size})
        return urlunsplit(("https", self.host, self.thumbnail_path, query, ""))

    def rewrite_product(self, product: Product) -> Product:
        variants = [
            variant.model_copy(update={"image": self.rewrite(variant.image)})
            if variant.image
            else variant
            for variant in product.variants
        ]
        return product.model_copy(
            update={
                "images": [self.rewrite(image) for image in product.images],
                "variants": variants,
            }
        )

    def _file_id(self, value: str) -> str:
        try:
            parts = urlsplit(value.strip())
            hostname = parts.hostname
        except ValueError as exc:
            raise UnrecognizedImageSource(value) from exc
        if parts.scheme not in {"http", "https"} or hostname != self.host:
            raise UnrecognizedImageSource(value)
        values = parse_qs(parts.query).get(self.id_param)
        if not values or not values[0]:
            raise UnrecognizedImageSource(value)
        return values[0]
