import logging
import os
import tempfile

from PIL import Image, ImageOps

from imagecache import URL_PREFIX

logger = logging.getLogger("flickr_stream")

# name -> (width, height, effect)
DEFAULT_STYLES = {
    "thumbnail": (100, 100, "scale"),
    "medium": (220, 220, "scale"),
    "large": (480, 480, "scale"),
    "square": (150, 150, "crop"),
}


class UnknownImageStyle(KeyError):
    pass


class ImageStyles:
    """Named image derivatives, generated lazily from files in the image cache."""

    def __init__(self, image_cache, styles=None):
        self.image_cache = image_cache
        self.styles = dict(DEFAULT_STYLES if styles is None else styles)

    def names(self):
        return sorted(self.styles)

    def get(self, style_name):
        try:
            return self.styles[style_name]
        except KeyError:
            raise UnknownImageStyle(style_name)

    def build_url(self, style_name, source_uri):
        self.get(style_name)
        if not source_uri.startswith(URL_PREFIX + "/"):
            # not a local copy, nothing to derive from
            logger.warning("Image style %s skipped for remote uri %s", style_name, source_uri)
            return source_uri
        return f"/styles/{style_name}{source_uri}"

    def derivative_path(self, style_name, filename):
        return os.path.join(self.image_cache.directory, "styles", style_name, os.path.basename(filename))

    def create_derivative(self, style_name, filename):
        """Render the derivative for a cached original, returning its path.

        Returns None when the original isn't in the cache.
        """
        width, height, effect = self.get(style_name)
        target = self.derivative_path(style_name, filename)
        if os.path.exists(target):
            return target
        source = self.image_cache.path_for(filename)
        if not os.path.exists(source):
            return None
        with Image.open(source) as img:
            img = img.convert("RGB")
            if effect == "crop":
                derived = ImageOps.fit(img, (width, height), Image.LANCZOS)
            else:
                derived = img.copy()
                derived.thumbnail((width, height), Image.LANCZOS)
        os.makedirs(os.path.dirname(target), exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=os.path.dirname(target), suffix=".part")
        try:
            with os.fdopen(fd, "wb") as f:
                derived.save(f, "JPEG", quality=90)
            os.replace(tmp, target)
        except OSError:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        logger.info("Created %s derivative %s", style_name, target)
        return target
