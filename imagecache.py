import hashlib
import logging
import os
import tempfile
from urllib.parse import urlparse

import requests

URL_PREFIX = "/externals"

logger = logging.getLogger("flickr_stream")


def filename_for(url):
    ext = os.path.splitext(urlparse(url).path)[1] or ".jpg"
    return hashlib.md5(url.encode("utf-8")).hexdigest() + ext


class ImageCache:
    """Keeps a local copy of remote images so pages don't hotlink staticflickr.com."""

    def __init__(self, settings, client):
        self.settings = settings
        self.client = client

    @property
    def directory(self):
        return self.settings.get("IMAGECACHE_DIR")

    def path_for(self, filename):
        # basename keeps lookups inside the cache dir
        return os.path.join(self.directory, os.path.basename(filename))

    def is_allowed(self, url):
        host = urlparse(url).hostname or ""
        return any(host == h or host.endswith("." + h) for h in self.settings.get("IMAGECACHE_ALLOWED_HOSTS", ()))

    def generate_path(self, url):
        if not self.settings.get("IMAGECACHE_EXTERNAL") or not self.is_allowed(url):
            return url
        filename = filename_for(url)
        local = self.path_for(filename)
        if not os.path.exists(local):
            try:
                self.fetch(url, local)
            except (requests.RequestException, OSError) as exception:
                logger.warning("Could not cache external image %s: %s", url, exception)
                return url
        return f"{URL_PREFIX}/{filename}"

    def fetch(self, url, local):
        resp = self.client.get(url, timeout=self.settings.get("FLICKR_STREAM_TIMEOUT"))
        resp.raise_for_status()
        os.makedirs(self.directory, exist_ok=True)
        # one temp file per writer, renamed into place so a partial download is never served
        fd, tmp = tempfile.mkstemp(dir=self.directory, suffix=".part")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(resp.content)
            os.replace(tmp, local)
        except OSError:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        logger.info("Cached external image %s as %s", url, local)
