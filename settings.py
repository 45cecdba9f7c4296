import os

FLICKR_APP_NAME = "Flickr Stream"

FLICKR_API_URL = "https://api.flickr.com/services/rest/"

FLICKR_STREAM_API_KEY = os.environ.get("FLICKR_STREAM_API_KEY", "NO_KEY_SET")
FLICKR_STREAM_PHOTO_COUNT = int(os.environ.get("FLICKR_STREAM_PHOTO_COUNT", "10"))

# seconds; None leaves the requests default (no timeout)
FLICKR_STREAM_TIMEOUT = float(os.environ["FLICKR_STREAM_TIMEOUT"]) if os.environ.get("FLICKR_STREAM_TIMEOUT") else None

# When False, image uris point straight at staticflickr.com instead of a local copy
IMAGECACHE_EXTERNAL = os.environ.get("IMAGECACHE_EXTERNAL", "1") != "0"
IMAGECACHE_DIR = os.environ.get("IMAGECACHE_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "externals"))
IMAGECACHE_ALLOWED_HOSTS = ("staticflickr.com",)

CACHE_TYPE = os.environ.get("CACHE_TYPE", "SimpleCache")
CACHE_DEFAULT_TIMEOUT = 300
