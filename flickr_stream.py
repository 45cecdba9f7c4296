import logging
from dataclasses import dataclass
from typing import Optional

import requests

ALBUM_METHOD = "flickr.photosets.getPhotos"
USER_METHOD = "flickr.people.getPublicPhotos"

# max-age meaning "never expires unless a tag invalidates it"
CACHE_PERMANENT = -1

OK = "ok"
UPSTREAM_FAILURE = "upstream_failure"
TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class RequestConfig:
    api_key: str
    uri: str
    user_id: str
    photoset_id: Optional[str]
    photo_count: int


def generate_photo_uri(flickr_photo):
    return (f"https://farm{flickr_photo['farm']}.staticflickr.com/{flickr_photo['server']}"
            f"/{flickr_photo['id']}_{flickr_photo['secret']}_b.jpg")


def result_kind(flickr_results):
    """Tell apart the three shapes a fetch can return.

    An empty mapping only comes back when the request itself failed; a
    populated one with stat=fail is the API refusing the call.
    """
    if not flickr_results:
        return TRANSPORT_ERROR
    if flickr_results.get("stat") == "fail":
        return UPSTREAM_FAILURE
    return OK


def get_photo_list(flickr_results, api_type):
    # Anything other than album is treated as a user stream
    container = flickr_results.get("photoset" if api_type == "album" else "photos")
    if not isinstance(container, dict):
        return []
    photos = container.get("photo")
    if not isinstance(photos, list):
        return []
    return photos


class FlickrStreamApi:
    """Fetches album or user photos from the Flickr REST API and builds image list markup.

    Collaborators are passed in: ``settings`` is anything with ``get(key)``
    (a ``flask.Config`` in the app), ``client`` is a ``requests.Session``,
    ``logger`` a stdlib logger. ``image_cache`` and ``image_styles`` are only
    needed by ``build_images``.
    """

    def __init__(self, settings, client, logger=None, image_cache=None, image_styles=None):
        self.settings = settings
        self.client = client
        self.logger = logger or logging.getLogger("flickr_stream")
        self.image_cache = image_cache
        self.image_styles = image_styles

    def base_configuration_defaults(self):
        return {
            "api_key": self.settings.get("FLICKR_STREAM_API_KEY"),
            "photo_count": self.settings.get("FLICKR_STREAM_PHOTO_COUNT"),
            "uri": self.settings.get("FLICKR_API_URL"),
        }

    def set_config(self, user_id, photoset_id, photo_count=None):
        defaults = self.base_configuration_defaults()
        photo_count = photo_count or defaults["photo_count"]
        merged = {**defaults, "photoset_id": photoset_id, "user_id": user_id, "photo_count": photo_count}
        return RequestConfig(**merged)

    def get_album_photos(self, conf):
        return self._get_photos(conf, {
            "method": ALBUM_METHOD,
            "api_key": conf.api_key,
            "photoset_id": conf.photoset_id,
            "user_id": conf.user_id,
            "format": "json",
            "nojsoncallback": 1,
            "per_page": conf.photo_count,
        })

    def get_user_photos(self, conf):
        return self._get_photos(conf, {
            "method": USER_METHOD,
            "api_key": conf.api_key,
            "user_id": conf.user_id,
            "format": "json",
            "nojsoncallback": 1,
            "per_page": conf.photo_count,
        })

    def _get_photos(self, conf, query):
        flickr_results = {}
        try:
            resp = self.client.get(conf.uri, params=query, timeout=self.settings.get("FLICKR_STREAM_TIMEOUT"))
            resp.raise_for_status()
            flickr_results = resp.json()
            if not isinstance(flickr_results, dict):
                self.logger.warning("Flickr api returned an unexpected payload: %r", flickr_results)
                return {}
            if flickr_results.get("stat") == "fail":
                self.logger.warning("Flickr api get %s error with message: %s",
                                    flickr_results.get("stat"), flickr_results.get("message"))
        except requests.RequestException as exception:
            flickr_results = {}
            self.logger.warning("%s", exception)
            self.logger.critical("Please check flickrs credentials and flickr fields inputs. "
                                 "Go to logs for more information")
        return flickr_results

    def build_images(self, flickr_images, api_type, style_name="default"):
        items = []
        for flickr_photo in get_photo_list(flickr_images, api_type):
            uri = generate_photo_uri(flickr_photo)
            if self.image_cache is not None:
                uri = self.image_cache.generate_path(uri)
            if style_name != "default":
                uri = self.image_styles.build_url(style_name, uri)
            items.append({
                "theme": "flickr_image",
                "uri": uri,
                "alt": flickr_photo.get("title", ""),
            })

        return [{
            "theme": "item_list",
            "items": items,
            "cache": {
                "contexts": ["session"],
                "tags": [],
                "max_age": CACHE_PERMANENT,
            },
            "list_type": "ul",
            "attributes": {"class": "flickr-image-list"},
        }]
