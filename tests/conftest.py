"""
Shared pytest fixtures: settings mapping and a FlickrStreamApi factory.
"""
import pytest

from flickr_stream import FlickrStreamApi
from tests.fixtures import FakeSession


@pytest.fixture
def settings():
    return {
        "FLICKR_STREAM_API_KEY": "key123",
        "FLICKR_STREAM_PHOTO_COUNT": 10,
        "FLICKR_API_URL": "https://api.flickr.com/services/rest/",
        "FLICKR_STREAM_TIMEOUT": 5,
        "IMAGECACHE_EXTERNAL": True,
        "IMAGECACHE_ALLOWED_HOSTS": ("staticflickr.com",),
    }


@pytest.fixture
def make_api(settings):
    def _make(*responses, **kwargs):
        return FlickrStreamApi(settings, FakeSession(*responses), **kwargs)
    return _make
