"""
Common/Shared Fixtures

Fake requests objects and Flickr payload factories used across test modules.
"""
import io

import requests
from PIL import Image


class FakeResponse:
    def __init__(self, payload=None, status_code=200, content=b"", json_error=False):
        self.payload = payload
        self.status_code = status_code
        self.content = content
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error", response=self)

    def json(self):
        if self.json_error:
            raise requests.exceptions.JSONDecodeError("Expecting value", "", 0)
        return self.payload


class FakeSession:
    """Records every GET and replays queued responses (or raises queued exceptions)."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


def make_photo(n):
    """Build one photo record as the Flickr API returns it"""
    return {"id": str(1000 + n), "secret": f"s{n}", "server": str(60 + n), "farm": n, "title": f"Photo {n}"}


def album_envelope(count=3):
    return {
        "photoset": {"id": "72157", "photo": [make_photo(n) for n in range(1, count + 1)]},
        "stat": "ok",
    }


def user_envelope(count=3):
    return {
        "photos": {"page": 1, "perpage": count, "photo": [make_photo(n) for n in range(1, count + 1)]},
        "stat": "ok",
    }


FAIL_ENVELOPE = {"stat": "fail", "code": 100, "message": "Invalid API Key (Key has invalid format)"}


def jpeg_bytes(size=(640, 480)):
    """Encode a solid-colour JPEG"""
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, "JPEG")
    return buf.getvalue()
