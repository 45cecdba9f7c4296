from .common import (
    FAIL_ENVELOPE,
    FakeResponse,
    FakeSession,
    album_envelope,
    jpeg_bytes,
    make_photo,
    user_envelope,
)

__all__ = [
    "FAIL_ENVELOPE",
    "FakeResponse",
    "FakeSession",
    "album_envelope",
    "jpeg_bytes",
    "make_photo",
    "user_envelope",
]
