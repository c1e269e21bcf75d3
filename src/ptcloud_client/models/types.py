"""API parameter types.

Literal aliases for parameters with constrained values. They are used by the
parameter models and by the CLI so that only values accepted by the service
are sent.
"""

from typing import Literal

HttpMethod = Literal["GET", "POST"]
"""Methods used by the storage API."""

ThumbnailFormat = Literal["jpeg", "png"]
"""Image format of a generated thumbnail."""

ThumbnailSize = Literal["xs", "s", "m", "l", "xl"]
"""Thumbnail size, from 32x32 (xs) up to 1024x768 (xl)."""

MediaProtocol = Literal["http", "rtsp"]
"""Streaming protocol for media links."""
