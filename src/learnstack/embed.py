from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import ClassVar, Protocol
from urllib.parse import parse_qs, urlparse

logger = logging.getLogger(__name__)

DRIVE_FILE_ID_RE = re.compile(r"/d/([a-zA-Z0-9_-]{10,})")
DRIVE_PREVIEW_URL = "https://drive.google.com/file/d/{file_id}/preview"


class EmbedStrategy(Protocol):
    host: str

    def embed_url(self, video_url: str) -> str: ...


@dataclass(frozen=True, slots=True)
class DriveEmbedStrategy:
    host: ClassVar[str] = "drive"

    def embed_url(self, video_url: str) -> str:
        return drive_to_preview(video_url)


@dataclass(frozen=True, slots=True)
class YouTubeSubstituteStrategy:
    host: ClassVar[str] = "youtube"

    def embed_url(self, video_url: str) -> str:
        if not video_url:
            return ""
        return video_url.replace("watch?v=", "embed/")


_STRATEGIES: dict[str, EmbedStrategy] = {
    DriveEmbedStrategy.host: DriveEmbedStrategy(),
    YouTubeSubstituteStrategy.host: YouTubeSubstituteStrategy(),
}


def embed_strategy_for(video_host: str) -> EmbedStrategy:
    """Pick the embed strategy for a video host.

    Drive links are rewritten to the ``/preview`` player; YouTube watch links
    get a literal ``watch?v=`` to ``embed/`` substitution. Never chained.
    """
    try:
        return _STRATEGIES[video_host]
    except KeyError:
        raise ValueError(f"Unknown video host: {video_host!r}") from None


def drive_to_preview(url: str) -> str:
    if not url:
        return ""
    try:
        if "/preview" in url:
            return url
        match = DRIVE_FILE_ID_RE.search(url)
        if match:
            return DRIVE_PREVIEW_URL.format(file_id=match.group(1))
        parsed = urlparse(url)
        if not (parsed.scheme and parsed.netloc):
            return url
        ids = parse_qs(parsed.query).get("id")
        if ids and ids[0]:
            return DRIVE_PREVIEW_URL.format(file_id=ids[0])
        return url
    except ValueError as exc:
        logger.debug("Could not derive preview URL from %r: %s", url, exc)
        return url
