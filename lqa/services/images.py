"""
Laden und Normalisieren der Screenshots zu (mime_type, base64-Daten).

Quellen: http(s)-URL, data:-URL oder lokaler Dateipfad.
Nicht unterstützte MIME-Types werden ersetzt statt abgelehnt, da das
Backend unbekannte Content-Types komplett zurückweist.
"""

import base64
import binascii
import logging
import mimetypes
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
from urllib.parse import urlparse

import requests

from lqa.core.config import settings
from lqa.core.errors import ImageLoadError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset({
    "image/png",
    "image/jpeg",
    "image/webp",
    "image/heic",
    "image/heif",
})

_DATA_URL = re.compile(
    r"^\s*data:(?P<mime>[^;,]*)(?:;[^,;]+)*;base64,(?P<data>.*)$",
    re.IGNORECASE | re.DOTALL,
)


@dataclass(frozen=True)
class ProcessedImage:
    mime_type: str
    data: str  # base64

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


ImagePair = Tuple[ProcessedImage, ProcessedImage]


def _short(reference: str) -> str:
    return reference if len(reference) <= 80 else f"{reference[:77]}..."


def _reference_path(reference: str) -> str:
    if reference.startswith(("http://", "https://")):
        return urlparse(reference).path
    return reference


def normalize_mime_type(mime_type: str | None, reference: str) -> str:
    """
    Liefert einen vom Backend akzeptierten MIME-Type.
    Fallback: PNG, wenn die Referenz auf .png endet, sonst JPEG.
    """
    mime = (mime_type or "").split(";")[0].strip().lower()
    if mime in ALLOWED_MIME_TYPES:
        return mime

    fallback = "image/png" if _reference_path(reference).lower().endswith(".png") else "image/jpeg"
    logger.warning(
        "Detected unsupported MIME type: %s for %s. Applying fallback %s.",
        mime or "<none>",
        _short(reference),
        fallback,
    )
    return fallback


class ImageLoader:
    def __init__(self, timeout: float | None = None):
        self.timeout = timeout if timeout is not None else settings.image_fetch_timeout

    def load(self, reference: str) -> ProcessedImage:
        if not reference or not reference.strip():
            raise ImageLoadError("Empty image reference")

        if reference.lstrip().lower().startswith("data:"):
            return self._from_data_url(reference)
        if reference.startswith(("http://", "https://")):
            return self._fetch(reference)
        return self._read_file(reference)

    def load_pair(self, source: str, target: str) -> ImagePair:
        """Lädt Source- und Target-Bild parallel (keine Reihenfolge-Abhängigkeit)."""
        with ThreadPoolExecutor(max_workers=2) as pool:
            source_future = pool.submit(self.load, source)
            target_future = pool.submit(self.load, target)
            return source_future.result(), target_future.result()

    # ---------- Quellen ---------- #

    def _from_data_url(self, reference: str) -> ProcessedImage:
        match = _DATA_URL.match(reference)
        if not match:
            raise ImageLoadError("Invalid data URL format")

        payload = re.sub(r"\s+", "", match.group("data"))
        try:
            base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageLoadError("Image data URL contains invalid base64 data") from e
        if not payload:
            raise ImageLoadError("Image data URL payload was empty")

        return ProcessedImage(
            mime_type=normalize_mime_type(match.group("mime"), reference),
            data=payload,
        )

    def _fetch(self, url: str) -> ProcessedImage:
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ImageLoadError(f"Failed to fetch image {_short(url)}: {e}") from e

        if not response.content:
            raise ImageLoadError(f"Fetched image is empty: {_short(url)}")

        return ProcessedImage(
            mime_type=normalize_mime_type(response.headers.get("Content-Type"), url),
            data=base64.b64encode(response.content).decode("ascii"),
        )

    def _read_file(self, reference: str) -> ProcessedImage:
        path = Path(reference).expanduser()
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ImageLoadError(f"Failed to read image {reference}: {e}") from e

        if not content:
            raise ImageLoadError(f"Image file is empty: {reference}")

        guessed, _ = mimetypes.guess_type(path.name)
        return ProcessedImage(
            mime_type=normalize_mime_type(guessed, reference),
            data=base64.b64encode(content).decode("ascii"),
        )
