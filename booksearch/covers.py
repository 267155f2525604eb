import io
from typing import Optional
from urllib.parse import urlparse
import httpx
from PIL import Image
from .errors import DecodeError
from .transport import fetch
from utils.logger import logger

# cover codecs by file suffix
COVER_FORMATS = {".jpg": "JPEG", ".png": "PNG"}


def image_format(url: str) -> Optional[str]:
    path = urlparse(url).path
    for suffix, fmt in COVER_FORMATS.items():
        if path.endswith(suffix):
            return fmt
    return None


def decode_image(data: bytes, fmt: str) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(data), formats=[fmt])
        img.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"cannot decode {fmt} image: {e}") from e
    return img


def load_cover(client: httpx.Client, url: str) -> Optional[Image.Image]:
    """Fetch and decode a cover image.

    Returns None without touching the network when the URL's suffix has no
    codec. Raises TransportError or DecodeError otherwise.
    """
    fmt = image_format(url)
    if fmt is None:
        logger.debug("Skipping cover with unsupported suffix: %s", url)
        return None
    return decode_image(fetch(client, url), fmt)
