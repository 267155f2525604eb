import os
import httpx
from dotenv import load_dotenv
from .errors import TransportError
from utils.logger import logger

load_dotenv()
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "20.0"))
USER_AGENT = os.getenv("USER_AGENT", "booksearch/0.1")


def new_client() -> httpx.Client:
    return httpx.Client(follow_redirects=True, headers={"User-Agent": USER_AGENT})


def fetch(client: httpx.Client, url: str) -> bytes:
    logger.info("Fetching %s", url)
    try:
        r = client.get(url, timeout=HTTP_TIMEOUT)
        r.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response
        raise TransportError(f"{status.status_code} {status.reason_phrase}",
                             status_code=status.status_code) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransportError(f"request to {url} failed: {e}") from e
    return r.content
