import base64
import sys
import requests
from typing import NamedTuple, Optional
from urllib.parse import urlparse

from core.github_client import TIMEOUT

DEFAULT_CONTENT_TYPE = "image/png"


class LogoResult(NamedTuple):
    data_uri: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.data_uri)


def to_data_uri(content: bytes, content_type: Optional[str]) -> str:
    # Drop parameters such as "; charset=binary"
    ctype = (content_type or "").split(";", 1)[0].strip() or DEFAULT_CONTENT_TYPE
    return f"data:{ctype};base64,{base64.b64encode(content).decode('ascii')}"


def fetch_logo(url: Optional[str], timeout: float = TIMEOUT) -> LogoResult:
    """
    Download an image and inline it as a data: URI.

    Never raises: a broken logo must not break the badge, so every failure
    comes back as LogoResult("", reason) and the renderer drops the image.
    """
    if not url:
        return LogoResult("", "no logo url")
    if urlparse(url).scheme not in ("http", "https"):
        return LogoResult("", f"unsupported logo url: {url[:60]}")

    try:
        r = requests.get(url, headers={"User-Agent": "star-milestone/1.0"}, timeout=timeout)
        r.raise_for_status()
        data_uri = to_data_uri(r.content, r.headers.get("Content-Type"))
    except (requests.RequestException, ValueError) as e:
        print(f"[milestone] Failed to fetch logo {url}: {e}", file=sys.stderr)
        return LogoResult("", str(e) or e.__class__.__name__)

    return LogoResult(data_uri)
