"""
Vercel serverless function for star milestone badges.

  /api/milestone?owner=X&repo=Y&milestone=N            (logo = owner avatar)
  /api/milestone?owner=X&repo=Y&milestone=N&logo=URL

Errors come back as short plain-text bodies; details only go to the log.
"""
from http.server import BaseHTTPRequestHandler
from urllib.parse import urlparse, parse_qs
import os
import sys
from pathlib import Path
from typing import Dict, Tuple

PROJECT_ROOT = Path(__file__).parent.parent.resolve()
sys.path.append(str(PROJECT_ROOT))

from core.errors import InvalidInput, MalformedRecord, UpstreamError, UpstreamInconsistency
from core.github_client import GitHubClient, build_headers
from core.logo import fetch_logo
from core.params import parse_milestone_request
from core.pipeline import generate_milestone_badge
from core.utils import load_secrets

SECRETS_PATH = PROJECT_ROOT / "secrets.json"

# Public cache: 12 hours, stale-while-revalidate for 1 day
CACHE_CONTROL = os.environ.get(
    "MILESTONE_CACHE_CONTROL", "s-maxage=43200, stale-while-revalidate=86400"
)

ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

# One client for the lifetime of the function instance
CLIENT = GitHubClient(build_headers(load_secrets(SECRETS_PATH)))

Response = Tuple[int, Dict[str, str], bytes]


def _text(status: int, body: str) -> Response:
    headers = {
        "Content-type": "text/plain; charset=utf-8",
        "Cache-Control": "no-store",
    }
    return status, headers, body.encode("utf-8")


def build_response(query: Dict, client, logo_fetcher=fetch_logo) -> Response:
    """Run one request end to end and return (status, headers, body)."""
    try:
        req = parse_milestone_request(query)
    except InvalidInput as e:
        return _text(400, str(e))

    where = f"{req.owner}/{req.repo}#{req.milestone}"
    try:
        svg = generate_milestone_badge(req, client, logo_fetcher)
    except UpstreamInconsistency as e:
        print(f"[milestone] {where}: {e}", file=sys.stderr)
        return _text(500, "Error fetching stargazer data")
    except MalformedRecord as e:
        print(f"[milestone] {where}: {e}", file=sys.stderr)
        return _text(500, "Date not found in stargazer data")
    except UpstreamError as e:
        print(f"[milestone] {where}: {e}", file=sys.stderr)
        return _text(500, "Error generating image")
    except Exception as e:
        print(f"[milestone] {where}: unexpected {e.__class__.__name__}: {e}", file=sys.stderr)
        return _text(500, "Error generating image")

    headers = {
        "Content-type": "image/svg+xml; charset=utf-8",
        "Cache-Control": CACHE_CONTROL,
    }
    return 200, headers, svg.encode("utf-8")


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        query = parse_qs(urlparse(self.path).query)
        status, headers, body = build_response(query, CLIENT)

        self.send_response(status)
        for name, value in headers.items():
            self.send_header(name, value)

        origin = self.headers.get("Origin")
        if origin and any(allowed in origin for allowed in ALLOWED_ORIGINS):
            self.send_header("Access-Control-Allow-Origin", origin)
        else:
            self.send_header("Access-Control-Allow-Origin", "*")

        self.end_headers()
        self.wfile.write(body)
