import json
import re
from pathlib import Path
from typing import Dict, Optional, Any, Tuple
from urllib.parse import urlencode
import sys

REPO_URL_RE = re.compile(r"github\.com/([^/]+)/([^/]+)")


def load_json_file(path: Path) -> Optional[Dict[str, Any]]:
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except Exception as e:
        print(f"Failed to load JSON {path}: {e}", file=sys.stderr)
        return None

def load_secrets(secrets_path: Path) -> Dict[str, str]:
    data = load_json_file(secrets_path)
    return data if isinstance(data, dict) else {}

def parse_repo_url(url: str) -> Optional[Tuple[str, str]]:
    """https://github.com/owner/repo[...] -> (owner, repo)"""
    m = REPO_URL_RE.search(url or "")
    if not m:
        return None
    owner, repo = m.group(1), m.group(2)
    repo = re.split(r"[?#]", repo, 1)[0]
    if repo.endswith(".git"):
        repo = repo[:-4]
    if not owner or not repo:
        return None
    return owner, repo

def milestone_badge_url(base_url: str, owner: str, repo: str, milestone: int, logo: Optional[str] = None) -> str:
    params = {"owner": owner, "repo": repo, "milestone": str(milestone)}
    if logo:
        params["logo"] = logo
    return f"{base_url.rstrip('/')}/api/milestone?{urlencode(params)}"

def markdown_snippet(badge_url: str, repo_url: str) -> str:
    return f"[![Star Milestone]({badge_url})]({repo_url})"
