#!/usr/bin/env python3
"""
Render a star milestone badge to disk and print its Markdown embed.

  python scripts/generate_milestone.py https://github.com/owner/repo 1000
  python scripts/generate_milestone.py https://github.com/owner/repo 500 --logo URL --out out/x.svg
"""
import argparse
import sys
from pathlib import Path

# Add project root to sys.path to allow imports from core/ and badges/
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
sys.path.append(str(PROJECT_ROOT))

from badges.milestone_badge import render_milestone_svg
from core.errors import MilestoneError
from core.github_client import GitHubClient, build_headers
from core.params import MilestoneRequest, parse_milestone
from core.pipeline import resolve_render_spec
from core.utils import load_secrets, markdown_snippet, milestone_badge_url, parse_repo_url

SECRETS_PATH = PROJECT_ROOT / "secrets.json"
OUTPUT_DIR = PROJECT_ROOT / "out"
DEFAULT_BASE_URL = "http://localhost:3000"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate a star milestone badge SVG.")
    parser.add_argument("repo_url", help="https://github.com/{owner}/{repo}")
    parser.add_argument("milestone", help="star ordinal, e.g. 1000")
    parser.add_argument("--logo", default=None, help="logo image URL (defaults to owner avatar)")
    parser.add_argument("--out", default=None, help="output path (default out/<owner>-<repo>-<N>.svg)")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="deployment URL for the Markdown snippet")
    args = parser.parse_args(argv)

    parsed = parse_repo_url(args.repo_url)
    if not parsed:
        print("Invalid GitHub URL. Expected https://github.com/owner/repo", file=sys.stderr)
        return 1
    owner, repo = parsed

    try:
        milestone = parse_milestone(args.milestone)
        client = GitHubClient(build_headers(load_secrets(SECRETS_PATH)))
        spec = resolve_render_spec(MilestoneRequest(owner, repo, milestone, args.logo), client)
    except MilestoneError as e:
        print(f"[{owner}/{repo}] Failed: {e}", file=sys.stderr)
        return 1

    out_file = Path(args.out) if args.out else OUTPUT_DIR / f"{owner}-{repo}-{milestone}.svg"
    render_milestone_svg(spec, out_file)
    print(f"[{owner}/{repo}] Wrote {out_file} ({spec.status_label})")

    badge_url = milestone_badge_url(args.base_url, owner, repo, milestone, args.logo)
    print(markdown_snippet(badge_url, f"https://github.com/{owner}/{repo}"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
