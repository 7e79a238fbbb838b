from typing import Callable, Optional

from badges.milestone_badge import RenderSpec, build_render_spec, generate_milestone_svg
from core.logo import LogoResult, fetch_logo
from core.milestone import find_milestone
from core.params import MilestoneRequest

LogoFetcher = Callable[[Optional[str]], LogoResult]


def resolve_render_spec(req: MilestoneRequest, client, logo_fetcher: LogoFetcher = fetch_logo) -> RenderSpec:
    """
    Metadata -> (stargazer page) -> logo, reduced to what the renderer needs.

    Raises the core.errors upstream exceptions; logo problems never raise.
    Falls back to the owner's avatar when no logo URL was given.
    """
    summary = client.get_repository(req.owner, req.repo)
    result = find_milestone(client, req.owner, req.repo, req.milestone, summary.star_count)
    logo = logo_fetcher(req.logo_url or summary.owner_avatar_url)
    return build_render_spec(req.milestone, result, logo)


def generate_milestone_badge(req: MilestoneRequest, client, logo_fetcher: LogoFetcher = fetch_logo) -> str:
    return generate_milestone_svg(resolve_render_spec(req, client, logo_fetcher))
