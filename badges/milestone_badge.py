"""
Star milestone card renderer.
Generates an 80px-high rounded card SVG: [logo | headline / status]

  headline: "{N} Stars Milestone"
  status:   "Achieved on YYYY-MM-DD"  or  "Current: {N} Stars"

The renderer is pure: it only sees already-resolved strings, and the same
RenderSpec always yields the same bytes.
"""
from typing import List, NamedTuple, Optional
from pathlib import Path
from html import escape as esc

from core.logo import LogoResult
from core.milestone import Achieved, MilestoneResult

# ── SVG icon paths ──────────────────────────────────────────────────────────

# 16×16 viewbox
STAR_ICON = (
    "M8 .25a.75.75 0 0 1 .673.418l1.882 3.815 4.21.612a.75.75 0 0 1 .416 1.279"
    "l-3.046 2.97.719 4.192a.751.751 0 0 1-1.088.791L8 12.347l-3.766 1.98a.75.75"
    " 0 0 1-1.088-.79l.72-4.194L.818 6.374a.75.75 0 0 1 .416-1.28l4.21-.611L7.327"
    ".668A.75.75 0 0 1 8 .25Z"
)
# 512×512 viewbox
TROPHY_ICON = (
    "M409.6 0c-18.4 0-34.4 12-39.2 29.6l-12.8 48H154.4l-12.8-48C136.8 12 120.8 0"
    " 102.4 0 74.4 0 51.2 23.2 51.2 51.2v48c0 100.8 72.8 184.8 168 201.6v66.4H128"
    "c-17.6 0-32 14.4-32 32s14.4 32 32 32h256c17.6 0 32-14.4 32-32s-14.4-32-32-32"
    "h-91.2v-66.4c95.2-16.8 168-100.8 168-201.6v-48C460.8 23.2 437.6 0 409.6 0z"
    "M115.2 99.2v-48c0-7.2 5.6-12.8 12.8-12.8 4.8 0 8.8 2.4 11.2 6.4l12.8 48h-36.8"
    "v6.4zm281.6 0h-36.8l12.8-48c2.4-4 6.4-6.4 11.2-6.4 7.2 0 12.8 5.6 12.8 12.8v41.6z"
)

PURPLE = "#6e5494"
TEXT_MAIN = "#333"
TEXT_SUB = "#666"
STAR_GOLD = "#FFD700"
FONT_FAMILY = "-apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif"

HEADLINE_SIZE = 18
STATUS_SIZE = 14
HEIGHT = 80
TEXT_X = 80          # logo column
RIGHT_PAD = 60       # trophy + breathing room
BORDER = 4
RADIUS = 15


class RenderSpec(NamedTuple):
    logo_data_uri: Optional[str]
    milestone_label: str
    status_label: str


def _text_width(text: str, font_size: float) -> float:
    """Rough character-width estimate for sans-serif at given size."""
    return len(text) * font_size * 0.56


def build_render_spec(milestone: int, result: MilestoneResult, logo: LogoResult) -> RenderSpec:
    if isinstance(result, Achieved):
        status = f"Achieved on {result.date}"
    else:
        status = f"Current: {result.current_stars} Stars"
    return RenderSpec(
        logo_data_uri=logo.data_uri if logo.ok else None,
        milestone_label=f"{milestone} Stars Milestone",
        status_label=status,
    )


def badge_width(spec: RenderSpec) -> int:
    text_w = max(
        _text_width(spec.milestone_label, HEADLINE_SIZE),
        _text_width(spec.status_label, STATUS_SIZE),
    )
    return int(round(TEXT_X + text_w + RIGHT_PAD))


def _decorations(width: int) -> List[str]:
    lines = [f'<g fill="{STAR_GOLD}" opacity="0.2">']
    # (center x offset from right edge, center y, size, rotation)
    for dx, cy, size, rot in ((30, 28, 22, 15), (50, 62, 12, -10)):
        cx = width - dx
        scale = size / 16
        lines.append(
            f'<path d="{STAR_ICON}" '
            f'transform="translate({cx - size / 2:.1f},{cy - size / 2:.1f}) '
            f'rotate({rot} {size / 2:.1f} {size / 2:.1f}) scale({scale:.3f})"/>'
        )
    lines.append("</g>")
    lines.append(
        f'<g transform="translate({width - 60},25) scale(0.06)" fill="{PURPLE}" opacity="0.4">'
        f'<path d="{TROPHY_ICON}"/>'
        f'</g>'
    )
    return lines


def generate_milestone_svg(spec: RenderSpec) -> str:
    """
    Render the milestone card.

    Always emits exactly one frame rect and one status text; the <image>
    element is present only when spec.logo_data_uri is non-empty.
    """
    w, h = badge_width(spec), HEIGHT

    lines: List[str] = []
    lines.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">'
    )
    lines.append("<defs>")
    lines.append(
        f'<clipPath id="round-corner"><rect width="{w}" height="{h}" rx="{RADIUS}" ry="{RADIUS}"/></clipPath>'
    )
    lines.append('<clipPath id="circle-logo"><circle cx="40" cy="40" r="25"/></clipPath>')
    lines.append(
        '<linearGradient id="bg-grad" x1="0%" y1="0%" x2="100%" y2="0%">'
        '<stop offset="0%" stop-color="#fcfcfc"/>'
        '<stop offset="100%" stop-color="#f7f7f7"/>'
        '</linearGradient>'
    )
    lines.append("</defs>")

    # Frame (stroke is centered on the edge, so inset by half the border)
    half = BORDER // 2
    lines.append(
        f'<rect class="frame" x="{half}" y="{half}" width="{w - BORDER}" height="{h - BORDER}" '
        f'rx="{RADIUS}" ry="{RADIUS}" fill="url(#bg-grad)" stroke="{PURPLE}" stroke-width="{BORDER}"/>'
    )

    lines.append('<g clip-path="url(#round-corner)">')
    lines.extend(_decorations(w))
    lines.append("</g>")

    if spec.logo_data_uri:
        lines.append(
            f'<image href="{esc(spec.logo_data_uri)}" x="15" y="15" width="50" height="50" '
            f'clip-path="url(#circle-logo)"/>'
        )

    lines.append(
        f'<text class="headline" x="{TEXT_X}" y="35" fill="{TEXT_MAIN}" font-size="{HEADLINE_SIZE}" '
        f'font-weight="bold" font-family="{esc(FONT_FAMILY)}">{esc(spec.milestone_label)}</text>'
    )
    lines.append(
        f'<text class="status" x="{TEXT_X}" y="60" fill="{TEXT_SUB}" font-size="{STATUS_SIZE}" '
        f'font-family="{esc(FONT_FAMILY)}">{esc(spec.status_label)}</text>'
    )

    lines.append("</svg>")
    return "\n".join(lines)


def render_milestone_svg(spec: RenderSpec, out_path: Path) -> None:
    """Write milestone SVG to file."""
    content = generate_milestone_svg(spec)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        f.write(content)
