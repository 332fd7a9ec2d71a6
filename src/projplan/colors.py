"""Deterministic project colors.

A project's color depends only on its name and workspace id, so every event
and task of a project renders the same way across runs and processes.
"""

from __future__ import annotations

from collections.abc import Sequence

FNV32_OFFSET_BASIS = 0x811C9DC5
FNV32_PRIME = 0x01000193
UINT32_MASK = 0xFFFFFFFF

HEX_COLOR_FULL_LENGTH = 6
HEX_COLOR_SHORT_LENGTH = 3
WCAG_LUMINANCE_THRESHOLD = 0.03928
WCAG_CONTRAST_MIDPOINT = 0.179
HSL_LIGHTNESS_MIDPOINT = 0.5

PROJECT_PALETTE: tuple[str, ...] = (
    "#10b981",  # emerald-500
    "#3b82f6",  # blue-500
    "#8b5cf6",  # violet-500
    "#f59e0b",  # amber-500
    "#ef4444",  # red-500
    "#06b6d4",  # cyan-500
    "#84cc16",  # lime-500
    "#f97316",  # orange-500
    "#ec4899",  # pink-500
    "#6366f1",  # indigo-500
    "#14b8a6",  # teal-500
    "#eab308",  # yellow-500
    "#a855f7",  # purple-500
    "#22c55e",  # green-500
    "#0ea5e9",  # sky-500
    "#f43f5e",  # rose-500
    "#64748b",  # slate-500
    "#78716c",  # stone-500
    "#dc2626",  # red-600
    "#059669",  # emerald-600
    "#2563eb",  # blue-600
    "#7c3aed",  # violet-600
    "#d97706",  # amber-600
    "#0891b2",  # cyan-600
    "#65a30d",  # lime-600
    "#ea580c",  # orange-600
    "#db2777",  # pink-600
    "#4f46e5",  # indigo-600
    "#0d9488",  # teal-600
    "#ca8a04",  # yellow-600
)


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash of the UTF-8 bytes of text."""
    value = FNV32_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * FNV32_PRIME) & UINT32_MASK
    return value


def project_color(project_name: str, workspace_id: str) -> str:
    """Palette color for a project.

    Example:
        project_color("Website Redesign", "ws-1")  # Same value on every call
    """
    return PROJECT_PALETTE[fnv1a_32(project_name + workspace_id) % len(PROJECT_PALETTE)]


def assign_project_colors(projects: Sequence[tuple[str, str]]) -> list[str]:
    """Assign colors to several projects without repeating a palette entry.

    Projects are processed in order. Each takes its hashed palette color or
    the next unused one after it; once the palette is exhausted, a
    variation of the hashed color is derived instead.

    Args:
        projects: (project_name, workspace_id) pairs

    Returns:
        One color per project, in the same order
    """
    used: set[str] = set()
    colors: list[str] = []
    size = len(PROJECT_PALETTE)

    for name, workspace_id in projects:
        seed = fnv1a_32(name + workspace_id)
        start = seed % size
        color = next(
            (
                PROJECT_PALETTE[(start + offset) % size]
                for offset in range(size)
                if PROJECT_PALETTE[(start + offset) % size] not in used
            ),
            None,
        )
        if color is None:
            color = color_variation(PROJECT_PALETTE[start], seed)
        used.add(color)
        colors.append(color)

    return colors


def color_variation(base_color: str, seed: int) -> str:
    """Shift hue by up to 30 degrees and saturation/lightness by up to 10 points."""
    h, s, lightness = _hex_to_hsl(base_color)
    hue = (h + (seed % 60) - 30) % 360
    saturation = max(20, min(90, s + (seed * 2 % 20) - 10))
    lightness = max(25, min(75, lightness + (seed * 3 % 20) - 10))
    return _hsl_to_hex(hue, saturation, lightness)


def lighter_variant(color: str, amount: int = 20) -> str:
    """Add amount to each RGB channel (for hover states)."""
    r, g, b = _hex_to_rgb(color)
    return _rgb_to_hex(min(255, r + amount), min(255, g + amount), min(255, b + amount))


def darker_variant(color: str, amount: int = 20) -> str:
    """Subtract amount from each RGB channel."""
    r, g, b = _hex_to_rgb(color)
    return _rgb_to_hex(max(0, r - amount), max(0, g - amount), max(0, b - amount))


def contrast_text_color(bg_color: str) -> str:
    """Readable text color (black or white) for a background color.

    Uses the WCAG relative luminance formula. Malformed colors get black.
    """
    if not bg_color.startswith("#"):
        return "#000000"

    hex_color = bg_color.lstrip("#")
    if len(hex_color) == HEX_COLOR_SHORT_LENGTH:
        hex_color = "".join(c * 2 for c in hex_color)
    elif len(hex_color) != HEX_COLOR_FULL_LENGTH:
        return "#000000"

    try:
        r, g, b = (int(hex_color[i : i + 2], 16) / 255 for i in (0, 2, 4))
    except ValueError:
        return "#000000"

    def luminance_component(c: float) -> float:
        return c / 12.92 if c <= WCAG_LUMINANCE_THRESHOLD else ((c + 0.055) / 1.055) ** 2.4

    luminance = (
        0.2126 * luminance_component(r)
        + 0.7152 * luminance_component(g)
        + 0.0722 * luminance_component(b)
    )
    return "#ffffff" if luminance < WCAG_CONTRAST_MIDPOINT else "#000000"


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    hex_color = color.lstrip("#")
    if len(hex_color) != HEX_COLOR_FULL_LENGTH:
        raise ValueError(f"Expected a #RRGGBB color, got '{color}'")
    return int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)


def _rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def _hex_to_hsl(color: str) -> tuple[int, int, int]:
    """Hue in degrees, saturation and lightness in percent, all rounded."""
    r, g, b = (c / 255 for c in _hex_to_rgb(color))
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2
    h = s = 0.0

    if high != low:
        d = high - low
        s = d / (2 - high - low) if lightness > HSL_LIGHTNESS_MIDPOINT else d / (high + low)
        if high == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif high == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return round(h * 360), round(s * 100), round(lightness * 100)


def _hsl_to_hex(h: float, s: float, lightness: float) -> str:
    """Convert HSL (degrees, percent, percent) to "#rrggbb"."""
    h = h / 360
    s = s / 100
    lightness = lightness / 100

    if s == 0:
        r = g = b = lightness
    else:

        def hue_to_rgb(p: float, q: float, t: float) -> float:
            if t < 0:
                t += 1
            if t > 1:
                t -= 1
            if t < 1 / 6:
                return p + (q - p) * 6 * t
            if t < 1 / 2:
                return q
            if t < 2 / 3:
                return p + (q - p) * (2 / 3 - t) * 6
            return p

        q = (
            lightness * (1 + s)
            if lightness < HSL_LIGHTNESS_MIDPOINT
            else lightness + s - lightness * s
        )
        p = 2 * lightness - q
        r = hue_to_rgb(p, q, h + 1 / 3)
        g = hue_to_rgb(p, q, h)
        b = hue_to_rgb(p, q, h - 1 / 3)

    return _rgb_to_hex(round(r * 255), round(g * 255), round(b * 255))
