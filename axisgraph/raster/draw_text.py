from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from axisgraph.errors import AxisConfigError
from axisgraph.fonts import RGBA, FontParms, TextMetrics


FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

_JUSTIFY_FRACTION = {"left": 0.0, "center": 0.5, "right": 1.0}


def text_metrics(text: str, font: FontParms) -> TextMetrics:
    face = _load_font(font.family, font.size_px)
    ascent, descent = _line_metrics(face)
    advance = float(face.getlength(text)) if text else 0.0
    return TextMetrics(ascent=float(ascent), descent=float(descent), advance=advance)


def text_size(text: str, font: FontParms) -> tuple[int, int]:
    """Pixel size of the rendered label after rotation."""
    mask = _render_mask(text, _load_font(font.family, font.size_px))
    h, w = np.rot90(mask, k=_quarter_turns(font.angle)).shape
    return (w, h)


def draw_text(dst: np.ndarray, x: float, y: float, text: str, font: FontParms) -> None:
    """Draw `text` anchored at (x, y) per the font's justification and baseline."""
    if not text:
        return
    face = _load_font(font.family, font.size_px)
    mask = _render_mask(text, face)
    ascent, _ = _line_metrics(face)
    h, w = mask.shape
    ox = -_JUSTIFY_FRACTION[font.justification] * w
    if font.baseline == "top":
        oy = 0.0
    elif font.baseline == "center":
        oy = -h / 2.0
    elif font.baseline == "base":
        oy = -float(ascent)
    else:
        oy = -float(h)
    turns = _quarter_turns(font.angle)
    corners = [(ox, oy), (ox + w, oy), (ox, oy + h), (ox + w, oy + h)]
    for _ in range(turns):
        # A counterclockwise quarter turn on a y-down surface.
        corners = [(b, -a) for a, b in corners]
    x0 = x + min(a for a, _ in corners)
    y0 = y + min(b for _, b in corners)
    _blend_mask(dst, int(round(x0)), int(round(y0)), np.rot90(mask, k=turns), font.color)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return

    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    sx0 = x0 - x
    sy0 = y0 - y
    cov = mask[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(out_rgb, 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


@lru_cache(maxsize=128)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    """Coverage mask one line tall, with the baseline at `ascent` rows from the top."""
    ascent, descent = _line_metrics(font)
    width = max(1, int(np.ceil(font.getlength(text))))
    height = max(1, int(ascent + descent))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    if isinstance(font, ImageFont.FreeTypeFont):
        draw.text((0, ascent), text, fill=255, font=font, anchor="ls")
    else:
        draw.text((0, 0), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


def _line_metrics(font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> tuple[int, int]:
    if isinstance(font, ImageFont.FreeTypeFont):
        return font.getmetrics()
    _, top, _, bottom = font.getbbox("Ag")
    return (int(bottom - top), 0)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default(size=size)


@lru_cache(maxsize=64)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if p == stem:
                return path
        for path in candidates:
            if p in path.stem.lower().replace(" ", ""):
                return path
    return None


def _quarter_turns(angle: float) -> int:
    if angle % 90 != 0:
        raise AxisConfigError("raster text angles must be multiples of 90 degrees")
    return int(angle // 90) % 4
