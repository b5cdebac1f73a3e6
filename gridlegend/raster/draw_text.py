from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from gridlegend.colors import RGBA


DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
LINE_SPACING_PX = 2
ITALIC_SHEAR = 0.2
FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "helvetica",
    "arial",
    "liberationsans",
    "menlo",
    "dejavusansmono",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
    italic: bool = False,
) -> None:
    """Blend ``text`` onto ``dst`` with its top-left corner at ``(x, y)``."""
    if not text:
        return
    mask = _render_mask(text, font_family, float(font_size_px), italic)
    if embolden_px > 1:
        mask = _embolden(mask, embolden_px)
    _blend_mask(dst, x, y, mask, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    italic: bool = False,
) -> tuple[int, int]:
    if not text:
        ascent, descent = _load_font(font_family, float(font_size_px)).getmetrics()
        return (0, max(1, int(ascent + descent)))
    mask = _render_mask(text, font_family, float(font_size_px), italic)
    return (int(mask.shape[1]), int(mask.shape[0]))


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
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

    patch[:, :, :3] = np.clip(out_rgb_num / safe_alpha[:, :, None], 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


def _embolden(mask: np.ndarray, embolden_px: int) -> np.ndarray:
    out = mask.copy()
    for shift in range(1, embolden_px):
        src = mask[:, : max(0, mask.shape[1] - shift)]
        dst = out[:, shift:]
        if src.size == 0 or dst.size == 0:
            break
        np.maximum(dst, src, out=dst)
    return out


@lru_cache(maxsize=256)
def _render_mask(text: str, font_family: str, font_size_px: float, italic: bool) -> np.ndarray:
    font = _load_font(font_family, font_size_px)
    probe = ImageDraw.Draw(Image.new("L", (1, 1), 0))
    left, top, right, bottom = probe.multiline_textbbox((0, 0), text, font=font, spacing=LINE_SPACING_PX)
    width = max(1, int(np.ceil(right - left)))
    height = max(1, int(np.ceil(bottom - top)))
    slant = int(np.ceil(height * ITALIC_SHEAR)) if italic else 0

    image = Image.new("L", (width + slant, height), 0)
    ImageDraw.Draw(image).multiline_text((-left, -top), text, fill=255, font=font, spacing=LINE_SPACING_PX)
    if italic:
        # x_src = x + shear * y - slant: the top row moves right by ``slant``
        image = image.transform(
            image.size,
            Image.Transform.AFFINE,
            (1.0, ITALIC_SHEAR, -float(slant), 0.0, 1.0, 0.0),
            resample=Image.Resampling.BILINEAR,
        )
    return np.asarray(image, dtype=np.uint8)


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
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
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
            if p in path.stem.lower().replace(" ", "") or p in path.name.lower().replace(" ", ""):
                return path
    return None
