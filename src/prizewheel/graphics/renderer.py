"""Wheel renderer.

Draws the whole wheel onto a DrawingSurface: rim rings, wedges with clipped
labels, and the hub with its emblem or brand text. The wheel body, hub
included, is rotated by the current rotation. Pointer and frame belong to
the host.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple
import math
import logging

from PIL import Image, ImageDraw, ImageFilter

from prizewheel.config.theme import RGBA, WheelTheme
from prizewheel.core.state import label_of
from prizewheel.graphics.fonts import FontSet
from prizewheel.graphics.masks import circle_mask, sector_mask
from prizewheel.graphics.surface import DrawingSurface
from prizewheel.graphics.text_layout import (
    FittedLabel,
    fit_text,
    line_offsets,
    max_lines_for,
)

logger = logging.getLogger(__name__)

TWO_PI = math.pi * 2

# Emblem size relative to the hub radius
DEFAULT_EMBLEM_MAX_SCALE = 1.45


@dataclass(frozen=True)
class WheelGeometry:
    """Wheel measurements for one surface size, in backing pixels."""
    cx: float
    cy: float
    outer: float       # half the short side
    radius: float      # wedge radius
    inner: float
    hub: float
    text_x: float      # label start, from the center
    text_width: float  # available label width
    start_font: int
    min_font: int

    @classmethod
    def for_size(cls, width: int, height: int) -> "WheelGeometry":
        cx, cy = width / 2, height / 2
        outer = min(cx, cy)
        radius = outer * 0.93
        inner = radius * 0.12
        text_x = inner + radius * 0.14
        pad = radius * 0.06
        return cls(
            cx=cx,
            cy=cy,
            outer=outer,
            radius=radius,
            inner=inner,
            hub=inner * 1.35,
            text_x=text_x,
            text_width=radius - text_x - pad,
            start_font=math.floor(radius * 0.06),
            min_font=math.floor(radius * 0.038),
        )

    @property
    def center(self) -> Tuple[float, float]:
        return (self.cx, self.cy)

    def bbox(self, r: float) -> Tuple[float, float, float, float]:
        """Bounding box of a circle of radius ``r`` around the center."""
        return (self.cx - r, self.cy - r, self.cx + r, self.cy + r)


def _layer(size: Tuple[int, int]) -> Image.Image:
    return Image.new("RGBA", size, (0, 0, 0, 0))


def _mask_image(mask) -> Image.Image:
    return Image.fromarray(mask)


def _ring(draw: ImageDraw.ImageDraw, geo: WheelGeometry, r: float, width: float, color: RGBA) -> None:
    """Stroke a circle of radius ``r`` centered on its line."""
    w = max(1, round(width))
    draw.ellipse(geo.bbox(r + w / 2), outline=color, width=w)


def _rotated(image: Image.Image, geo: WheelGeometry, rotation: float) -> Image.Image:
    """``image`` turned clockwise by ``rotation`` around the wheel center."""
    degrees = math.degrees(rotation) % 360
    if degrees == 0:
        return image
    return image.rotate(-degrees, resample=Image.Resampling.BICUBIC, center=geo.center)


class WheelRenderer:
    """
    Renderer with layout and prerender caches.

    The wheel body (wedges, labels and hub) does not depend on the rotation,
    so it is drawn once at rotation zero and reused for every frame until
    the labels, the surface size, the emblem or the brand text change. A
    frame is then the fixed rim plus one rotated copy of the body.
    """

    def __init__(
        self,
        theme: Optional[WheelTheme] = None,
        fonts: Optional[FontSet] = None,
        emblem_max_scale: float = DEFAULT_EMBLEM_MAX_SCALE,
    ) -> None:
        self.theme = theme or WheelTheme()
        self.fonts = fonts or FontSet()
        self.emblem_max_scale = emblem_max_scale
        self._layouts: Dict[Tuple[Any, ...], FittedLabel] = {}

        self._rim: Optional[Image.Image] = None
        self._body: Optional[Image.Image] = None
        self._body_key: Optional[Tuple[Any, ...]] = None
        self._body_emblem: Optional[Image.Image] = None

        # Wedge clip masks for one surface size, keyed by (count, index)
        self._clips: Dict[Tuple[int, int], Image.Image] = {}
        self._clip_size: Optional[Tuple[int, int]] = None

    def invalidate(self) -> None:
        """Forget cached label layouts and the prerendered wheel body."""
        self._layouts.clear()
        self._body = None
        self._body_key = None
        self._body_emblem = None

    def layout_label(self, label: str, geo: WheelGeometry, segment_count: int) -> FittedLabel:
        """Shrink-to-fit layout for one wedge label."""
        max_lines = max_lines_for(segment_count)
        key = (label, geo.text_width, max_lines, geo.start_font, geo.min_font)
        fitted = self._layouts.get(key)
        if fitted is None:
            fitted = fit_text(
                label,
                geo.text_width,
                max_lines,
                geo.start_font,
                geo.min_font,
                self.fonts.measure_for,
            )
            self._layouts[key] = fitted
        return fitted

    def render(
        self,
        surface: DrawingSurface,
        segments: Sequence[Any],
        rotation: float,
        emblem: Optional[Image.Image] = None,
        brand_text: str = "",
    ) -> None:
        """Redraw the surface from scratch.

        Args:
            surface: Target surface
            segments: Wheel entries, in angular order
            rotation: Wheel rotation in radians
            emblem: Hub image, or None to draw ``brand_text``
            brand_text: Fallback hub caption
        """
        surface.clear()
        geo = WheelGeometry.for_size(surface.width, surface.height)

        if not segments:
            self._draw_empty(surface.image, geo)
            return

        base = surface.image
        base.alpha_composite(self._rim_layer(base.size, geo))
        body = self._wheel_body(base.size, geo, segments, emblem, brand_text)
        base.alpha_composite(_rotated(body, geo, rotation))

    def _draw_empty(self, base: Image.Image, geo: WheelGeometry) -> None:
        colors = self.theme.colors
        layer = _layer(base.size)
        draw = ImageDraw.Draw(layer)
        r = geo.outer * 0.9
        draw.ellipse(geo.bbox(r), fill=colors.rgba("empty_fill"))
        _ring(draw, geo, r, geo.outer * 0.03, colors.rgba("empty_outline"))

        font = self.fonts.get(math.floor(geo.outer * 0.085))
        draw.text(
            geo.center,
            self.theme.empty_message,
            fill=colors.rgba("empty_text"),
            font=font,
            anchor="mm",
        )
        base.alpha_composite(layer)

    def _rim_layer(self, size: Tuple[int, int], geo: WheelGeometry) -> Image.Image:
        if self._rim is None or self._rim.size != size:
            colors = self.theme.colors
            layer = _layer(size)
            draw = ImageDraw.Draw(layer)
            _ring(draw, geo, geo.radius * 1.01, geo.radius * 0.028, colors.rgba("outer_ring"))
            _ring(draw, geo, geo.radius * 0.985, geo.radius * 0.012, colors.rgba("inner_ring"))
            self._rim = layer
        return self._rim

    def _wheel_body(
        self,
        size: Tuple[int, int],
        geo: WheelGeometry,
        segments: Sequence[Any],
        emblem: Optional[Image.Image],
        brand_text: str,
    ) -> Image.Image:
        """Wedges, labels and hub at rotation zero, rebuilt only when their inputs change."""
        labels = tuple(label_of(entry) for entry in segments)
        key = (size, labels, brand_text.strip())
        if self._body is not None and key == self._body_key and emblem is self._body_emblem:
            return self._body

        body = _layer(size)
        self._draw_wedges(body, geo, len(labels))
        self._draw_labels(body, geo, labels)
        self._draw_hub(body, geo, emblem, key[2])

        self._body = body
        self._body_key = key
        self._body_emblem = emblem
        logger.debug(f"Wheel body rebuilt: {len(labels)} segments at {size[0]}x{size[1]}")
        return body

    def _wedge_clip(self, size: Tuple[int, int], geo: WheelGeometry, index: int, count: int) -> Image.Image:
        if size != self._clip_size:
            self._clips.clear()
            self._clip_size = size

        clip = self._clips.get((count, index))
        if clip is None:
            slice_a = TWO_PI / count
            start = index * slice_a
            mask = sector_mask(size, geo.cx, geo.cy, geo.radius * 0.985, start, start + slice_a)
            clip = _mask_image(mask)
            self._clips[(count, index)] = clip
        return clip

    def _draw_wedges(self, base: Image.Image, geo: WheelGeometry, n: int) -> None:
        slice_deg = 360 / n

        wedges = _layer(base.size)
        draw = ImageDraw.Draw(wedges)
        for i in range(n):
            fill, _ = self.theme.colors.wedge(i)
            a = i * slice_deg
            draw.pieslice(geo.bbox(geo.radius), a, a + slice_deg, fill=fill)
        base.alpha_composite(wedges)

        if n < 2:
            return

        dividers = _layer(base.size)
        draw = ImageDraw.Draw(dividers)
        width = max(1, round(geo.radius * 0.008))
        color = self.theme.colors.rgba("divider")
        for i in range(n):
            a = i * TWO_PI / n
            end = (geo.cx + geo.radius * math.cos(a), geo.cy + geo.radius * math.sin(a))
            draw.line([geo.center, end], fill=color, width=width)
        base.alpha_composite(dividers)

    def _draw_labels(self, base: Image.Image, geo: WheelGeometry, labels: Sequence[str]) -> None:
        n = len(labels)
        slice_a = TWO_PI / n
        layer = _layer(base.size)

        for i, label in enumerate(labels):
            if not label:
                continue

            fitted = self.layout_label(label, geo, n)
            _, text_color = self.theme.colors.wedge(i)
            text = self._label_layer(base.size, geo, fitted, text_color, shadow=i % 2 == 1)
            text = _rotated(text, geo, (i + 0.5) * slice_a)

            # Clip to the wedge so wrapped text never bleeds
            layer.paste(text, (0, 0), self._wedge_clip(base.size, geo, i, n))

        base.alpha_composite(layer)

    def _label_layer(
        self,
        size: Tuple[int, int],
        geo: WheelGeometry,
        fitted: FittedLabel,
        color: RGBA,
        shadow: bool,
    ) -> Image.Image:
        """Label drawn horizontally, starting right of the hub."""
        font = self.fonts.get(fitted.font_size)
        lines = fitted.layout.lines
        offsets = line_offsets(len(lines), fitted.line_height)
        x = geo.cx + geo.text_x

        layer = _layer(size)
        if shadow:
            draw = ImageDraw.Draw(layer)
            shadow_color = self.theme.colors.rgba("text_shadow")
            for line, dy in zip(lines, offsets):
                draw.text((x, geo.cy + dy), line, fill=shadow_color, font=font, anchor="lm")
            layer = layer.filter(ImageFilter.GaussianBlur(geo.radius * 0.006))

        draw = ImageDraw.Draw(layer)
        for line, dy in zip(lines, offsets):
            draw.text((x, geo.cy + dy), line, fill=color, font=font, anchor="lm")
        return layer

    def _draw_hub(
        self,
        base: Image.Image,
        geo: WheelGeometry,
        emblem: Optional[Image.Image],
        brand_text: str,
    ) -> None:
        colors = self.theme.colors
        layer = _layer(base.size)
        draw = ImageDraw.Draw(layer)
        draw.ellipse(geo.bbox(geo.hub), fill=colors.rgba("hub"))
        _ring(draw, geo, geo.hub, geo.inner * 0.13, colors.rgba("hub_outline"))
        base.alpha_composite(layer)

        if emblem is not None:
            self._draw_emblem(base, geo, emblem)
        elif brand_text:
            self._draw_brand(base, geo, brand_text)

    def _draw_emblem(self, base: Image.Image, geo: WheelGeometry, emblem: Image.Image) -> None:
        if emblem.width <= 0 or emblem.height <= 0:
            return

        max_size = geo.hub * self.emblem_max_scale
        scale = min(max_size / emblem.width, max_size / emblem.height)
        dw = max(1, round(emblem.width * scale))
        dh = max(1, round(emblem.height * scale))
        scaled = emblem.convert("RGBA").resize((dw, dh), Image.Resampling.LANCZOS)

        layer = _layer(base.size)
        layer.paste(scaled, (round(geo.cx - dw / 2), round(geo.cy - dh / 2)))

        clip = circle_mask(base.size, geo.cx, geo.cy, geo.hub * 0.82)
        clipped = _layer(base.size)
        clipped.paste(layer, (0, 0), _mask_image(clip))
        base.alpha_composite(clipped)

    def _draw_brand(self, base: Image.Image, geo: WheelGeometry, text: str) -> None:
        colors = self.theme.colors
        font = self.fonts.get(math.floor(geo.inner * 0.54))

        shadow = _layer(base.size)
        ImageDraw.Draw(shadow).text(geo.center, text, fill=colors.rgba("text_shadow"), font=font, anchor="mm")
        layer = shadow.filter(ImageFilter.GaussianBlur(geo.inner * 0.075))
        ImageDraw.Draw(layer).text(geo.center, text, fill=colors.rgba("brand_text"), font=font, anchor="mm")
        base.alpha_composite(layer)
