from __future__ import annotations

from dataclasses import dataclass, field, replace

from rasterplot.raster.draw_text import Font, load_font, text_size


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class TextStyle:
    color: RGBA
    font_family: str
    font_size_px: float
    rotate_deg: int = 0
    font: Font = field(compare=False, repr=False, default=None)  # type: ignore[assignment]

    @classmethod
    def create(
        cls,
        *,
        color: RGBA,
        font_family: str,
        font_size_px: float,
        rotate_deg: int = 0,
        strict: bool = False,
    ) -> "TextStyle":
        """Resolve the font up front; raises FontResolutionError when it cannot be loaded."""
        font = load_font(font_family, font_size_px, strict=strict)
        return cls(
            color=color,
            font_family=font_family,
            font_size_px=float(font_size_px),
            rotate_deg=rotate_deg,
            font=font,
        )

    def resolved_font(self) -> Font:
        if self.font is not None:
            return self.font
        return load_font(self.font_family, self.font_size_px)

    def extent(self, text: str) -> tuple[int, int]:
        """(width, height) of the rendered text after rotation."""
        return text_size(text, font=self.resolved_font(), rotate_deg=self.rotate_deg)

    def width(self, text: str) -> float:
        return float(self.extent(text)[0])

    def height(self, text: str) -> float:
        return float(self.extent(text)[1])

    def space_width(self) -> float:
        return float(self.resolved_font().getlength(" "))

    def rotated(self, rotate_deg: int) -> "TextStyle":
        return replace(self, rotate_deg=rotate_deg)
