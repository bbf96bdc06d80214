"""
Result schemas handed back to presentation-layer callers.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, computed_field


# --------------------------------------------------------------------------- #
# Blur categories
# --------------------------------------------------------------------------- #

class BlurCategory(str, Enum):
    """Backdrop-blur tier picked from background brightness."""

    ultra_thin = "ultra_thin"
    regular = "regular"
    thin = "thin"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def material(self) -> str:
        """Identifier of the matching system blur material."""
        return _MATERIALS[self]


_DISPLAY_NAMES = {
    BlurCategory.ultra_thin: "Ultra Thin Material",
    BlurCategory.regular: "Regular Material",
    BlurCategory.thin: "Thin Material",
}

_MATERIALS = {
    BlurCategory.ultra_thin: "ultraThinMaterial",
    BlurCategory.regular: "regularMaterial",
    BlurCategory.thin: "thinMaterial",
}


# --------------------------------------------------------------------------- #
# Analysis result
# --------------------------------------------------------------------------- #

class BrightnessAnalysis(BaseModel):
    score: float = Field(
        ge=0.0,
        le=1.0,
        description="Sample-averaged brightness. 0 = black, 1 = white.",
        examples=[0.502],
    )
    category: BlurCategory = Field(
        description="Blur tier for this brightness: ultra_thin < 0.3, "
                    "regular < 0.7, thin otherwise.",
        examples=["regular"],
    )
    strategy: str = Field(
        description="Scoring strategy that produced `score`. "
                    "Scores from different strategies are not comparable near band edges.",
        examples=["luma"],
    )
    sample_count: int = Field(
        ge=0,
        description="Number of pixels actually read.",
        examples=[10_000],
    )
    used_fallback: bool = Field(
        default=False,
        description="True when nothing could be sampled and the default score was used.",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def category_name(self) -> str:
        return self.category.display_name

    @computed_field  # type: ignore[prop-decorator]
    @property
    def material(self) -> str:
        return self.category.material

    def diagnostic_lines(self) -> list[str]:
        """Labels shown under the preview: blur setting and luminance."""
        return [
            f"Blur setting = {self.category_name}",
            f"Luminance = {self.score:.3f}",
        ]
