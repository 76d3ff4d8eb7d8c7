"""MST scale swatches, tone groups and clothing recommendations."""

from skin_tone_analyzer.models import (
    ClassificationResult,
    ColorSwatch,
    RecommendationBundle,
    ToneGroup,
)
from skin_tone_analyzer.tone.adjustment import adjust, label_number

CLASS_LABELS: tuple[str, ...] = tuple(f"MST{i}" for i in range(1, 11))

MST_COLORS: tuple[str, ...] = (
    "#f6ede4",
    "#f3e7db",
    "#f7ead0",
    "#eadaba",
    "#d7bd96",
    "#a07e56",
    "#825c43",
    "#604134",
    "#3a312a",
    "#292420",
)


def _bundle(recommended: list[tuple[str, str]], avoid: list[tuple[str, str]]) -> RecommendationBundle:
    return RecommendationBundle(
        recommended=tuple(ColorSwatch(name, hex_) for name, hex_ in recommended),
        avoid=tuple(ColorSwatch(name, hex_) for name, hex_ in avoid),
    )


CLOTHING_RECOMMENDATIONS: dict[ToneGroup, RecommendationBundle] = {
    ToneGroup.LIGHT: _bundle(
        [
            ("Navy Blue", "#000080"),
            ("Royal Purple", "#7851a9"),
            ("Emerald Green", "#046307"),
            ("Burgundy", "#800020"),
            ("Sapphire Blue", "#0f52ba"),
        ],
        [("Orange", "#ffa500"), ("Bright Yellow", "#ffff00"), ("Pastel Colors", "#fadadd")],
    ),
    ToneGroup.LIGHT_MEDIUM: _bundle(
        [
            ("Teal", "#008080"),
            ("Cobalt Blue", "#0047ab"),
            ("Lavender", "#e6e6fa"),
            ("Ruby Red", "#9b111e"),
            ("Forest Green", "#228b22"),
        ],
        [("Brown", "#5c4033"), ("Khaki", "#c3b091"), ("Olive", "#808000")],
    ),
    ToneGroup.MEDIUM: _bundle(
        [
            ("Coral", "#ff7f50"),
            ("Turquoise", "#40e0d0"),
            ("Olive Green", "#556b2f"),
            ("Royal Blue", "#4169e1"),
            ("Magenta", "#c71585"),
        ],
        [("Neon Colors", "#39ff14"), ("White", "#ffffff"), ("Black", "#000000")],
    ),
    ToneGroup.MEDIUM_DEEP: _bundle(
        [
            ("Gold", "#ffd700"),
            ("Mustard Yellow", "#ffdb58"),
            ("Orange", "#ffa500"),
            ("Kelly Green", "#4cbb17"),
            ("Electric Blue", "#7df9ff"),
        ],
        [("Pastel Colors", "#fadadd"), ("Beige", "#f5f5dc"), ("Silver", "#c0c0c0")],
    ),
    ToneGroup.DEEP: _bundle(
        [
            ("Bright Yellow", "#ffff00"),
            ("Fuchsia", "#ff00ff"),
            ("Lime Green", "#32cd32"),
            ("Bright Orange", "#ff4500"),
            ("Aqua", "#00ffff"),
        ],
        [("Dark Colors", "#2f4f4f"), ("Brown", "#5c4033"), ("Navy", "#000080")],
    ),
}


def tone_group(label: str) -> ToneGroup:
    """Bucket an MST label into one of the five tone groups."""
    n = label_number(label)
    if n <= 2:
        return ToneGroup.LIGHT
    if n <= 4:
        return ToneGroup.LIGHT_MEDIUM
    if n <= 6:
        return ToneGroup.MEDIUM
    if n <= 8:
        return ToneGroup.MEDIUM_DEEP
    return ToneGroup.DEEP


def recommendations(group: ToneGroup) -> RecommendationBundle:
    return CLOTHING_RECOMMENDATIONS[group]


def mst_color(label: str) -> str:
    return MST_COLORS[label_number(label) - 1]


def compose_result(
    raw_label: str,
    confidence: float,
    luminance: float,
    face_detected: bool,
) -> ClassificationResult:
    """Apply the low-light correction and attach tone group and recommendations."""
    adjusted = adjust(raw_label, luminance)
    group = tone_group(adjusted)
    return ClassificationResult(
        raw_label=raw_label,
        adjusted_label=adjusted,
        confidence=min(1.0, max(0.0, confidence)),
        luminance=luminance,
        face_detected=face_detected,
        tone_group=group,
        recommendations=recommendations(group),
    )
