"""Gradio application for uploading a photo and showing its MST analysis."""

from pathlib import Path

import gradio as gr

from skin_tone_analyzer.analyzer.pipeline import SkinToneAnalyzer
from skin_tone_analyzer.errors import AnalysisError
from skin_tone_analyzer.models import AnalysisReport, SourceImage


def format_summary(report: AnalysisReport) -> str:
    """Markdown summary of one analysis."""
    result = report.result
    lines = [
        f"### {result.adjusted_label} · {result.tone_group}",
        f"Confidence: {result.confidence * 100:.1f}%",
        "",
        f"Face detected: {'yes' if result.face_detected else 'no, the full photo was used'}",
        "",
        "**Recommended colours:** "
        + ", ".join(f"{c.name} `{c.hex}`" for c in result.recommendations.recommended),
        "",
        "**Colours to avoid:** "
        + ", ".join(f"{c.name} `{c.hex}`" for c in result.recommendations.avoid),
    ]
    if result.adjusted_label != result.raw_label:
        lines.insert(2, f"Adjusted from {result.raw_label} for low light.")
    return "\n".join(lines)


def create_app(analyzer: SkinToneAnalyzer | None = None) -> gr.Blocks:
    """Create and return the Gradio Blocks app."""
    analyzer = analyzer or SkinToneAnalyzer.from_config()

    def do_analyze(image_path: str | None) -> tuple:
        if not image_path:
            raise gr.Error("Please select an image first.")
        try:
            report = analyzer.analyze(SourceImage.from_path(Path(image_path)))
        except AnalysisError as exc:
            raise gr.Error(f"An error occurred during analysis: {exc}") from exc
        return report.processed_image, format_summary(report), report.to_dict()

    with gr.Blocks(title="SkinTone AI") as app:
        gr.Markdown("## Skin tone analyzer\nUpload a clear, well lit photo of a face (max 5MB).")
        with gr.Row():
            with gr.Column():
                image_input = gr.Image(type="filepath", label="Photo")
                analyze_btn = gr.Button("Analyze", variant="primary")
            with gr.Column():
                processed_output = gr.Image(type="pil", label="Analyzed region")
                summary_output = gr.Markdown()
        record_output = gr.JSON(label="Result record")

        analyze_btn.click(
            fn=do_analyze,
            inputs=[image_input],
            outputs=[processed_output, summary_output, record_output],
        )

    return app
