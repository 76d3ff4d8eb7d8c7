"""Skin tone analyzer UI with Gradio."""


def main() -> None:
    """CLI entry point for the Gradio UI."""
    from skin_tone_analyzer.logging_config import setup_logging
    from skin_tone_analyzer.web.app import create_app

    setup_logging()
    app = create_app()
    app.launch()
