"""CLI entry point for gitscope."""

import logging
from typing import Optional


def configure_logging(level: str, log_file: Optional[str]) -> None:
    """Log to ``log_file`` if given; stderr belongs to the TUI."""
    handler: logging.Handler = (
        logging.FileHandler(log_file) if log_file else logging.NullHandler()
    )
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[handler],
    )


def main() -> None:
    """Launch the gitscope TUI."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (e.g. GITHUB_TOKEN, GEMINI_API_KEY)

    from gitscope.config import Settings

    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_file)

    from gitscope.app import GitScopeApp

    app = GitScopeApp(settings=settings)
    app.run()


if __name__ == "__main__":
    main()
