"""CLI entry point for hubfeed."""


def main() -> None:
    """Launch the hubfeed TUI."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (GITHUB_TOKEN, SUPABASE_URL, ...)

    from hubfeed.app import HubFeedApp
    from hubfeed.config import Settings, configure_logging

    settings = Settings.from_env()
    configure_logging(settings)

    app = HubFeedApp(settings=settings)
    app.run()


if __name__ == "__main__":
    main()
