from skills_hub.cli.main import app


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
