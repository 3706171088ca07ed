"""Allow running brewctl as ``python -m brewctl``."""

from brewctl.cli.main import app

if __name__ == "__main__":
    app()
