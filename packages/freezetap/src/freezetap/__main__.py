"""Entry point for freezetap, usable as ``python -m freezetap``."""

from .cli import app


def main():
    """Run the freezetap command line."""
    app(prog_name="freezetap")


if __name__ == "__main__":
    main()
