"""WSGI entry point for the life plan application."""

import argparse
import os

from lifeplan import create_app
from lifeplan.config import get_global_settings

app = create_app()


def main() -> None:
    """Run the development server."""
    parser = argparse.ArgumentParser(description="Life plan projection API")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", "5000")),
        help="Port to listen on (defaults to $PORT or 5000)",
    )
    args = parser.parse_args()

    debug = get_global_settings().app_env == "development"
    app.run(debug=debug, host="0.0.0.0", port=args.port)


if __name__ == "__main__":
    main()
