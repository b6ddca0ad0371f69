"""Process entrypoint: serve the API with uvicorn."""

import uvicorn

from learnify.config import Settings


def main() -> None:
    """Start the server on the configured host and port."""
    settings = Settings()
    print(f"Learnify running at http://localhost:{settings.port}")  # noqa: T201
    uvicorn.run("learnify.api.asgi:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
