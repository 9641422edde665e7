"""Run the relay API server: `python -m relay`."""

import uvicorn

from relay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "relay.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
    )


if __name__ == "__main__":
    main()
