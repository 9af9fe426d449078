"""Run the API server on the configured address: ``python -m logalert``."""

import uvicorn

from logalert.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "logalert.api.main:app",
        host=settings.server.addr,
        port=settings.server.port,
    )


if __name__ == "__main__":
    main()
