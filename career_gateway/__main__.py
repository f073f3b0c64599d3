"""
Run the gateway with uvicorn.

    python -m career_gateway
"""

from dotenv import load_dotenv

# Load .env before settings are read
load_dotenv()

import uvicorn  # noqa: E402

from .config import get_settings  # noqa: E402


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "career_gateway.app:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=10,
    )


if __name__ == "__main__":
    main()
