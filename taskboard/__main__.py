"""
Run the API server:

  python -m taskboard
"""

import uvicorn

from taskboard.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "taskboard.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.APP_ENV == "dev" and settings.DEBUG,
    )


if __name__ == "__main__":
    main()
