"""
Entry point: `python -m quillpost`.

Serves `quillpost.main:app` with uvicorn on HOST/PORT from the environment
(defaults 0.0.0.0:3000).
"""

import uvicorn

from quillpost.config import settings


def main() -> None:
    uvicorn.run(
        "quillpost.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
