# catalog/__main__.py
# Pornire: python -m catalog  (HOST/PORT din settings)
import uvicorn

from catalog.core.settings import settings


def main() -> None:
    uvicorn.run(
        "catalog.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
