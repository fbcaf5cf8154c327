import uvicorn

from suds_registry.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "suds_registry.main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        workers=settings.BACKEND_WORKERS,
        log_config=None,
    )


if __name__ == "__main__":
    main()
