import uvicorn

from geoattr.config import Settings


def main() -> None:
    """Run the FastAPI application with uvicorn, using APP_HOST/APP_PORT/APP_RELOAD."""
    settings = Settings()
    uvicorn.run(
        "geoattr.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
