from loguru import logger

from blogmirror.cli.main import app


def main() -> None:
    logger.info("Application started")
    app()


if __name__ == "__main__":
    main()
