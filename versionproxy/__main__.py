"""``python -m versionproxy`` -- serve the API with uvicorn."""


def main() -> None:
    from versionproxy.main import run

    run()


if __name__ == "__main__":
    main()
