# main.py

from argparse import ArgumentParser
from subprocess import run
from sys import executable

from cms.configs import settings


def start(cmmd: list[str]) -> None:
    run(cmmd, check=True)


def main() -> None:
    parser = ArgumentParser(description="Run the content-management API with uvicorn")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto reload")
    args = parser.parse_args()

    cmmd = [
        executable,
        "-m",
        "uvicorn",
        "cms.main:app",
        "--host",
        args.host,
        "--port",
        str(args.port),
        "--log-level",
        "debug" if settings.DEBUG else "info",
    ]
    if not args.no_reload:
        cmmd.append("--reload")
    start(cmmd)


if __name__ == "__main__":
    main()
