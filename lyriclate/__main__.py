"""Entry point for the lyriclate web API."""

import argparse

from .ui_web.app import main


def run(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="lyriclate", description="Transcribe and translate song lyrics.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    return main(host=args.host, port=args.port)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(run())
