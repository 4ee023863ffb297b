"""CLI entry point for the CaseLink API server."""

import argparse
import os

from caselink.config import settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="caselink-server",
        description="CaseLink API server: orgs, clients, helpers and connections",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    seed = parser.add_mutually_exclusive_group()
    seed.add_argument("--seed", dest="seed", action="store_true", default=None, help="Seed the demo tenant on startup")
    seed.add_argument("--no-seed", dest="seed", action="store_false", help="Start with an empty database")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines instead of console output")
    args = parser.parse_args(argv)

    # Settings are already loaded; update both the env and the live object
    if args.seed is not None:
        os.environ["CASELINK_SEED_DEMO_DATA"] = "1" if args.seed else "0"
        settings.seed_demo_data = args.seed
    if args.json_logs:
        os.environ["CASELINK_JSON_LOGS"] = "1"
        settings.json_logs = True

    import uvicorn

    uvicorn.run("caselink.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
