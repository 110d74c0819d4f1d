import argparse
import logging

import uvicorn

from local_crud.config import get_settings


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the local library CRUD API")
    parser.add_argument("--host", default=settings.host, help="Bind address (keep it on localhost)")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser.parse_args()


def main() -> int:
    settings = get_settings()
    args = parse_args()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.host not in {"127.0.0.1", "localhost", "::1"}:
        logging.getLogger(__name__).warning("Binding to %s exposes an unauthenticated API", args.host)
    uvicorn.run("local_crud.main:app", host=args.host, port=args.port, reload=args.reload, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
