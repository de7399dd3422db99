"""
Development launcher for the Handover Ops API.

    python run.py                 # 127.0.0.1:8000
    python run.py --reload        # auto-reload on code changes
    python run.py --host 0.0.0.0 --port 8080 --workers 4
"""
import argparse
import uvicorn

from handover.config.settings import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the Handover Ops API with uvicorn")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument(
        "--workers", type=int, default=1,
        help="Worker processes; forced to 1 with --reload"
    )
    return parser


def main():
    args = build_parser().parse_args()
    workers = 1 if args.reload else max(args.workers, 1)

    print(f"Handover Ops API on http://{args.host}:{args.port}")
    print(f"  database={settings.mongo_db} environment={settings.environment} workers={workers}")

    uvicorn.run(
        "handover.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=workers,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
