"""
PhonePe Checkout Bridge — Uvicorn Launcher

Usage:
    python run.py
    python run.py --port 8080 --reload
    python run.py --forwarded-allow-ips "*"   # behind a reverse proxy
"""
import argparse
import os

import uvicorn

from app.config import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the PhonePe checkout bridge")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument(
        "--forwarded-allow-ips",
        default=None,
        help="Trust X-Forwarded-For from these IPs so rate limits see the real client",
    )
    return parser


def main():
    args = build_parser().parse_args()
    settings = get_settings()

    mode = settings.auth_mode
    gateway = "PROD" if settings.is_production else "SANDBOX"
    print(f"[{settings.APP_NAME} {settings.APP_VERSION}] {mode} auth against {gateway}")
    print(f"  POST http://{args.host}:{args.port}/api/phonepe-initiate")
    print(f"  CORS origin / redirect: {settings.redirect_url}")

    options = {
        "host": args.host,
        "port": args.port,
        "reload": args.reload,
        "workers": args.workers,
        "log_level": "debug" if settings.DEBUG else "info",
    }
    if args.forwarded_allow_ips:
        options["proxy_headers"] = True
        options["forwarded_allow_ips"] = args.forwarded_allow_ips

    uvicorn.run("app.main:app", **options)


if __name__ == "__main__":
    main()
