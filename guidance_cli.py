"""Thin CLI for trying the guidance pipeline locally.

Usage:
    python guidance_cli.py ask "Police arrested me without showing warrant"
    python guidance_cli.py health --db data/legal_cases.db
    python guidance_cli.py serve --port 3001
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys

DEFAULT_DB = os.environ.get("LEGAL_CASES_DB", "data/legal_cases.db")


def main():
    parser = argparse.ArgumentParser(description="Legal guidance pipeline CLI")
    parser.add_argument("--db", default=DEFAULT_DB, help="Path to the case store")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command")

    p_ask = sub.add_parser("ask", help="Answer a free-text legal question")
    p_ask.add_argument("query", help="Question text")

    sub.add_parser("health", help="Check store connectivity and counts")

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=int(os.environ.get("PORT", "3001")))

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if args.command == "ask":
        from guidance_stack import CaseStore, GateThresholds, GuidancePipeline
        from models import ErrorPayload

        pipeline = GuidancePipeline(CaseStore(args.db), thresholds=GateThresholds.from_env())
        payload = pipeline.answer(args.query)
        print(json.dumps(payload.to_json(), ensure_ascii=False, indent=2))
        if isinstance(payload, ErrorPayload):
            sys.exit(1)

    elif args.command == "health":
        from guidance_stack import CaseStore, StoreUnavailable

        store = CaseStore(args.db)
        try:
            report = {
                "status": "ok",
                "database": "connected",
                "cases": store.count(),
                "categories": store.categories(),
            }
        except StoreUnavailable as e:
            print(json.dumps({"status": "error", "database": "disconnected", "error": str(e)}))
            sys.exit(1)
        print(json.dumps(report, ensure_ascii=False, indent=2))

    elif args.command == "serve":
        import uvicorn

        os.environ["LEGAL_CASES_DB"] = args.db
        uvicorn.run("guidance_server:app", host=args.host, port=args.port, log_level="info")

    else:
        parser.print_help()
        sys.exit(2)


if __name__ == "__main__":
    main()
