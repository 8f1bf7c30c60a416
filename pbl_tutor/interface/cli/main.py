"""CLI for the PBL case tutor: serve the API, build the index, ask one question."""

from __future__ import annotations

import argparse
import sys

from dotenv import load_dotenv

from pbl_tutor.application.dto.ask_dto import AskRequest
from pbl_tutor.config.compose import Container, build_container
from pbl_tutor.config.logging_setup import configure_logging
from pbl_tutor.domain.errors import DomainError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pbl-tutor", description="PBL case card tutor")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Bind address (default: $HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: $PORT)")

    sub.add_parser("index", help="Embed all cards and report the index size")

    ask = sub.add_parser("ask", help="Ask one question against a case")
    ask.add_argument("--case-id", required=True)
    ask.add_argument("--question", required=True)
    ask.add_argument("--revealed", nargs="*", default=[], help="Card ids already revealed")
    return parser


def cmd_serve(container: Container, args: argparse.Namespace) -> int:
    import uvicorn

    from pbl_tutor.interface.http.api import create_app

    settings = container.settings
    uvicorn.run(
        create_app(container),
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_index(container: Container, args: argparse.Namespace) -> int:
    try:
        index = container.build_index()
    except DomainError as err:
        print(f"[ERROR] {type(err).__name__}: {err}")
        return 1
    print(f"Indexed {len(index)} cards across {len(index.case_ids())} cases.")
    return 0


def cmd_ask(container: Container, args: argparse.Namespace) -> int:
    try:
        container.build_index()
    except DomainError as err:
        print(f"[ERROR] {type(err).__name__}: {err}")
        return 1

    req = AskRequest(
        case_id=args.case_id,
        question=args.question,
        revealed_ids=tuple(args.revealed),
    )
    result = container.get_ask_use_case().execute(req)

    if result.ok and result.value is not None:
        if result.value.no_hit:
            print("[NO HIT] No card matched the question.")
            return 0
        for i, hit in enumerate(result.value.hits, 1):
            print(f"[{i}] {hit.id} {hit.title} (score={hit.score:.3f})")
            print(f"    {hit.content}")
        return 0

    err = result.error
    print(f"[ERROR] {type(err).__name__}: {err}")
    return 1


COMMANDS = {"serve": cmd_serve, "index": cmd_index, "ask": cmd_ask}


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    container = build_container()
    configure_logging(container.settings.log_level)
    return COMMANDS[args.command](container, args)


if __name__ == "__main__":
    sys.exit(main())
