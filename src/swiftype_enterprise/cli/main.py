from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Sequence

from ..client import Client
from ..config import load_configuration
from ..errors import ConfigurationError, InvalidDocument, Timeout, TransportError
from ..logging import get_logger
from ..polling import DEFAULT_POLL_INTERVAL, DEFAULT_POLL_TIMEOUT

LOG = get_logger("cli-main")

EXIT_OK = 0
EXIT_INVALID = 2
EXIT_TRANSPORT = 3
EXIT_TIMEOUT = 4


def _print_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def _read_documents(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _build_client(ns: argparse.Namespace) -> Client:
    config = load_configuration(ns.dotenv_dir)
    return Client(config, access_token=ns.access_token, endpoint=ns.endpoint)


def _index(ns: argparse.Namespace) -> int:
    try:
        documents = _read_documents(ns.file)
    except (OSError, ValueError) as e:
        LOG.error(f"Could not read documents from {ns.file}: {e}")
        return EXIT_INVALID
    client = _build_client(ns)
    if ns.async_:
        _print_json(client.async_index_documents(ns.source_key, documents))
    else:
        _print_json(
            client.index_documents(
                ns.source_key, documents, timeout=ns.timeout, interval=ns.interval
            )
        )
    return EXIT_OK


def _receipts(ns: argparse.Namespace) -> int:
    _print_json(_build_client(ns).document_receipts(ns.receipt_ids))
    return EXIT_OK


def _destroy(ns: argparse.Namespace) -> int:
    _print_json(_build_client(ns).destroy_documents(ns.source_key, ns.external_ids))
    return EXIT_OK


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swiftype-enterprise",
        description="Index and manage Content Source documents in Swiftype Enterprise Search.",
    )
    parser.add_argument("--access-token", help="Overrides SWIFTYPE_ENTERPRISE_ACCESS_TOKEN")
    parser.add_argument("--endpoint", help="Overrides SWIFTYPE_ENTERPRISE_ENDPOINT")
    parser.add_argument(
        "--dotenv-dir",
        default=os.getcwd(),
        help="Directory to start searching upwards for a .env file",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    index = subparsers.add_parser("index", help="Index documents from a JSON file ('-' for stdin)")
    index.add_argument("source_key", help="Content Source key")
    index.add_argument("file", help="JSON document or list of documents")
    index.add_argument(
        "--async",
        dest="async_",
        action="store_true",
        help="Print receipt IDs immediately instead of waiting for processing",
    )
    index.add_argument("--timeout", type=float, default=DEFAULT_POLL_TIMEOUT)
    index.add_argument("--interval", type=float, default=DEFAULT_POLL_INTERVAL)
    index.set_defaults(handler=_index)

    receipts = subparsers.add_parser("receipts", help="Show document receipts by ID")
    receipts.add_argument("receipt_ids", nargs="+")
    receipts.set_defaults(handler=_receipts)

    destroy = subparsers.add_parser("destroy", help="Destroy documents by external ID")
    destroy.add_argument("source_key", help="Content Source key")
    destroy.add_argument("external_ids", nargs="+")
    destroy.set_defaults(handler=_destroy)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    provided = list(argv) if argv is not None else sys.argv[1:]
    args = build_arg_parser().parse_args(provided)
    LOG.debug(f"Running subcommand '{args.command}'")
    try:
        code = args.handler(args)
    except (ConfigurationError, InvalidDocument) as e:
        LOG.error(str(e))
        code = EXIT_INVALID
    except Timeout as e:
        LOG.error(f"Timed out waiting for document receipts: {e}")
        code = EXIT_TIMEOUT
    except TransportError as e:
        LOG.error(f"Request failed: {e}")
        code = EXIT_TRANSPORT
    LOG.info(f"Subcommand '{args.command}' finished with exit code {code}.")
    return code


if __name__ == "__main__":
    sys.exit(main())
