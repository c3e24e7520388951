from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Tuple

from codereadr.catalog import Action, Section
from codereadr.client import CodeReadrClient
from codereadr.config import ClientConfig, configure_logging
from codereadr.exceptions import ApiError, CodeReadrError
from codereadr.models import response_shape_for
from codereadr.protocol.encoding import FilePayload
from codereadr.utils.json_safe import to_jsonable


def _print_json(obj: object) -> None:
    """Print JSON to stdout."""
    print(json.dumps(obj, indent=2, sort_keys=True, default=str))


def _split_pair(raw: str) -> Tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {raw!r}")
    return name, value


def _build_parameters(args: argparse.Namespace) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for name, value in args.param or []:
        params[name] = value
    for name, path in args.file or []:
        params[name] = FilePayload.from_path(path, max_bytes=args.max_upload_bytes)
    return params


def cmd_call(args: argparse.Namespace) -> int:
    """Run one section/action and print the decoded result.

    Security notes:
    - Treat server response as untrusted.
    - The API key is never printed.

    """

    try:
        config = ClientConfig.from_env(api_key=args.api_key)
        params = _build_parameters(args)
    except (CodeReadrError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    shape = None if args.raw else response_shape_for(args.section, args.action)
    client = CodeReadrClient(config)
    try:
        result = client.call(args.section, args.action, params, shape=shape)
    except ApiError as e:
        _print_json({"ok": False, "code": e.code, "message": e.message})
        return 2
    except CodeReadrError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    _print_json({"ok": True, "result": to_jsonable(result)})
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    p = argparse.ArgumentParser(prog="codereadr", description="CodeREADr API CLI")
    p.add_argument("--log-level", default=None, help="Override CODEREADR_LOG_LEVEL")
    sub = p.add_subparsers(dest="cmd", required=True)

    cp = sub.add_parser("call", help="Call one API action")
    cp.add_argument("section", help=f"Section ({', '.join(s.value for s in Section)})")
    cp.add_argument("action", help=f"Action ({', '.join(a.value for a in Action)})")
    cp.add_argument("--api-key", default=None, help="API key (default: CODEREADR_API_KEY)")
    cp.add_argument(
        "-p",
        "--param",
        action="append",
        type=_split_pair,
        metavar="NAME=VALUE",
        help="Form field (repeatable)",
    )
    cp.add_argument(
        "-f",
        "--file",
        action="append",
        type=_split_pair,
        metavar="NAME=PATH",
        help="Send a local file as file part NAME (repeatable)",
    )
    cp.add_argument(
        "--max-upload-bytes", type=int, default=25 * 1024 * 1024, help="Client-side upload cap"
    )
    cp.add_argument("--raw", action="store_true", help="Only check the envelope, no typed result")
    cp.set_defaults(func=cmd_call)

    return p


def main(argv: List[str] | None = None) -> int:
    """CLI entry."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except CodeReadrError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
