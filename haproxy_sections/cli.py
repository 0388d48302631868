# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to parse a config and print
#   the sections asked for. Query results go to stdout as JSON,
#   status and errors go to stderr.
#
# COMMANDS:
# ---------
# 1. Show the global / defaults sections:
#    python -m haproxy_sections.cli --config haproxy.config global
#    python -m haproxy_sections.cli --config haproxy.config defaults
#
# 2. Show one frontend / backend by exact name:
#    python -m haproxy_sections.cli --config haproxy.config backend be_http:ns:svc
#
# 3. Show every frontend / backend whose name contains a substring:
#    python -m haproxy_sections.cli --config haproxy.config backends :ns:
#
# 4. List frontend and backend names:
#    python -m haproxy_sections.cli --config haproxy.config list
#
# 5. Save a snapshot, later diff a block against it:
#    python -m haproxy_sections.cli --config haproxy.config snapshot before
#    python -m haproxy_sections.cli --config haproxy.config diff before backend be1
#
# EXIT CODES:
# -----------
#   0 → success
#   1 → named block / snapshot not found
#   2 → config could not be read, or bad usage
#
# ==============================================

import argparse
import json
import logging
import sys
from typing import List, Optional

from haproxy_sections.classification import HeaderMatch, MissingName
from haproxy_sections.config import AppConfig, get_config
from haproxy_sections.errors import HaproxySectionsError
from haproxy_sections.parser import ConfigParser
from haproxy_sections.persistence import SnapshotStore
from haproxy_sections.storage import BlockStore, diff_named_block

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def _build_parser(config: AppConfig) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="haproxy-sections",
        description="Extract global, defaults, frontend and backend sections from an HAProxy config",
    )
    p.add_argument(
        "--config",
        default=config.config_path,
        help="path or http(s) URL of the config (default: $HAPROXY_CONFIG_PATH)",
    )
    p.add_argument(
        "--header-match",
        choices=[m.value for m in HeaderMatch],
        default=config.parser.header_match,
        help="'prefix': line starts with the keyword; 'token': first word equals it",
    )
    p.add_argument(
        "--missing-name",
        choices=[m.value for m in MissingName],
        default=config.parser.missing_name,
        help="what an unnamed frontend/backend header does with its content",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("global", help="lines of the global section")
    sub.add_parser("defaults", help="lines of the defaults section")
    sub.add_parser("list", help="frontend and backend names")

    for kind in BlockStore.KINDS:
        sp = sub.add_parser(kind, help=f"one {kind} by exact name")
        sp.add_argument("name")
        sp = sub.add_parser(f"{kind}s", help=f"every {kind} whose name contains SUBSTR")
        sp.add_argument("substr", nargs="?", default="")

    sp = sub.add_parser("snapshot", help="save the parsed config under NAME")
    sp.add_argument("name")
    sp.add_argument("--dir", default=config.snapshot_dir, help="snapshot directory")

    sp = sub.add_parser("diff", help="diff one block between a snapshot and the current config")
    sp.add_argument("snapshot")
    sp.add_argument("kind", choices=BlockStore.KINDS)
    sp.add_argument("name")
    sp.add_argument("--dir", default=config.snapshot_dir, help="snapshot directory")

    return p


def _print_json(value) -> None:
    print(json.dumps(value, indent=2))


def _run(ns: argparse.Namespace, config: AppConfig) -> int:
    options = config.parser.to_options()
    options.header_match = HeaderMatch(ns.header_match)
    options.missing_name = MissingName(ns.missing_name)

    parser = ConfigParser(ns.config, options=options, config=config)
    store = parser.parse()
    for warning in store.warnings:
        print(f"⚠ {warning}", file=sys.stderr)

    if ns.cmd == "global":
        _print_json(list(store.global_lines))
    elif ns.cmd == "defaults":
        _print_json(list(store.defaults_lines))
    elif ns.cmd == "list":
        _print_json({"frontends": store.frontend_names(), "backends": store.backend_names()})
    elif ns.cmd in BlockStore.KINDS:
        lookup = store.frontend if ns.cmd == "frontend" else store.backend
        lines, found = lookup(ns.name)
        if not found:
            print(f"✗ {ns.cmd} '{ns.name}' not found", file=sys.stderr)
            return EXIT_NOT_FOUND
        _print_json(list(lines))
    elif ns.cmd in ("frontends", "backends"):
        lookup = store.frontends if ns.cmd == "frontends" else store.backends
        _print_json({name: list(lines) for name, lines in lookup(ns.substr).items()})
    elif ns.cmd == "snapshot":
        path = SnapshotStore(ns.dir).save(ns.name, store.document)
        print(f"✓ Saved snapshot '{ns.name}' to {path}", file=sys.stderr)
    elif ns.cmd == "diff":
        old_document = SnapshotStore(ns.dir).load(ns.snapshot)
        if old_document is None:
            print(f"✗ snapshot '{ns.snapshot}' not found in {ns.dir}", file=sys.stderr)
            return EXIT_NOT_FOUND
        diff = diff_named_block(BlockStore(old_document), store, ns.kind, ns.name)
        _print_json(diff.to_dict())
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = get_config()
    except ValueError as e:
        print(f"✗ Invalid configuration: {e}", file=sys.stderr)
        return EXIT_ERROR

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    arg_parser = _build_parser(config)
    ns = arg_parser.parse_args(argv)
    if not ns.config:
        arg_parser.error("no config given: pass --config or set HAPROXY_CONFIG_PATH")

    try:
        return _run(ns, config)
    except (HaproxySectionsError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
