from __future__ import annotations

import argparse
import json
import sys
from typing import Any

import requests
from loguru import logger
from tqdm import tqdm

from .client import Client
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S, ClientConfig
from .errors import DescriptionError, ErrorList
from .models import ImportedBy, Package, SearchResults, Versions

EXIT_ERRORS = 2
EXIT_NOT_FOUND = 3


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def _format_package(p: Package) -> str:
    kinds = [
        name
        for name, flag in (
            ("module", p.is_module),
            ("package", p.is_package),
            ("command", p.is_command),
        )
        if flag
    ]
    lines = [
        p.package,
        f"  kind:        {', '.join(kinds) or '-'}",
        f"  version:     {p.version or '-'}",
        f"  published:   {p.published or '-'}",
        f"  license:     {p.license or '-'}",
        f"  repository:  {p.repository or '-'}",
        (
            "  checks:      "
            f"go.mod={_yes_no(p.has_valid_go_mod_file)} "
            f"license={_yes_no(p.has_redistributable_license)} "
            f"tagged={_yes_no(p.has_tagged_version)} "
            f"stable={_yes_no(p.has_stable_version)}"
        ),
    ]
    if p.synopsis:
        lines.append(f"  synopsis:    {p.synopsis}")
    for img in p.images:
        lines.append(f"  image:       {img.alt or '(no alt)'} <{img.url}>")
    return "\n".join(lines)


def _format_versions(v: Versions) -> str:
    lines = [v.package]
    for item in v.versions:
        lines.append(
            f"  {item.major_version or '-':<10} {item.full_version:<24} {item.date}"
        )
    return "\n".join(lines)


def _format_search(results: SearchResults) -> str:
    lines: list[str] = []
    for r in results.results:
        lines.append(
            f"{r.package}  {r.version or '-'}  published={r.published or '-'}  "
            f"imported_by={r.imported_by}  license={r.license or '-'}"
        )
        if r.synopsis:
            lines.append(f"    {r.synopsis}")
    return "\n".join(lines)


def _format_imported_by(ib: ImportedBy) -> str:
    lines = [f"{ib.package} ({len(ib.imported_by)} importers)"]
    lines.extend(f"  {name}" for name in ib.imported_by)
    return "\n".join(lines)


def _report(e: ErrorList) -> int:
    print(str(e), file=sys.stderr)
    return EXIT_NOT_FOUND if e.not_found else EXIT_ERRORS


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pkggodev")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("--timeout", type=int, default=DEFAULT_TIMEOUT_S)
    parser.add_argument(
        "--user-agent",
        default=None,
        help="Override the randomly picked Chrome user agent",
    )
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--json", action="store_true", help="Emit JSON")
    sub = parser.add_subparsers(dest="cmd", required=True)

    describe_p = sub.add_parser("describe", help="Show package metadata")
    describe_p.add_argument("packages", nargs="+", metavar="PACKAGE")
    describe_p.add_argument(
        "--sprinkle",
        action="store_true",
        help="Replace the synopsis with the repository description",
    )

    versions_p = sub.add_parser("versions", help="List published versions")
    versions_p.add_argument("package", metavar="PACKAGE")

    search_p = sub.add_parser("search", help="Search packages")
    search_p.add_argument("query")
    search_p.add_argument("--limit", type=int, default=10)

    imported_p = sub.add_parser(
        "imported-by",
        help="List packages importing PACKAGE",
    )
    imported_p.add_argument("package", metavar="PACKAGE")
    return parser


def _describe(client: Client, args: argparse.Namespace) -> int:
    packages: list[Package] = []
    exit_code = 0
    for name in tqdm(
        args.packages,
        desc="describe",
        unit="pkg",
        file=sys.stderr,
        disable=len(args.packages) < 2,
    ):
        try:
            p = client.describe_package(name)
        except ErrorList as e:
            exit_code = max(exit_code, _report(e))
            continue

        if args.sprinkle:
            try:
                p = client.sprinkle(p)
            except DescriptionError as e:
                print(f"{name}: {e}", file=sys.stderr)
        packages.append(p)

    if args.json:
        _print_json([p.to_dict() for p in packages])
    else:
        print("\n\n".join(_format_package(p) for p in packages))
    return exit_code


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    client = Client(
        ClientConfig(
            base_url=args.base_url,
            session=requests.Session(),
            timeout_s=int(args.timeout),
            user_agent=args.user_agent,
        )
    )

    if args.cmd == "describe":
        return _describe(client, args)

    try:
        if args.cmd == "versions":
            versions = client.versions(args.package)
            if args.json:
                _print_json(versions.to_dict())
            else:
                print(_format_versions(versions))
            return 0

        if args.cmd == "search":
            results = client.search(args.query, int(args.limit))
            if args.json:
                _print_json(results.to_dict())
            else:
                print(_format_search(results))
            return 0

        if args.cmd == "imported-by":
            imported = client.imported_by(args.package)
            if args.json:
                _print_json(imported.to_dict())
            else:
                print(_format_imported_by(imported))
            return 0
    except ErrorList as e:
        return _report(e)

    return EXIT_ERRORS
