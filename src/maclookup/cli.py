from __future__ import annotations

import argparse
import logging
import re
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .cache import CACHE_FILE_NAME, ensure_cache_dir, should_update_cache
from .errors import InvalidMacAddress, LocallyAdministered, MacLookupError, NotFound
from .lookup import MacLookup

logger = logging.getLogger(__name__)

_HEX = re.compile(r"[0-9a-f]+")


def normalize_address(mac: str) -> str:
    """
    Normalize user input to uppercase colon-separated form.
    Accepts:
      00:11:22:33:44:55, 00-11-22-33-44-55, 0:11:2:33:4:55,
      0011.2233.4455 (Cisco), 001122334455
    """
    m = mac.strip().replace("-", ":").replace(".", ":").lower()
    parts = m.split(":")

    if not all(_HEX.fullmatch(p) for p in parts):
        raise InvalidMacAddress(mac)

    if len(parts) == 1 and len(parts[0]) == 12:
        raw = parts[0]
        groups = [raw[i : i + 2] for i in range(0, 12, 2)]
    elif len(parts) == 3 and all(len(p) == 4 for p in parts):
        groups = [g for p in parts for g in (p[:2], p[2:])]
    elif len(parts) == 6 and all(len(p) <= 2 for p in parts):
        groups = [p.zfill(2) for p in parts]
    else:
        raise InvalidMacAddress(mac)

    return ":".join(g.upper() for g in groups)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def cmd_lookup(args: argparse.Namespace) -> int:
    console = Console(highlight=False, emoji=False, soft_wrap=True)
    err = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

    _configure_logging(args.debug)

    if args.db:
        db_path = Path(args.db)
        db_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        db_path = ensure_cache_dir() / CACHE_FILE_NAME

    logger.debug("Arguments - update: %s, local: %s, terse: %s", args.update, args.local, args.terse)

    lookup = MacLookup(database_path=db_path)
    should_update, cache_exists = should_update_cache(db_path, force_update=args.update, local_only=args.local)

    if should_update:
        err.print("[dim]Updating MAC address database...[/dim]")
        lookup.update_database()
    elif args.local and not cache_exists:
        err.print("[red]Error:[/red] No local cache available and --local flag was specified")
        return 2
    else:
        lookup.load_local_database()

    failures = 0
    for raw in args.addresses:
        # Per-address failures are reported and the batch carries on
        label = raw
        try:
            label = normalize_address(raw)
            logger.debug("Looking up MAC address: %s", label)
            info = lookup.lookup_local(label) if args.local else lookup.lookup(label)
        except NotFound:
            failures += 1
            message = "Vendor not found"
        except LocallyAdministered:
            failures += 1
            message = "Locally administered (no vendor information)"
        except MacLookupError as e:
            failures += 1
            message = f"Error - {e}"
        else:
            if args.terse:
                console.print(info.company_name, markup=False)
            else:
                console.print(f"{label}: {info.company_name}", markup=False)
                if info.company_address:
                    console.print(f"   {info.company_address}", markup=False)
            continue

        err.print(message if args.terse else f"{label}: {message}", markup=False)

    return 1 if failures else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hwaddrlookup",
        description="Look up vendor information for MAC addresses",
        epilog=(
            "By default, looks up MAC addresses using a local cache. If no cache is available, "
            "it will be downloaded from the IEEE standards database."
        ),
    )

    p.add_argument("addresses", nargs="+", metavar="ADDRESS", help="One or more MAC addresses, e.g. 00:11:22:33:44:55")
    p.add_argument("-u", "--update", action="store_true", help="Update the local cache before looking up addresses")
    p.add_argument("-l", "--local", action="store_true", help="Only use local cache, fail if not available")
    p.add_argument("-d", "--debug", action="store_true", help="Enable debug output for troubleshooting")
    p.add_argument("-t", "--terse", action="store_true", help="Show only company name in terse format")
    p.add_argument("--db", help="Path to vendor database JSON (default: user cache directory)")

    p.set_defaults(func=cmd_lookup)
    return p


def main(argv: list[str] | None = None) -> None:
    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        code = args.func(args)
        raise SystemExit(code)
    except KeyboardInterrupt:
        raise SystemExit(2)
    except Exception as e:
        Console(stderr=True, emoji=False).print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise SystemExit(2)
