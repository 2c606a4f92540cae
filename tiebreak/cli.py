"""CLI entry point: argparse, subcommand routing."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from tiebreak import config as config_mod
from tiebreak.fallbacks import print_error
from tiebreak.output import colorize, log, print_table

EXIT_UNRESOLVED = 2

USAGE_EXAMPLES = """
examples:
  tiebreak resolve src/widget.h --candidates "Objective-C,C++,C"
  tiebreak resolve - --candidates "Perl,Prolog" --explain < script.pl
  tiebreak rules
  tiebreak config set max_content_chars unlimited
"""


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiebreak",
        description="tiebreak: pick one language among ambiguous candidates",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", action="store_true", help="Log dispatch decisions to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p_resolve = sub.add_parser("resolve", help="Disambiguate a file among candidate languages")
    p_resolve.add_argument("file", help="File to inspect ('-' reads stdin)")
    p_resolve.add_argument("--candidates", required=True,
                           help="Comma-separated candidate language names")
    p_resolve.add_argument("--explain", action="store_true",
                           help="Show which rule ran and why nothing was picked")
    p_resolve.add_argument("--json", action="store_true")

    p_rules = sub.add_parser("rules", help="List rules in precedence order")
    p_rules.add_argument("--json", action="store_true")

    sub.add_parser("languages", help="List known language names")

    p_config = sub.add_parser("config", help="Show or change project config")
    config_sub = p_config.add_subparsers(dest="config_action", required=True)
    config_sub.add_parser("show", help="Print the effective config")
    p_set = config_sub.add_parser("set", help="Set a config key")
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_unset = config_sub.add_parser("unset", help="Reset a config key to its default")
    p_unset.add_argument("key")

    return parser


def _parse_candidates(raw: str) -> list[str]:
    return [name.strip() for name in raw.split(",") if name.strip()]


def _read_content(file_arg: str) -> bytes:
    if file_arg == "-":
        return sys.stdin.buffer.read()
    return Path(file_arg).read_bytes()


def cmd_resolve(args) -> int:
    from tiebreak.defaults import default_registry

    try:
        content = _read_content(args.file)
    except OSError as ex:
        print_error(f"cannot read {args.file}: {ex}")
        return 1
    resolution = default_registry().explain(content, _parse_candidates(args.candidates))

    if args.json:
        print(json.dumps(resolution.to_dict(), indent=2))
    elif args.explain:
        label = resolution.language.name if resolution.language else "-"
        print(f"{colorize(str(resolution.kind), 'bold')}  {label}  "
              f"{colorize(resolution.rule or '(no rule)', 'dim')}")
    elif resolution.language is not None:
        print(resolution.language.name)
    return 0 if resolution.resolved else EXIT_UNRESOLVED


def cmd_rules(args) -> int:
    from tiebreak.defaults import default_registry

    registry = default_registry()
    if args.json:
        payload = [
            {"name": rule.name, "languages": sorted(rule.languages)} for rule in registry
        ]
        print(json.dumps(payload, indent=2))
        return 0
    rows = [
        [str(idx), rule.name, ", ".join(sorted(rule.languages))]
        for idx, rule in enumerate(registry, 1)
    ]
    print_table(["#", "Rule", "Languages"], rows)
    return 0


def cmd_languages(args) -> int:
    from tiebreak.languages import DEFAULT_CATALOG

    cfg = config_mod.load_config()
    catalog = DEFAULT_CATALOG.extended(cfg.get("extra_languages") or [])
    for name in catalog.names():
        print(name)
    return 0


def cmd_config(args) -> int:
    cfg = config_mod.load_config()
    if args.config_action == "show":
        print(json.dumps(cfg, indent=2))
        return 0
    try:
        if args.config_action == "set":
            config_mod.set_config_value(cfg, args.key, args.value)
        else:
            config_mod.unset_config_value(cfg, args.key)
    except (KeyError, ValueError) as ex:
        print_error(str(ex).strip("'\""))
        return 1
    config_mod.save_config(cfg)
    log(f"  Saved {config_mod.CONFIG_FILE}")
    print(colorize(f"  {args.key} = {json.dumps(cfg[args.key])}", "green"))
    return 0


COMMANDS = {
    "resolve": cmd_resolve,
    "rules": cmd_rules,
    "languages": cmd_languages,
    "config": cmd_config,
}


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        return COMMANDS[args.command](args)
    except (ImportError, ValueError) as ex:
        print_error(str(ex))
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
