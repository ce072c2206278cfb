#!/usr/bin/env python3
"""
Command-line front-end for MangOverlay.

Usage:
    mangoverlay path
    mangoverlay show --all
    mangoverlay set fps_limit=60,144 position=top-right
    mangoverlay unset gpu_temp
    mangoverlay preset extended
    mangoverlay check
    mangoverlay export preset.yaml
    mangoverlay env
    mangoverlay params --section GPU
"""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
from pathlib import Path
from typing import Sequence

import yaml

from mangohudlib import __version__ as lib_version
from mangohudlib.analyzer import analyze_config
from mangohudlib.backends import generate_conf, generate_env
from mangohudlib.model import HudPreset
from mangohudlib.params import PARAMS, params_by_section, ParamKind
from mangohudlib.parser import ConfigParseError, parse_env_string
from mangohudlib.serialization import (
    config_from_json,
    config_from_yaml,
    config_to_json,
    config_to_yaml,
)

from . import __version__
from .locations import CONFIG_ENV, candidate_paths, default_config_path, find_config
from .logging_setup import setup_logging
from .session import EditSession, SessionError
from .settings import Settings, SettingsError, load_settings


logger = logging.getLogger(__name__)


def _resolve_path(args: argparse.Namespace, settings: Settings) -> Path:
    if args.file:
        return Path(args.file).expanduser()
    app = args.app or settings.app_name
    return find_config(app) or default_config_path(app)


def _open_session(args: argparse.Namespace, settings: Settings, strict: bool = False) -> EditSession:
    session = EditSession(_resolve_path(args, settings), settings)
    session.load(strict=strict)
    return session


def _parse_preset(name: str) -> HudPreset:
    try:
        return HudPreset(int(name))
    except ValueError:
        pass
    key = name.upper().replace("-", "_")
    if key in HudPreset.__members__:
        return HudPreset[key]
    choices = ", ".join(m.name.lower().replace("_", "-") for m in HudPreset)
    raise ValueError(f"Unknown preset {name!r} (choose from {choices})")


def _print_diff(session: EditSession) -> None:
    for key, old, new in session.diff():
        old_text = "(unset)" if old is None else old
        new_text = "(unset)" if new is None else new
        print(f"  {key}: {old_text} -> {new_text}")


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_path(args: argparse.Namespace, settings: Settings) -> int:
    app = args.app or settings.app_name
    active = find_config(app)
    for path in candidate_paths(app):
        marker = "*" if path == active else " "
        state = "exists" if path.is_file() else "missing"
        print(f"{marker} {path} ({state})")
    if active is None:
        print(f"No config found; new files go to {default_config_path(app)}")
    return 0


def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    session = _open_session(args, settings)
    include_defaults = args.all or settings.include_defaults
    if args.format == "yaml":
        sys.stdout.write(config_to_yaml(session.config, changed_only=not include_defaults))
    elif args.format == "json":
        print(config_to_json(session.config, changed_only=not include_defaults))
    else:
        sys.stdout.write(generate_conf(session.config, include_defaults=include_defaults))
    return 0


def cmd_get(args: argparse.Namespace, settings: Settings) -> int:
    session = _open_session(args, settings)
    for key in args.keys:
        value = session.get(key)
        print(f"{key}={'' if value is None else value}")
    return 0


def cmd_set(args: argparse.Namespace, settings: Settings) -> int:
    session = _open_session(args, settings)
    for assignment in args.assignments:
        key, sep, value = assignment.partition("=")
        if not sep:
            value = "1"
        session.set(key.strip(), value.strip())
    return _finish(session, args.dry_run)


def cmd_unset(args: argparse.Namespace, settings: Settings) -> int:
    session = _open_session(args, settings)
    for key in args.keys:
        session.reset(key)
    return _finish(session, args.dry_run)


def cmd_preset(args: argparse.Namespace, settings: Settings) -> int:
    session = _open_session(args, settings)
    session.apply_preset(_parse_preset(args.name))
    return _finish(session, args.dry_run)


def _finish(session: EditSession, dry_run: bool) -> int:
    if not session.dirty:
        print("No changes.")
        return 0
    print(f"{session.path}:")
    _print_diff(session)
    if dry_run:
        print("Dry run, nothing written.")
        return 0
    session.save()
    return 0


def cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    if args.env:
        config = parse_env_string(os.environ.get(CONFIG_ENV, ""), strict=args.strict)
        source = CONFIG_ENV
    else:
        session = _open_session(args, settings, strict=args.strict)
        config = session.config
        source = str(session.path)
    report = analyze_config(config)
    print(f"{source}: {len(report.changed_keys)} parameter(s) changed from defaults")
    for issue in report.issues:
        print(f"  {issue}")
    if report.ok:
        print("OK")
        return 0
    return 1


def cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    session = _open_session(args, settings)
    fmt = args.format or ("json" if args.output.endswith(".json") else "yaml")
    if fmt == "json":
        text = config_to_json(session.config, changed_only=not args.all)
    else:
        text = config_to_yaml(session.config, changed_only=not args.all)
    with open(args.output, "w", encoding="utf-8") as f:
        f.write(text)
    print(f"Exported {session.path} to {args.output}")
    return 0


def cmd_import(args: argparse.Namespace, settings: Settings) -> int:
    with open(args.input, "r", encoding="utf-8") as f:
        content = f.read()
    imported = config_from_json(content) if args.input.endswith(".json") else config_from_yaml(content)
    session = _open_session(args, settings)
    session.config = imported
    return _finish(session, args.dry_run)


def cmd_env(args: argparse.Namespace, settings: Settings) -> int:
    session = _open_session(args, settings)
    value = generate_env(session.config, include_defaults=args.all)
    if args.export:
        print(f"export {CONFIG_ENV}={shlex.quote(value)}")
    else:
        print(value)
    return 0


def cmd_params(args: argparse.Namespace, settings: Settings) -> int:
    sections = params_by_section()
    if args.section and args.section not in sections:
        raise ValueError(f"Unknown section {args.section!r} (choose from {', '.join(sections)})")
    for section, params in sections.items():
        if args.section and section != args.section:
            continue
        print(f"[{section}]")
        for param in params:
            detail = param.kind.value
            if param.kind is ParamKind.ENUM:
                detail = "|".join(str(m.value) for m in param.enum)
            print(f"  {param.name:<26} {detail:<16} {param.label}")
    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mangoverlay",
        description="Manage MangoHud configuration files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__} (mangohudlib {lib_version})")
    parser.add_argument("-f", "--file", help="Config file to use instead of the one MangoHud would read")
    parser.add_argument("--app", help="Application name, selects <app>.conf")
    parser.add_argument("--settings", help="Settings file (default: ~/.config/mangoverlay/settings.yaml)")
    parser.add_argument("--log-level", help="Console log level (overrides settings)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Same as --log-level INFO")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("path", help="Show where MangoHud looks for its config")
    p.set_defaults(func=cmd_path)

    p = sub.add_parser("show", help="Print the current config")
    p.add_argument("--all", action="store_true", help="Include parameters at their default")
    p.add_argument("--format", choices=["conf", "yaml", "json"], default="conf")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("get", help="Print parameter values")
    p.add_argument("keys", nargs="+")
    p.set_defaults(func=cmd_get)

    p = sub.add_parser("set", help="Set parameters (key=value, or key to enable)")
    p.add_argument("assignments", nargs="+")
    p.add_argument("--dry-run", action="store_true")
    p.set_defaults(func=cmd_set)

    p = sub.add_parser("unset", help="Reset parameters to their default")
    p.add_argument("keys", nargs="+")
    p.add_argument("--dry-run", action="store_true")
    p.set_defaults(func=cmd_unset)

    p = sub.add_parser("preset", help="Apply a built-in preset")
    p.add_argument("name", help="default, off, fps-only, horizontal, extended, detailed (or -1..4)")
    p.add_argument("--dry-run", action="store_true")
    p.set_defaults(func=cmd_preset)

    p = sub.add_parser("check", help="Report conflicting or ignored settings")
    p.add_argument("--strict", action="store_true", help="Fail on invalid values instead of warning")
    p.add_argument("--env", action="store_true", help=f"Check ${CONFIG_ENV} instead of a file")
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("export", help="Export the config to YAML or JSON")
    p.add_argument("output")
    p.add_argument("--format", choices=["yaml", "json"])
    p.add_argument("--all", action="store_true", help="Include parameters at their default")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("import", help="Replace the config with a YAML or JSON export")
    p.add_argument("input")
    p.add_argument("--dry-run", action="store_true")
    p.set_defaults(func=cmd_import)

    p = sub.add_parser("env", help=f"Print the config as a ${CONFIG_ENV} value")
    p.add_argument("--all", action="store_true", help="Include parameters at their default")
    p.add_argument("--export", action="store_true", help="Print as a shell export line")
    p.set_defaults(func=cmd_env)

    p = sub.add_parser("params", help="List known parameters")
    p.add_argument("--section")
    p.set_defaults(func=cmd_params)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.settings)
        level = args.log_level or ("INFO" if args.verbose else settings.log_level)
        setup_logging(level, settings.log_file)
        logger.debug("Known parameters: %d", len(PARAMS))
        return args.func(args, settings)
    except (ConfigParseError, SessionError, SettingsError, OSError, ValueError, yaml.YAMLError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
