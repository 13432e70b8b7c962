"""CLI entrypoints for the business card viewer, exporter and resource checks."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from businesscard_core import AppConfig, load_config, normalize_config
from businesscard_core.logging_setup import configure_logging, get_logger
from businesscard_renderer import CardPainter, ResourceNotFound, ResourceRegistry, list_themes

from .host import check_resources, compose, load_resources


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _settings(args: argparse.Namespace) -> AppConfig:
    cfg = load_config(Path(args.config).expanduser() if args.config else None, themes=list_themes())
    if getattr(args, "theme", None):
        cfg.card.theme = args.theme
    if getattr(args, "no_contacts", False):
        cfg.card.show_contacts = False
    if getattr(args, "profile_style", None):
        cfg.card.profile_style = args.profile_style
    if getattr(args, "width", None) is not None:
        cfg.display.width = args.width
    if getattr(args, "height", None) is not None:
        cfg.display.height = args.height
    if getattr(args, "scale", None) is not None:
        cfg.display.scale = args.scale
    normalize_config(cfg, themes=list_themes())
    configure_logging(
        keep_files=cfg.diagnostics.keep_log_files,
        console=False,
        debug=cfg.diagnostics.debug,
    )
    return cfg


def _resources(args: argparse.Namespace, cfg: AppConfig) -> ResourceRegistry:
    directory = getattr(args, "resources", None) or cfg.resources.directory
    return load_resources(Path(directory).expanduser() if directory else None)


def cmd_show(args: argparse.Namespace) -> int:
    from .app import run_gui

    cfg = _settings(args)
    return run_gui(cfg, _resources(args, cfg))


def cmd_render(args: argparse.Namespace) -> int:
    cfg = _settings(args)
    root = compose(cfg, _resources(args, cfg))
    out = CardPainter(scale=cfg.display.scale).save_png(root, Path(args.out).expanduser())
    _print_json(
        {
            "success": True,
            "output": str(out),
            "size_pt": [cfg.display.width, cfg.display.height],
            "scale": cfg.display.scale,
        }
    )
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    cfg = _settings(args)
    root = compose(cfg, _resources(args, cfg))
    _print_json(root.to_dict())
    return 0


def cmd_themes(_args: argparse.Namespace) -> int:
    _print_json(list_themes())
    return 0


def cmd_check_resources(args: argparse.Namespace) -> int:
    cfg = _settings(args)
    status = check_resources(_resources(args, cfg))
    missing = sorted(key for key, ok in status.items() if not ok)
    _print_json({"success": not missing, "resources": status, "missing": missing})
    return 0 if not missing else 2


def _add_card_options(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--theme", choices=list_themes(), default=None)
    cmd.add_argument("--no-contacts", action="store_true", help="Render the profile section only")
    cmd.add_argument("--profile-style", choices=["card", "plain"], default=None)
    cmd.add_argument("--width", type=int, default=None, help="Screen width in points")
    cmd.add_argument("--height", type=int, default=None, help="Screen height in points")
    cmd.add_argument("--scale", type=float, default=None, help="Pixels per point")
    _add_resource_options(cmd)


def _add_resource_options(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--resources", default=None, help="Directory with strings.json and drawable/ overrides")
    cmd.add_argument("--config", default=None, help="Optional settings file path")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="businesscard", description="Business card viewer and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    show_cmd = sub.add_parser("show", help="Show the card full screen")
    _add_card_options(show_cmd)
    show_cmd.set_defaults(func=cmd_show)

    render_cmd = sub.add_parser("render", help="Render the card to a PNG file")
    render_cmd.add_argument("--out", required=True, help="Output PNG path")
    _add_card_options(render_cmd)
    render_cmd.set_defaults(func=cmd_render)

    tree_cmd = sub.add_parser("tree", help="Print the layout tree as JSON")
    _add_card_options(tree_cmd)
    tree_cmd.set_defaults(func=cmd_tree)

    themes_cmd = sub.add_parser("themes", help="List built-in themes")
    themes_cmd.set_defaults(func=cmd_themes)

    check_cmd = sub.add_parser("check-resources", help="Verify every required resource key resolves")
    _add_resource_options(check_cmd)
    check_cmd.set_defaults(func=cmd_check_resources)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except ResourceNotFound as exc:
        get_logger("cli").error("render failed: %s", exc, extra={"event": "resource_not_found"})
        _print_json({"success": False, "error": str(exc), "kind": exc.kind, "key": exc.key})
        return 2
    except FileNotFoundError as exc:
        get_logger("cli").error("resource directory missing: %s", exc, extra={"event": "resource_dir_missing"})
        _print_json({"success": False, "error": str(exc)})
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
