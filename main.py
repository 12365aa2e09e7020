from __future__ import annotations

import argparse
import logging
from pathlib import Path

from eq_editor.config import determine_config_path, load_filter_config
from eq_editor.plotting import plot_filter_set
from eq_editor.sampling import SAMPLE_STEP_PX


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="EQ curve editor entry point")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the JSON filter set. When omitted, ./filters.json is used if it exists, else a default three-band EQ.",
    )
    parser.add_argument("--save", type=Path, default=None, help="Optional path to save the rendered curve (overrides auto naming)")
    parser.add_argument("--no-show", action="store_true", help="Skip showing the Matplotlib window (headless mode)")
    parser.add_argument("--width", type=int, default=1000, help="Plot width in pixels; one curve sample per --step columns")
    parser.add_argument("--height", type=int, default=500, help="Plot height in pixels")
    parser.add_argument("--step", type=float, default=SAMPLE_STEP_PX, help="Curve sampling step in pixels")
    parser.add_argument("--gui", action="store_true", help="Open the interactive editor instead of a static plot")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity for the editor modules",
    )
    return parser.parse_args(argv)


def run_cli(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config_path = determine_config_path(args.config)
    filter_set, metadata = load_filter_config(config_path)

    if args.gui:
        # Imported lazily so headless plotting works without PySide6.
        from eq_editor.gui.app import launch_gui

        launch_gui(filter_set, metadata["name"])
        return

    save_path = args.save or derive_default_output_path(metadata["name"])
    plot_filter_set(
        filter_set,
        save_path,
        show_plot=not args.no_show,
        width=args.width,
        height=args.height,
        step_px=args.step,
        title=metadata["name"],
    )


def derive_default_output_path(name: str) -> Path:
    safe_name = name.strip().replace(" ", "_") or "eq"
    output_dir = Path("output") / safe_name
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / "curve.png"


if __name__ == "__main__":
    run_cli()
