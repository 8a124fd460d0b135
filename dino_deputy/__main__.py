"""
__main__.py
-----------
Command-line entry point: `python -m dino_deputy` or `dino-deputy`.

Usage:
    python -m dino_deputy                      # Frontier preset, random run
    python -m dino_deputy --preset classic     # Slower guns, no thieves
    python -m dino_deputy --seed 42 --mute     # Reproducible, silent
"""

import argparse
import os
import sys

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.main_loop import MainLoop
from dino_deputy.core.runtime.presets import DEFAULT_PRESET, get_preset, load_presets
from dino_deputy.core.services import config_manager
from dino_deputy.core.services.settings_manager import SettingsManager


def build_parser():
    parser = argparse.ArgumentParser(
        prog="dino-deputy",
        description="Desert runner: jump cacti, shoot bandits, stomp flying thieves."
    )
    parser.add_argument("--preset", default=None,
                        help=f"Gameplay preset (default: saved setting or '{DEFAULT_PRESET}')")
    parser.add_argument("--seed", type=int, default=None,
                        help="RNG seed for a reproducible run")
    parser.add_argument("--data-dir", default=".",
                        help="Directory for settings, high score and leaderboard files")
    parser.add_argument("--mute", action="store_true",
                        help="Start with sound muted")
    parser.add_argument("--list-presets", action="store_true",
                        help="Print available presets and exit")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # User overrides (presets.json in the data dir) win over packaged config
    config_manager.add_search_dir(args.data_dir)

    if args.list_presets:
        for name in sorted(load_presets()):
            print(name)
        return 0

    preset_name = args.preset
    if preset_name is None:
        settings = SettingsManager(os.path.join(args.data_dir, SettingsManager.SETTINGS_FILE))
        preset_name = settings.get("game", "preset", DEFAULT_PRESET)

    try:
        preset = get_preset(preset_name)
    except ValueError as e:
        DebugLogger.fail(str(e))
        return 2

    MainLoop(preset, seed=args.seed, data_dir=args.data_dir, muted=args.mute).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
