"""CLI interface with subcommand routing."""

import argparse
import logging
import sys

from painting_narrator.assembly import check_ffmpeg
from painting_narrator.catalog import load_catalog
from painting_narrator.config import NarratorConfig
from painting_narrator.constants import VERSION
from painting_narrator.describer import DescriptionClient
from painting_narrator.errors import CatalogError, ConfigError
from painting_narrator.narration_log import NarrationLog
from painting_narrator.pipeline import NarrationPipeline


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(args) -> NarratorConfig:
    """Environment defaults, overridden by any CLI arguments given."""
    try:
        config = NarratorConfig.from_env()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    overrides = {
        "catalog_path": getattr(args, "catalog", None),
        "audio_dir": getattr(args, "audio_dir", None),
        "log_path": getattr(args, "log", None),
        "player": getattr(args, "player", None),
        "model": getattr(args, "model", None),
        "language": getattr(args, "lang", None),
        "voice": getattr(args, "voice", None),
        "temp_dir": getattr(args, "temp_dir", None),
        "playback": getattr(args, "play", None),
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)
    if getattr(args, "slow", False):
        config.slow = True
    return config


def _load_paintings(path: str):
    try:
        return load_catalog(path)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)


def cmd_run(args):
    """Narrate every painting in the requested id range."""
    config = _load_config(args)
    try:
        config.validate()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    if args.start > args.end:
        print(f"Error: --start ({args.start}) is greater than --end ({args.end})", file=sys.stderr)
        raise SystemExit(1)

    check_ffmpeg()
    paintings = _load_paintings(config.catalog_path)

    pipeline = NarrationPipeline(
        paintings,
        DescriptionClient(config.api_key, model=config.model),
        NarrationLog(config.log_path),
        config,
    )
    summary = pipeline.run(args.start, args.end)

    print(f"Done: {len(summary.done)} narrated, {len(summary.failed)} failed, "
          f"{len(summary.skipped)} not in catalog")
    for item in summary.failed:
        print(f"  [fail] {item.painting_id} {item.title}: {item.error}")


def cmd_list(args):
    """List catalog entries."""
    config = _load_config(args)
    paintings = _load_paintings(config.catalog_path)
    if not paintings:
        print("No paintings found.")
        return
    print("Paintings:")
    for p in paintings:
        print(f"  {p.id:>4}  {p.title} — {p.painter_name}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="painting-narrator",
        description="Painting Narrator — describe paintings and read the descriptions aloud",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run
    run_parser = subparsers.add_parser("run", help="Narrate a range of catalog ids")
    run_parser.add_argument("--start", type=int, required=True, help="First painting id (inclusive)")
    run_parser.add_argument("--end", type=int, required=True, help="Last painting id (inclusive)")
    run_parser.add_argument("--catalog", help="Path to the catalog JSON")
    run_parser.add_argument("--audio-dir", dest="audio_dir", help="Directory for narrated MP3 files")
    run_parser.add_argument("--log", help="Description log file")
    run_parser.add_argument("--play", dest="play", action="store_true", default=None,
                            help="Play each clip after it is assembled")
    run_parser.add_argument("--no-play", dest="play", action="store_false", help="Disable playback")
    run_parser.add_argument("--player", help="Player command, e.g. 'cvlc --play-and-exit'")
    run_parser.add_argument("--model", help="Text-generation model id")
    run_parser.add_argument("--lang", help="Narration language code")
    run_parser.add_argument("--voice", help="edge-tts voice, overrides the language default")
    run_parser.add_argument("--slow", action="store_true", help="Slower speech")
    run_parser.add_argument("--temp-dir", dest="temp_dir", help="Where chunk temp files are written")
    run_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    run_parser.set_defaults(func=cmd_run)

    # list
    list_parser = subparsers.add_parser("list", help="List catalog entries")
    list_parser.add_argument("--catalog", help="Path to the catalog JSON")
    list_parser.set_defaults(func=cmd_list)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    _configure_logging(getattr(args, "verbose", False))
    args.func(args)
