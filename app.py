import argparse
import logging
import sys
from pathlib import Path

from waylyrics.exceptions import PlayerError
from waylyrics.lyrics_providers import PROVIDERS, build_provider
from waylyrics.lyrics_service import LyricsService
from waylyrics.player_client import PlayerctlClient
from waylyrics.poller import run_loop
from waylyrics.settings_manager import read_settings, setup_logging
from waylyrics.status_line import DisplayOptions


def build_parser():
    parser = argparse.ArgumentParser(
        prog="waylyrics",
        description="Print the current synced lyric line of an MPRIS player as status-bar JSON.",
    )
    parser.add_argument("-i", "--disable_title", dest="show_title", action="store_false", default=None,
                        help="Hide the track title")
    parser.add_argument("-l", "--disable_lyrics", dest="show_lyric", action="store_false", default=None,
                        help="Hide the current lyric line")
    parser.add_argument("-t", "--disable_translate_lyrics", dest="show_translate_lyric", action="store_false",
                        default=None, help="Hide the translated lyric line")
    parser.add_argument("-p", "--disable_position", dest="show_position", action="store_false", default=None,
                        help="Hide position/length")
    parser.add_argument("-s", "--disable_status", dest="show_status", action="store_false", default=None,
                        help="Hide the playback status icon")
    parser.add_argument("--show_phonetic", dest="show_phonetic", action="store_true", default=None,
                        help="Show the phonetic lyric line when available")
    parser.add_argument("--prev", action="store_true", help="Go to the previous track and exit")
    parser.add_argument("--next", action="store_true", help="Skip to the next track and exit")
    parser.add_argument("--toggle", action="store_true", help="Toggle play/pause and exit")
    parser.add_argument("--player", help="playerctl player name (default: musicfox)")
    parser.add_argument("--provider", choices=sorted(PROVIDERS), help="Lyrics service to query")
    parser.add_argument("--interval", type=float, help="Seconds between status lines")
    parser.add_argument("--config", type=Path, help="Path to settings.json")
    parser.add_argument("--log-level", dest="log_level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def resolve_settings(args):
    """Settings file values, overridden by any flag given on the command line."""
    settings = read_settings(args.config)
    for key in ("player", "provider", "interval", "log_level", "show_title", "show_lyric",
                "show_translate_lyric", "show_position", "show_status", "show_phonetic"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    return settings


def run_transport(player, args):
    if args.toggle:
        player.play_pause()
    elif args.next:
        player.next_track()
    elif args.prev:
        player.previous_track()


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = resolve_settings(args)
    setup_logging(settings["log_level"])

    player = PlayerctlClient(settings["player"], timeout=float(settings["player_timeout"]))

    if args.toggle or args.next or args.prev:
        try:
            run_transport(player, args)
        except PlayerError as e:
            logging.error(f"Player command failed: {e}")
            return 1
        return 0

    options = DisplayOptions(
        show_status=settings["show_status"],
        show_title=settings["show_title"],
        show_position=settings["show_position"],
        show_lyric=settings["show_lyric"],
        show_translate_lyric=settings["show_translate_lyric"],
        show_phonetic=settings["show_phonetic"],
    )
    fetch_timeout = float(settings["fetch_timeout"])
    try:
        provider = build_provider(settings["provider"], timeout=fetch_timeout)
    except ValueError as e:
        logging.error(str(e))
        return 2
    # the HTTP timeout fires first; the service timeout only guards a stuck worker
    service = LyricsService([provider], per_attempt_timeout=fetch_timeout + 0.5)
    try:
        run_loop(player, service, options, interval=float(settings["interval"]), default_text=settings["default_text"])
    except KeyboardInterrupt:
        return 0
    finally:
        service.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
