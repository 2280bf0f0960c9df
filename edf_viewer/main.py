"""
EDF Viewer command-line front end.

Decodes an EDF recording (or generates a synthetic one) and:
- prints the header and per-channel summaries in physical units (info)
- prints one decimated render window of a channel (window)
- writes a stacked PNG preview of all channels (preview)

Usage:
  edf-viewer info recording.edf
  edf-viewer window recording.edf --channel 2 --start 51200 --budget 500
  edf-viewer preview --synthetic --seconds 60 --output preview.png
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from edf_viewer.config import ConfigManager, configure_logging
from edf_viewer.exceptions import EdfViewerException
from edf_viewer.services.recording_service import RecordingService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='edf-viewer',
        description='Inspect EDF biosignal recordings and export decimated views',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Header and channel means
  edf-viewer info recording.edf

  # 500 points of channel 2 covering 30 s from sample 51200
  edf-viewer window recording.edf --channel 2 --start 51200 --budget 500 --visible-seconds 30

  # Preview without a file
  edf-viewer preview --synthetic --seconds 60 --output preview.png
        """
    )
    parser.add_argument('--config', type=str, help='Path to JSON config file')
    parser.add_argument('--log-level', type=str, help='Logging level (DEBUG, INFO, WARNING, ERROR)')

    source = argparse.ArgumentParser(add_help=False)
    source.add_argument('file', nargs='?', help='EDF file to load')
    source.add_argument('--synthetic', action='store_true', help='Use a generated recording instead of a file')
    source.add_argument('--channels', type=int, help='Synthetic channel count')
    source.add_argument('--rate', type=int, help='Synthetic sampling rate (Hz)')
    source.add_argument('--seconds', type=int, help='Synthetic duration (s)')
    source.add_argument('--seed', type=int, help='Synthetic noise seed')

    windowing = argparse.ArgumentParser(add_help=False)
    windowing.add_argument('--start', type=int, default=0, help='Scroll offset in samples (default: 0)')
    windowing.add_argument('--budget', type=int, help='Maximum points per channel window')
    windowing.add_argument('--span', type=int, help='Raw samples covered by the window')
    windowing.add_argument('--visible-seconds', type=float, help='Seconds covered by the window')

    sub = parser.add_subparsers(dest='command', required=True)
    info = sub.add_parser('info', parents=[source], help='Print header and channel summaries')
    info.add_argument('--json', action='store_true', help='Print JSON instead of text')

    window = sub.add_parser('window', parents=[source, windowing], help='Print one decimated channel window')
    window.add_argument('--channel', type=int, default=0, help='Channel index (default: 0)')
    window.add_argument('--json', action='store_true', help='Print JSON instead of one value per line')

    preview = sub.add_parser('preview', parents=[source, windowing], help='Write a PNG preview of all channels')
    preview.add_argument('--output', '-o', type=str, required=True, help='Output PNG path')
    return parser


def _load(service: RecordingService, config: ConfigManager, args: argparse.Namespace) -> None:
    if args.synthetic:
        service.load_synthetic(channel_count=args.channels, sampling_rate=args.rate,
                               duration_seconds=args.seconds, seed=args.seed)
    else:
        service.load_edf_file(config.app_settings.resolve_path(args.file))


def _print_info(service: RecordingService, as_json: bool) -> None:
    header = service.recording.header
    summaries = service.channel_summaries()
    if as_json:
        print(json.dumps({
            'source': service.source,
            'channel_count': header.channel_count,
            'record_count': header.record_count,
            'record_duration_seconds': header.record_duration_seconds,
            'sampling_rate_hz': header.sampling_rate_hz,
            'total_duration_seconds': header.total_duration_seconds,
            'start_datetime': header.start_datetime.isoformat() if header.start_datetime else None,
            'channels': [
                {
                    'index': s.index,
                    'label': s.label,
                    'unit': s.unit,
                    'sample_count': s.sample_count,
                    'sampling_rate_hz': s.sampling_rate_hz,
                    'raw_min': s.raw_min,
                    'raw_max': s.raw_max,
                    'mean_physical': s.mean_physical,
                }
                for s in summaries
            ],
        }, indent=2))
        return

    print(f"Source    : {service.source}")
    print(f"Patient   : {header.patient_id}")
    print(f"Recording : {header.recording_id}")
    if header.start_datetime:
        print(f"Start     : {header.start_datetime.isoformat(sep=' ')}")
    print(f"Channels  : {header.channel_count}")
    print(f"Records   : {header.record_count} x {header.record_duration_seconds:g} s")
    print(f"Rate      : {header.sampling_rate_hz:g} Hz")
    print(f"Duration  : {header.total_duration_seconds:g} s")
    for summary in summaries:
        print(f"  {summary}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main function; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.synthetic and not args.file:
        parser.error('a file is required unless --synthetic is given')

    try:
        config = ConfigManager(config_file=args.config)
    except EdfViewerException as e:
        configure_logging(args.log_level)
        logger.error(str(e))
        return 1
    configure_logging(args.log_level or config.app_settings.log_level)

    settings = config.viewer_settings
    if getattr(args, 'budget', None) is not None:
        settings.max_points_per_wave = args.budget
    if getattr(args, 'visible_seconds', None) is not None:
        settings.visible_seconds = args.visible_seconds

    service = RecordingService(settings)
    try:
        config.require_valid()
        _load(service, config, args)

        if args.command == 'info':
            _print_info(service, args.json)
        elif args.command == 'window':
            window = service.window(args.channel, args.start, args.span)
            values = [int(v) for v in window.values]
            if args.json:
                print(json.dumps({'channel': args.channel, 'start_index': window.start_index,
                                  'end_index': window.end_index, 'values': values}))
            else:
                for v in values:
                    print(v)
        elif args.command == 'preview':
            from edf_viewer.utils.preview import export_preview
            span = args.span if args.span is not None else service.window_span()
            export_preview(service.recording, args.output, start=args.start,
                           budget=settings.max_points_per_wave, span=span)
            print(f"Wrote {args.output}")
    except EdfViewerException as e:
        logger.error(str(e))
        return 1
    except (IndexError, ValueError) as e:
        logger.error(f"Invalid argument: {e}")
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
