#!/usr/bin/env python3
"""
Bril CFG command line interface

Usage:
    bril-cfg < program.json
    bril-cfg dot program.json -o program.dot
    bril-cfg json program.json --n-jobs 4
    bril-cfg stats program.json --json
    bril-cfg config --generate -o cfg_config.yaml
"""

import argparse
import json
import sys
from typing import List, Optional

import yaml

from .errors import BrilCfgError
from .pipeline import CFGPipeline, PipelineConfig
from .utils.logging import setup_logging, get_logger

COMMANDS = ('dot', 'json', 'stats', 'config')


def build_config(args, output_format: Optional[str] = None) -> PipelineConfig:
    """Config file values first, then CLI overrides"""
    if getattr(args, 'config', None):
        config = PipelineConfig.from_yaml(args.config)
    else:
        config = PipelineConfig()

    return config.update(
        input_path=getattr(args, 'file', None),
        output_path=getattr(args, 'output', None),
        output_format=output_format,
        functions=getattr(args, 'function', None) or None,
        n_jobs=getattr(args, 'n_jobs', None),
        show_progress=True if getattr(args, 'progress', False) else None,
        log_level=getattr(args, 'log_level', None),
    )


def cmd_render(args, output_format: str) -> int:
    config = build_config(args, output_format)
    setup_logging(config.log_level)
    CFGPipeline(config).run()
    return 0


def cmd_dot(args) -> int:
    """Render every function as a DOT digraph"""
    return cmd_render(args, 'dot')


def cmd_json(args) -> int:
    """Write serialised CFGs as JSON"""
    return cmd_render(args, 'json')


def cmd_stats(args) -> int:
    """Print per-function CFG statistics"""
    config = build_config(args)
    setup_logging(config.log_level)

    pipeline = CFGPipeline(config)
    stats = pipeline.stats(pipeline.build(pipeline.load()))

    if args.json:
        print(json.dumps(stats, indent=2))
        return 0

    for name, info in stats.items():
        print(f"{name}:")
        print(f"  blocks: {info['blocks']} ({info['empty_blocks']} empty)")
        print(f"  edges: {info['edges']}")
        if info['unreachable_blocks']:
            print(f"  unreachable: {', '.join(info['unreachable_blocks'])}")
        if info['dangling_targets']:
            print(f"  dangling targets: {', '.join(info['dangling_targets'])}")
    return 0


def cmd_config(args) -> int:
    """Generate or show config"""
    if args.generate:
        config = PipelineConfig()
        output_path = args.output or 'cfg_config.yaml'
        config.save(output_path)
        print(f"Config saved to {output_path}")
        return 0

    config = PipelineConfig.from_yaml(args.config) if args.config else PipelineConfig()
    print(yaml.dump(config.to_dict(), default_flow_style=False), end='')
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('file', nargs='?', default=None,
                        help="Bril JSON program (default: stdin, or '-')")
    parser.add_argument('--config', type=str, help='Path to config YAML')
    parser.add_argument('--function', action='append', metavar='NAME',
                        help='Only process this function (repeatable)')
    parser.add_argument('--n-jobs', type=int, help='Number of worker processes')
    parser.add_argument('--progress', action='store_true', help='Show a progress bar')
    parser.add_argument('--log-level', type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (stderr)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bril-cfg',
        description='Build control-flow graphs for Bril programs',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s < program.json
  %(prog)s dot program.json -o program.dot
  %(prog)s json program.json --function main
  %(prog)s stats program.json --json
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # ========== dot command ==========
    dot_parser = subparsers.add_parser('dot', help='Render CFGs as Graphviz DOT')
    _add_common_arguments(dot_parser)
    dot_parser.add_argument('--output', '-o', type=str, help='Output file (default: stdout)')
    dot_parser.set_defaults(func=cmd_dot)

    # ========== json command ==========
    json_parser = subparsers.add_parser('json', help='Write CFGs as JSON')
    _add_common_arguments(json_parser)
    json_parser.add_argument('--output', '-o', type=str, help='Output file (default: stdout)')
    json_parser.set_defaults(func=cmd_json)

    # ========== stats command ==========
    stats_parser = subparsers.add_parser('stats', help='Show CFG statistics')
    _add_common_arguments(stats_parser)
    stats_parser.add_argument('--json', action='store_true', help='Output as JSON')
    stats_parser.set_defaults(func=cmd_stats)

    # ========== config command ==========
    config_parser = subparsers.add_parser('config', help='Generate or show config')
    config_parser.add_argument('--generate', action='store_true',
                               help='Generate default config file')
    config_parser.add_argument('--config', type=str, help='Config file to show')
    config_parser.add_argument('--output', '-o', type=str,
                               help='Output path for generated config')
    config_parser.set_defaults(func=cmd_config)

    return parser


def _with_default_command(argv: List[str]) -> List[str]:
    """`bril-cfg [FILE]` is shorthand for `bril-cfg dot [FILE]`

    The top-level parser takes no options besides help, so a command can only
    be the first token. A file or a `--function` called `stats` goes to `dot`.
    """
    if argv and (argv[0] in COMMANDS or argv[0] in ('-h', '--help')):
        return argv
    return ['dot'] + argv


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(_with_default_command(argv))

    setup_logging(getattr(args, 'log_level', None) or 'WARNING')

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except (BrilCfgError, OSError, yaml.YAMLError) as e:
        logger = get_logger('cli')
        logger.error(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
