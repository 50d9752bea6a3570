from typing import Any, List
import sys
import os
import argparse
from pathlib import Path
import logging

from lfscheck.errors import LfsCheckError
from lfscheck.messages import error, info

##################################################################################################
# Main
##################################################################################################

ArgParser = argparse.ArgumentParser

class Commands:
    def __init__(self, parser: ArgParser) -> None:
        self.root_parser = parser
        self.parsers = {}
        self.subparsers = {}

    class Command:
        def __init__(self, commands: 'Commands', name: str) -> None:
            path = name.split('/')
            parsers = commands.parsers
            subparsers = commands.subparsers

            def subcommand(i: int) -> str:
                if i == 0: return 'command'
                return ('sub' * i) + 'command'

            if '' not in parsers:
                parsers[''] = commands.root_parser

            if '' not in subparsers:
                subparsers[''] = commands.root_parser.add_subparsers(dest='command')

            for i in range(1, len(path) + 1):
                p = '/'.join(path[:i])
                p0 = '/'.join(path[:i-1])
                if p not in parsers:
                    parsers[p] = subparsers[p0].add_parser(path[i-1])
                if p not in subparsers and i != len(path):
                    subparsers[p] = parsers[p].add_subparsers(dest=subcommand(i))

            self.parser = parsers[name]

        def __enter__(self) -> ArgParser:
            return self.parser

        def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
            pass

    def __call__(self, name: str) -> 'Commands.Command':
        return Commands.Command(self, name)


def build_parser() -> ArgParser:
    parser = argparse.ArgumentParser(
        prog='lfscheck',
        description='Check that binary files are stored in git LFS.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show git invocations and set sizes.')
    commands = Commands(parser)

    with commands('check') as cmd:
        cmd.add_argument('path', type=str, nargs='?', default='.', help='Any path inside the work tree to check.')
        cmd.add_argument('-e', '--extension', dest='extensions', action='append', default=[],
                         help='Extension that must be stored in LFS (repeatable). Replaces the configured list.')
        cmd.add_argument('-x', '--exclude', dest='exclude_paths', action='append', default=[],
                         help='Path prefix exempt from the policy (repeatable). Replaces the configured list.')
        cmd.add_argument('--config', type=str, default=None, help='Config file (default: .lfscheck.yml in the work tree root).')
        cmd.add_argument('--fix', action='store_true', help='Move offending files to LFS in the index.')
        cmd.add_argument('--format', dest='output_format', choices=['text', 'github'], default=None,
                         help='Output format (default: github when GITHUB_ACTIONS=true, text otherwise).')

    with commands('config/show') as cmd:
        cmd.add_argument('path', type=str, nargs='?', default='.')
        cmd.add_argument('--config', type=str, default=None)

    return parser


def main(argv: List[str] | None = None) -> int:
    if sys.platform.lower() == "win32":
        os.system('color')
        sys.stdout.reconfigure(encoding='utf-8') # type: ignore
        sys.stderr.reconfigure(encoding='utf-8') # type: ignore

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')
    # GitPython logs every command at DEBUG
    logging.getLogger("git").setLevel(logging.INFO)

    if args.command is None:
        parser.print_help()
        return 0

    from lfscheck.tasks.check import EXIT_OK, EXIT_TOOL_ERROR

    try:
        match args.command:
            case 'check':
                from lfscheck.config import OutputFormat
                from lfscheck.tasks.check import check_main
                return check_main(
                    Path(args.path),
                    config_path=Path(args.config) if args.config else None,
                    extensions=args.extensions,
                    exclude_paths=args.exclude_paths,
                    fix=True if args.fix else None,
                    output_format=OutputFormat(args.output_format) if args.output_format else None,
                )

            case 'config':
                match args.subcommand:
                    case 'show':
                        from lfscheck.tasks.config_show import show_config
                        show_config(Path(args.path), Path(args.config) if args.config else None)
                        return EXIT_OK
                    case _:
                        parser.print_help()
                        return EXIT_OK

            case _:
                raise ValueError(f"Unknown command: {args.command}")

    except LfsCheckError as e:
        error(e.message)
        if e.suggested_action:
            info(e.suggested_action)
        return EXIT_TOOL_ERROR


if __name__ == '__main__':
    sys.exit(main())
