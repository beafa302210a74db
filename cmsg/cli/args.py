"""CLI Argument Parsing"""

import argparse
import argcomplete

from cmsg import __version__
from cmsg.config import VALID_PROVIDERS


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='cmsg',
        description='Generate a conventional commit message for working tree changes',
        epilog='Example: git commit -m "$(cmsg)"'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Input options
    parser.add_argument('-d', '--describe', type=str, metavar='TEXT', help='Describe the change yourself instead of reading git')
    parser.add_argument('-C', '--repo', type=str, metavar='PATH', help='Repository to inspect (default: current directory)')

    # LLM options
    parser.add_argument('-p', '--provider', type=str, choices=sorted(VALID_PROVIDERS), help='LLM provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')
    parser.add_argument('--no-ai', action='store_true', help='Use heuristic rules only')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Log provider and fallback details to stderr')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
