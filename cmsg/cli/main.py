"""CLI Main Entry Point"""

import logging
import os
import sys

from cmsg.config import load_config, resolve_api_keys
from cmsg.git import GitAnalyzer, GitError, manual_change
from cmsg.llm import LLMClient
from cmsg.output import success, dim, bold, info, print_error, colorize_kind, colorize_commit_type, Spinner, RULE
from cmsg.synth import MessageSynthesizer, resolve_client

from cmsg.cli.args import parse_args
from cmsg.cli.commands import display_config


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _get_provider_and_model(args, config):
    """Resolve provider and model from args, env, or config.

    Precedence: CLI args > environment variables > config file
    """
    if args.no_ai:
        return "none", None
    provider = args.provider or os.environ.get('CMSG_PROVIDER') or config.provider
    model = args.model or os.environ.get('CMSG_MODEL') or config.model
    return provider, model


def _collect_changes(args):
    """Change records from --describe or the git working tree.

    Returns:
        list of ChangeRecord, or None after printing an error
    """
    if args.describe:
        return [manual_change(args.describe)]

    try:
        changes = GitAnalyzer(args.repo).get_changes()
    except GitError as e:
        print_error(str(e))
        return None

    if not changes:
        print_error("No changes detected in the repository.")
        return None
    return changes


def _display_changes(changes, max_shown):
    """Show the change records, collapsing long lists."""
    print(bold("Changes:"))
    shown = changes[:max_shown]
    remaining = len(changes) - len(shown)
    for change in shown:
        print(f"  {colorize_kind(change.change_kind)} {dim(change.description)}")
    if remaining > 0:
        print(dim(f"  ... and {remaining} more files"))


def _display_message(message):
    """Display commit message with horizontal rules and colored type."""
    colored = colorize_commit_type(message)
    lines = colored.split('\n')
    # Raw message for width, colored one may contain ANSI codes
    width = max((len(line) for line in message.split('\n')), default=40)
    print(f"\n{dim(RULE * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim(RULE * width))


def _initialize_client(provider, model, config) -> LLMClient | None:
    return resolve_client(
        provider,
        model=model,
        host=config.ollama_host,
        timeout=config.timeout,
        api_keys=resolve_api_keys(config) if provider != "ollama" else None,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    _configure_logging(args.verbose)

    config = load_config()
    if args.display_config:
        return display_config(config)

    provider, model = _get_provider_and_model(args, config)
    is_pipe = not sys.stdout.isatty()

    changes = _collect_changes(args)
    if changes is None:
        return 1

    if not is_pipe:
        _display_changes(changes, config.max_file_display)

    client = _initialize_client(provider, model, config)
    if not is_pipe:
        source = info(client.name) if client else info("heuristic rules")
        print(f"Writing message using {source}... ", end='', flush=True)

    with Spinner():
        message = MessageSynthesizer(client=client).generate(changes)

    if is_pipe:
        print(message)
        return 0

    print(success("done!"))
    _display_message(message)
    return 0


def run() -> None:
    sys.exit(main())
