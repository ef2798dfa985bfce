"""Command-line interface for git-status-tree"""

import os
import sys

from rich.console import Console
from rich.table import Table
from rich.text import Text

from git_status_tree.cli.args import parse_args
from git_status_tree.config import Config
from git_status_tree.display import render_visible
from git_status_tree.services.git_runner import GitRunner
from git_status_tree.services.repo_scanner import list_repositories
from git_status_tree.utils.logging import get_logger, setup_logging
from git_status_tree.views.branches import BranchView
from git_status_tree.views.status import StatusView

console = Console()
logger = get_logger(__name__)

VIEWS = {
    "status": StatusView,
    "branches": BranchView,
}


def build_config(parsed_args) -> Config:
    """Build a Config from parsed arguments."""
    options = dict(
        repo_path=parsed_args.path,
        repository_directories=list(parsed_args.scan_dir),
        repository_depth=parsed_args.depth,
        hidden_defaults={kind: False for kind in parsed_args.expand},
        log_limit=parsed_args.log_limit,
        verbose=parsed_args.verbose,
        debug=parsed_args.debug,
    )
    if parsed_args.sections:
        options["status_sections"] = parsed_args.sections
    return Config(**options)


def show_repositories(config: Config) -> int:
    """Print the repositories found under the configured directories."""
    roots = config.scan_roots() or [(os.getcwd(), config.repository_depth)]
    entries = list_repositories(roots)
    if not entries:
        console.print("[yellow]No repositories found[/yellow]")
        return 0

    table = Table(title="Repositories")
    table.add_column("Name", style="bold")
    table.add_column("Path", style="dim")
    for entry in entries:
        table.add_row(entry.name, entry.path)
    console.print(table)
    return 0


def show_view(view_name: str, config: Config, interactive: bool) -> int:
    """Show the status or branch view of ``config.repo_path``."""
    runner = GitRunner(config.repo_path)
    if not runner.succeeds(["rev-parse", "--git-dir"]):
        console.print(f"[red]Error: {config.repo_path} is not a git repository[/red]")
        return 1

    view = VIEWS[view_name](runner, config)
    if interactive:
        from git_status_tree.tui import StatusTreeApp

        app = StatusTreeApp(view, config)
        app.run()
        return 0

    view.refresh()
    console.print(render_visible(view.tree, gutter=True).text)
    for diagnostic in view.diagnostics:
        console.print(Text(diagnostic, style="yellow"))
    return 0


def main(argv=None):
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)

        # Determine if we should use interactive mode
        # Default to interactive if running in a TTY, unless explicitly disabled
        use_interactive = parsed_args.view != "repos" and (
            parsed_args.interactive or (sys.stdin.isatty() and not parsed_args.no_interactive)
        )

        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=use_interactive)

        config = build_config(parsed_args)
        config.interactive = use_interactive

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}", markup=False)

        if parsed_args.view == "repos":
            return show_repositories(config)
        return show_view(parsed_args.view, config, use_interactive)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
