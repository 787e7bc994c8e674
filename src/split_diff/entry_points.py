import argparse
import os
import sys

from rich.console import Console
from rich.text import Text
from textual.app import App

from split_diff.screens.diff_screen import DiffScreen
from split_diff.utils.config import PathsConfig, config
from split_diff.utils.diff_engine import compute_diff
from split_diff.utils.diff_filter import changed_window_indices
from split_diff.utils.io import safe_read_file
from split_diff.utils.logger import log
from split_diff.utils.render import build_rich_table, stats_markup
from split_diff.utils.validation import (
    ValidationError,
    validate_language,
    validate_non_negative,
    validate_pane_paths,
)

EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


class SplitDiffApp(App):
    DEFAULT_CSS = """
    App {
        background: $surface-darken-3;
    }

    Screen {
        background: $surface-darken-3;
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self, paths_config: PathsConfig, **screen_options):
        """Initialize the Split Diff application.

        Args:
            paths_config: Optional files backing the left and right panes
            **screen_options: Passed through to DiffScreen (preloaded text,
                languages, live mode, debounce, context, watch)
        """
        super().__init__()
        self.theme = 'textual-dark'
        self.paths_config = paths_config
        self.screen_options = screen_options

    def on_mount(self):
        """Push the compare screen to begin the application UI."""
        self.push_screen(
            DiffScreen(
                left_path=self.paths_config.left_path,
                right_path=self.paths_config.right_path,
                **self.screen_options,
            )
        )


def _create_argument_parser():
    """Create and configure the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='split-diff',
        description="Split Diff: side-by-side live text comparison",
    )
    parser.add_argument('left', nargs='?', help='File to load into the left (original) pane')
    parser.add_argument('right', nargs='?', help='File to load into the right (modified) pane')
    parser.add_argument('--manual', action='store_true', help='Start with live diffing off; compare on demand')
    parser.add_argument('--watch', action='store_true', help='Reload panes when their files change on disk')
    parser.add_argument('--debounce-ms', type=int, default=None, help='Quiet period before a live recompute')
    parser.add_argument('--context', type=int, default=None, help='Unchanged lines kept around each change')
    parser.add_argument('--changes-only', action='store_true', help='Show only changes and their context')
    parser.add_argument('--left-lang', type=str, default=None, help='Syntax mode of the left pane')
    parser.add_argument('--right-lang', type=str, default=None, help='Syntax mode of the right pane')
    parser.add_argument('--plain', action='store_true', help='Print the diff to stdout and exit')
    return parser


def _validate_configuration(args, paths_config: PathsConfig) -> PathsConfig:
    """Validate all user inputs; exits with EXIT_ERROR on the first problem."""
    try:
        left, right = validate_pane_paths(paths_config.left_path, paths_config.right_path)
        args.left_lang = validate_language(args.left_lang, "Left language")
        args.right_lang = validate_language(args.right_lang, "Right language")
        if args.debounce_ms is not None:
            args.debounce_ms = validate_non_negative(args.debounce_ms, "Debounce")
        if args.context is not None:
            args.context = validate_non_negative(args.context, "Context")
    except ValidationError as e:
        log(f"Configuration validation failed: {e}")
        sys.stderr.write(f"Configuration Error: {e}\n")
        sys.stderr.write("Use --help for usage information.\n")
        sys.exit(EXIT_ERROR)
    return PathsConfig(left_path=left, right_path=right)


def _load_pane_text(path):
    """Read a pane's file, or return "" when no file was given."""
    if not path:
        return ""
    result = safe_read_file(path)
    if not result.success:
        sys.stderr.write(f"Error: {result.error_message}\n")
        sys.exit(EXIT_ERROR)
    return result.content


def _run_plain(args, paths_config: PathsConfig, left_text: str, right_text: str) -> int:
    """Print the side-by-side diff and stats; returns the process exit code."""
    result = compute_diff(left_text, right_text)
    if args.changes_only:
        context = config.context_lines if args.context is None else args.context
        indices = changed_window_indices(result.rows, context)
    else:
        indices = list(range(len(result.rows)))

    left_title = os.path.basename(paths_config.left_path) if paths_config.left_path else "Original"
    right_title = os.path.basename(paths_config.right_path) if paths_config.right_path else "Modified"
    console = Console()
    if result.rows:
        console.print(build_rich_table(result, indices, left_title, right_title))
    console.print(Text.from_markup(stats_markup(result)))
    return EXIT_DIFFERENT if result.has_changes else EXIT_IDENTICAL


def main(argv=None):
    """Main entry point for Split Diff."""
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    paths_config = PathsConfig.from_args(args).merge_with_env()
    paths_config = _validate_configuration(args, paths_config)

    left_text = _load_pane_text(paths_config.left_path)
    right_text = _load_pane_text(paths_config.right_path)

    if args.plain:
        sys.exit(_run_plain(args, paths_config, left_text, right_text))

    log(f"Starting Split Diff (left={paths_config.left_path}, right={paths_config.right_path})")
    app = SplitDiffApp(
        paths_config,
        left_text=left_text,
        right_text=right_text,
        left_language=args.left_lang,
        right_language=args.right_lang,
        live=False if args.manual else None,
        debounce_ms=args.debounce_ms,
        context_lines=args.context,
        watch=args.watch,
        changes_only=args.changes_only,
    )
    # The TUI owns the terminal while it runs
    with log.muted_console():
        app.run()


if __name__ == "__main__":
    main()
