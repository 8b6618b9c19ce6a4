"""CLI entrypoint for postboard."""

import argparse
import shlex
import sys
from pathlib import Path
from typing import Callable, Dict, Optional, TextIO

from postboard.config.loader import LOG_LEVELS, get_log_level, load_config
from postboard.errors import ValidationError
from postboard.output.table import render_json, render_markdown, render_text
from postboard.records.models import ViewState
from postboard.retrieval.fetcher import RecordFetcher
from postboard.state import view_state
from postboard.state.store import RecordStore
from postboard.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

RENDERERS: Dict[str, Callable[[ViewState], str]] = {
    "text": render_text,
    "md": render_markdown,
    "json": render_json,
}

BROWSE_HELP = """Commands:
  user <id>      set the user id filter input (no argument clears it)
  text <words>   set the text filter input (no argument clears it)
  apply          apply the filter inputs
  sort           sort the displayed records by title
  reset          clear filters and inputs, back to page 1
  page <n>       go to page n
  next / prev    move one page forward or back
  show           redraw the current page
  help           show this help
  quit           leave the session"""


def _notify(message: str, err: TextIO) -> None:
    print(f"! {message}", file=err)


def cmd_list(args: argparse.Namespace) -> int:
    """Fetch once, apply the requested actions, and print one page."""
    store = RecordStore()
    store.load(RecordFetcher(args.config_data))

    if args.user_id is not None or args.text:
        try:
            store.dispatch(view_state.apply_filters, args.user_id, args.text)
        except ValidationError as e:
            _notify(str(e), sys.stderr)
            return 2

    if args.sort == "title":
        store.dispatch(view_state.sort_by_title)

    if args.page != 1:
        store.dispatch(view_state.go_to_page, args.page)

    print(RENDERERS[args.format](store.state))
    return 0


class BrowseSession:
    """Interactive view: maps typed commands onto the user-facing controls."""

    def __init__(
        self,
        store: RecordStore,
        out: TextIO = sys.stdout,
        err: TextIO = sys.stderr,
        renderer: Callable[[ViewState], str] = render_text,
    ):
        self.store = store
        self.out = out
        self.err = err
        self.renderer = renderer
        self.user_id_input = ""
        self.text_input = ""
        self._unsubscribe = store.subscribe(self.render)

    def render(self, state: Optional[ViewState] = None) -> None:
        state = state if state is not None else self.store.state
        print(self.renderer(state), file=self.out)
        print(f"Filters: user id={self.user_id_input or '-'} text={self.text_input or '-'}", file=self.out)

    def close(self) -> None:
        self._unsubscribe()

    def _parse_page(self, argument: str) -> Optional[int]:
        try:
            return int(argument)
        except ValueError:
            _notify(f"Not a page number: {argument!r}", self.err)
            return None

    def handle(self, line: str) -> bool:
        """
        Run one command line.

        Args:
            line: Raw command text

        Returns:
            False when the session should end, True otherwise
        """
        try:
            parts = shlex.split(line)
        except ValueError:
            parts = line.split()
        if not parts:
            return True

        command, rest = parts[0].lower(), parts[1:]
        argument = " ".join(rest)

        if command in ("quit", "exit"):
            return False
        if command == "help":
            print(BROWSE_HELP, file=self.out)
        elif command == "user":
            self.user_id_input = argument
        elif command == "text":
            self.text_input = argument
        elif command == "apply":
            try:
                self.store.dispatch(view_state.apply_filters, self.user_id_input, self.text_input)
            except ValidationError as e:
                _notify(str(e), self.err)
        elif command == "sort":
            self.store.dispatch(view_state.sort_by_title)
        elif command == "reset":
            self.user_id_input = ""
            self.text_input = ""
            self.store.dispatch(view_state.reset_filters)
        elif command == "page":
            page_number = self._parse_page(argument)
            if page_number is not None:
                self.store.dispatch(view_state.go_to_page, page_number)
        elif command == "next":
            current = self.store.state.page_state.current_page
            self.store.dispatch(view_state.go_to_page, current + 1)
        elif command == "prev":
            current = self.store.state.page_state.current_page
            self.store.dispatch(view_state.go_to_page, current - 1)
        elif command == "show":
            self.render()
        else:
            _notify(f"Unknown command '{command}'. Type 'help' for commands.", self.err)
        return True

    def run(self, read_line: Callable[[str], str] = input) -> None:
        self.render()
        try:
            while True:
                try:
                    line = read_line("postboard> ")
                except EOFError:
                    break
                if not self.handle(line):
                    break
        finally:
            self.close()


def cmd_browse(args: argparse.Namespace) -> int:
    """Start an interactive session; the startup fetch runs in the background."""
    store = RecordStore()
    session = BrowseSession(store)
    store.load_in_background(RecordFetcher(args.config_data))
    session.run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse a remote list of posts with filters, sorting and paging")
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML config file (default: postboard.config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(LOG_LEVELS),
        help="Override the configured log level (e.g. INFO, DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # list command
    list_parser = subparsers.add_parser("list", help="Fetch records and print one page")
    list_parser.add_argument(
        "--user-id",
        type=str,
        help="Keep only records with this user id",
    )
    list_parser.add_argument(
        "--text",
        type=str,
        help="Keep only records whose title or body contains this text (case-insensitive)",
    )
    list_parser.add_argument(
        "--sort",
        type=str,
        choices=["none", "title"],
        default="none",
        help="Sort order (default: none)",
    )
    list_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page number to print (default: 1)",
    )
    list_parser.add_argument(
        "--format",
        type=str,
        choices=sorted(RENDERERS),
        default="text",
        help="Output format: text, md or json (default: text)",
    )
    list_parser.set_defaults(func=cmd_list)

    # browse command
    browse_parser = subparsers.add_parser("browse", help="Interactive filter/sort/page session")
    browse_parser.set_defaults(func=cmd_browse)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    args.config_data = load_config(args.config)
    configure_logging(args.log_level or get_log_level(args.config_data))

    try:
        return args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    sys.exit(main())
