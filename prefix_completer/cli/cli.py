"""
cli.py - line oriented front end for the completion index
Features:
- One prefix per line; the word before it is used as context
- Ranked suggestions in a Rich table, or a "not found" line
- /add to teach new words, /accept to take the top suggestion
- Latency tracking via Metrics, settings via Config
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Tuple

# ui styling with Rich
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box
from rich.markup import escape

from prefix_completer.core.autocompleter import CompletionIndex
from prefix_completer.core.ranking import STRATEGIES
from prefix_completer.context.tokenizer import simple_tokenize, split_query
from prefix_completer.utils.config_manager import Config
from prefix_completer.utils.logger_utils import configure_logging
from prefix_completer.utils.metrics_tracker import Metrics

logger = logging.getLogger(__name__)

# vocabulary loaded when no --corpus is given
DEMO_WORDS = ["hello", "hell", "helicopter", "hero", "world", "how", "are", "you"]

PROMPT = "Enter a prefix to autocomplete: "


class CLI:
    """Command-line interface managing the read / suggest / accept loop."""

    def __init__(self,
                 index: CompletionIndex,
                 cfg: Optional[Config] = None,
                 console: Optional[Console] = None,
                 stream: Optional[TextIO] = None):
        """
        index: the completion index to query and extend
        cfg: settings (suggestion count, strategy, display)
        console: Rich console to draw on
        stream: read input lines from here instead of the terminal
        """
        self.index = index
        self.cfg = cfg or Config()
        self.console = console or Console()
        self.stream = stream
        self.metrics = Metrics()

        self.last_suggestions: List[Tuple[str, float]] = []
        self.context_word: Optional[str] = None
        self.running = True

    def run(self):
        """
        Main loop:
        - read a line
        - slash commands are handled separately
        - anything else is split into (preceding word, prefix) and completed
        """
        self.console.rule("[bold magenta]Prefix Completer[/bold magenta]")
        self.console.print("Commands: /add <words> /accept /strategy <name> /stats /config /quit\n")

        while self.running:
            try:
                line = self._read_line()
            except (EOFError, KeyboardInterrupt):
                self._exit()
                break

            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            if line.startswith("/"):
                self._handle_command(line.strip())
                continue
            self._process_input(line)

    def _read_line(self) -> str:
        line = self.console.input(PROMPT, stream=self.stream)
        # readline() gives "" only at end of stream
        if self.stream is not None and line == "":
            raise EOFError
        return line

    # COMMAND HANDLING -----------------------------------------------------------
    def _handle_command(self, cmd: str):
        name, _, arg = cmd.partition(" ")
        arg = arg.strip()

        if name in ("/quit", "/exit"):
            self._exit()
            return

        if name == "/add":
            self._add_words(arg)
            return

        if name == "/accept":
            self._accept_top()
            return

        if name == "/strategy":
            self._set_strategy(arg)
            return

        if name == "/stats":
            self._show_stats()
            return

        if name == "/config":
            self._show_config()
            return

        self.console.print(f"[red]Unknown command:[/red] {escape(cmd)}")

    # CORE INPUT PROCESSING ---------------------------------------------------------------
    def _process_input(self, line: str):
        prev, prefix = split_query(line)
        if prev is None:
            prev = self.context_word

        k = self.cfg["max_suggestions"]
        t0 = time.perf_counter()
        suggestions = self.index.autocomplete(prefix, k=k, preceding_word=prev)
        self.metrics.record("suggest_time", time.perf_counter() - t0)

        self.last_suggestions = suggestions
        if not suggestions:
            self.console.print(f"No words found for prefix '{escape(prefix)}'")
            return
        self._display_suggestions(prefix, prev, suggestions)

    # DISPLAY -------------------------------------------------------------------------------
    def _display_suggestions(self, prefix: str, prev: Optional[str], suggestions: List[Tuple[str, float]]):
        title = f"Autocomplete results for '{escape(prefix)}'"
        if prev:
            title += f" after '{escape(prev)}'"
        table = Table(title=title, box=box.SIMPLE, show_edge=False)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Word", style="bold")
        if self.cfg["show_probabilities"]:
            table.add_column("Probability", justify="right", style="magenta")

        for i, (w, p) in enumerate(suggestions, 1):
            row = [str(i), Text(w, style=self._color_for_score(p))]
            if self.cfg["show_probabilities"]:
                row.append(f"{p:.3f}")
            table.add_row(*row)
        self.console.print(table)

    @staticmethod
    def _color_for_score(p: float) -> str:
        """
        > 0.5: green
        > 0.2: cyan
        else: yellow (includes unseen bigrams at 0)
        """
        if p > 0.5:
            return "green"
        if p > 0.2:
            return "cyan"
        return "yellow"

    # COMMANDS --------------------------------------------------------------
    def _add_words(self, arg: str):
        words = simple_tokenize(arg)
        if not words:
            self.console.print("[yellow]Nothing to add.[/yellow]")
            return
        self.index.insert_many(words)
        self.console.print(f"[cyan]Added:[/cyan] {escape(', '.join(words))}")

    def _accept_top(self):
        if not self.last_suggestions:
            self.console.print("[yellow]No suggestion to accept.[/yellow]")
            return
        word = self.last_suggestions[0][0]
        self.index.insert(word)
        self.context_word = word
        self.last_suggestions = []
        self.console.print(f"[green]Accepted:[/green] {escape(word)}")

    def _set_strategy(self, name: str):
        if name not in STRATEGIES:
            self.console.print(f"[red]Unknown strategy:[/red] {escape(name) or '(none)'}  "
                               f"[dim]choose from {', '.join(STRATEGIES)}[/dim]")
            return
        self.index.set_strategy(name)
        self.cfg.set("strategy", name)
        self.console.print(f"[cyan]Strategy:[/cyan] {name}")

    def _show_stats(self):
        t = Table(title="Index", box=box.MINIMAL)
        t.add_column("Metric", style="cyan")
        t.add_column("Value", style="white")
        for k, v in self.index.stats().items():
            t.add_row(k, str(v))
        for key, avg, n in self.metrics.rows():
            t.add_row(f"{key} (avg ms)", f"{avg * 1000:.3f} over {n}")
        self.console.print(t)

    def _show_config(self):
        body = "\n".join(f"{k:20} = {v}" for k, v in self.cfg.as_dict().items())
        self.console.print(Panel(body, title="Config", border_style="cyan"))

    def _exit(self):
        self.console.rule("[red]Exiting[/red]")
        self.running = False


# ENTRY POINT ---------------------------------------------------------------------

def load_corpus_words(path: Path) -> List[str]:
    """Whitespace tokens of a text file, in order."""
    with path.open("r", encoding="utf-8") as fh:
        return simple_tokenize(fh.read())


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="prefix-completer", description="Interactive prefix completion.")
    p.add_argument("--corpus", type=Path, help="text file used for both vocabulary and context")
    p.add_argument("-k", type=int, help="number of suggestions to show")
    p.add_argument("--strategy", choices=STRATEGIES, help="ranking strategy")
    p.add_argument("--config", help="JSON config file")
    p.add_argument("--log-level", help="logging level, e.g. DEBUG")
    p.add_argument("--log-file", help="also write logs to this file")
    p.add_argument("--tui", action="store_true", help="start the terminal UI instead of the line prompt")
    return p


def main(argv: Optional[Sequence[str]] = None, stream: Optional[TextIO] = None,
         console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    if args.k is not None:
        cfg.data["max_suggestions"] = args.k
    if args.strategy:
        cfg.data["strategy"] = args.strategy
    configure_logging(args.log_level or cfg["log_level"], args.log_file)

    console = console or Console()
    if args.corpus:
        try:
            words = load_corpus_words(args.corpus)
        except OSError as e:
            console.print(f"[red]Could not read corpus:[/red] {e}")
            return 1
    else:
        words = DEMO_WORDS

    try:
        index = CompletionIndex.from_corpus(words, strategy=cfg["strategy"])
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return 1
    logger.info("index ready: %s", index.stats())

    if args.tui:
        # textual is only needed for the TUI
        from prefix_completer.tui_app import run_tui
        run_tui(index, cfg)
        return 0

    CLI(index, cfg, console=console, stream=stream).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
