# tui_app.py - terminal UI for the completion index
# -------------------------------------------------------
# Features:
#  - Live suggestions as you type (last word = prefix, the word before = context)
#  - Tab accepts the top suggestion and completes the word in place
#  - Latency readout for the last query
# -------------------------------------------------------

from __future__ import annotations

import logging
import time
from typing import List, Optional, Tuple

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.reactive import reactive
from textual.widgets import Footer, Header, Input, Static

from prefix_completer.context.tokenizer import split_query
from prefix_completer.core.autocompleter import CompletionIndex
from prefix_completer.utils.config_manager import Config

logger = logging.getLogger(__name__)


def format_predictions(predictions: List[Tuple[str, float]]) -> str:
    """Markup for the suggestion list; words are escaped so they show as typed."""
    if not predictions:
        return "[dim]No suggestions[/dim]"
    lines = []
    for i, (word, p) in enumerate(predictions, 1):
        color = "green" if p > 0.5 else "cyan" if p > 0.2 else "yellow"
        lines.append(f"[b]{i}[/b] • [{color}]{escape(word)}[/{color}]  [dim]{p:.3f}[/dim]")
    return "\n".join(lines)


class SuggestionPanel(Static):
    """
    Right-side suggestion list:
     - rank
     - the completed word, colored by probability
     - the probability itself
    """

    last_markup = ""

    def update_predictions(self, predictions: List[Tuple[str, float]]) -> None:
        self.last_markup = format_predictions(predictions)
        self.update(self.last_markup)


class TypingLatency(Static):
    def set_latency(self, seconds: float) -> None:
        self.update(f"[dim]Latency:[/dim] {seconds * 1000:.2f}ms")


class CompleterApp(App):
    """
    UI events -> CompletionIndex.autocomplete -> reactive state -> widgets.
    """

    CSS = """
    #left { width: 2fr; }
    #right { width: 1fr; border: round $accent; padding: 0 1; }
    #bottom { height: 1; }
    """

    BINDINGS = [
        Binding("tab", "accept_top", "Accept top suggestion", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    suggestions = reactive([])
    latency = reactive(0.0)

    def __init__(self, index: CompletionIndex, cfg: Optional[Config] = None):
        super().__init__()
        self.index = index
        self.cfg = cfg or Config()

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            with Container(id="left"):
                yield Input(placeholder="Start typing…", id="text_input")
            with Container(id="right"):
                yield SuggestionPanel(id="predictions")
        with Horizontal(id="bottom"):
            yield TypingLatency(id="latency")
            yield Static(id="status")
        yield Footer()

    def on_input_changed(self, event: Input.Changed) -> None:
        prev, prefix = split_query(event.value)
        if not prefix:
            self.suggestions = []
            return
        start = time.perf_counter()
        preds = self.index.autocomplete(prefix, k=self.cfg["max_suggestions"], preceding_word=prev)
        self.latency = time.perf_counter() - start
        self.suggestions = preds

    # watchers -----------------------------------------------------------
    def watch_suggestions(self, suggestions) -> None:
        self.query_one(SuggestionPanel).update_predictions(suggestions)

    def watch_latency(self, latency: float) -> None:
        self.query_one(TypingLatency).set_latency(latency)

    # actions ------------------------------------------------------------
    def action_accept_top(self) -> None:
        if self.suggestions:
            self.accept_word(self.suggestions[0][0])

    def accept_word(self, word: str) -> None:
        """Count the word once more and replace the half-typed prefix with it."""
        self.index.insert(word)
        logger.info("accepted: %s", word)

        box = self.query_one(Input)
        head, _, _ = box.value.rstrip().rpartition(" ")
        box.value = f"{head} {word} ".lstrip()
        box.cursor_position = len(box.value)
        self.query_one("#status", Static).update(f"[green]Accepted[/green] {escape(word)}")


def run_tui(index: CompletionIndex, cfg: Optional[Config] = None) -> None:
    CompleterApp(index, cfg).run()
