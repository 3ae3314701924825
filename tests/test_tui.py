# tests/test_tui.py - headless checks of the Textual app via run_test()

import asyncio

from rich.text import Text
from textual.widgets import Input

from prefix_completer.cli.cli import DEMO_WORDS
from prefix_completer.core.autocompleter import CompletionIndex
from prefix_completer.tui_app import CompleterApp, SuggestionPanel, format_predictions


def shown(app):
    """Plain text of the suggestion panel as the user sees it."""
    return Text.from_markup(app.query_one("#predictions", SuggestionPanel).last_markup).plain


async def type_text(app, pilot, value):
    app.query_one(Input).value = value
    await pilot.pause()


def test_typing_updates_predictions():
    async def scenario():
        app = CompleterApp(CompletionIndex.from_corpus(DEMO_WORDS))
        async with app.run_test() as pilot:
            await type_text(app, pilot, "he")
            assert [w for w, _ in app.suggestions] == ["helicopter", "hell", "hello", "hero"]
            text = shown(app)
            assert "1 • helicopter" in text
            assert "4 • hero" in text

            # the word before the prefix is used as context: hello -> hell
            await type_text(app, pilot, "hello he")
            assert app.suggestions[0] == ("hell", 1.0)

    asyncio.run(scenario())


def test_tab_accepts_top_suggestion():
    async def scenario():
        index = CompletionIndex.from_corpus(DEMO_WORDS)
        app = CompleterApp(index)
        async with app.run_test() as pilot:
            await type_text(app, pilot, "hel")
            assert app.suggestions[0][0] == "helicopter"

            await pilot.press("tab")
            await pilot.pause()
            assert app.query_one(Input).value == "helicopter "
            assert index.frequency("helicopter") == 2
            # the trailing space leaves an empty prefix
            assert app.suggestions == []

    asyncio.run(scenario())


def test_empty_prefix_clears_suggestions():
    async def scenario():
        app = CompleterApp(CompletionIndex.from_corpus(DEMO_WORDS))
        async with app.run_test() as pilot:
            await type_text(app, pilot, "wo")
            assert app.suggestions == [("world", 1.0)]
            await type_text(app, pilot, "")
            assert app.suggestions == []
            assert shown(app) == "No suggestions"

    asyncio.run(scenario())


def test_markup_in_words_is_shown_literally():
    async def scenario():
        index = CompletionIndex.from_corpus(["[/b]x", "[red]y"])
        app = CompleterApp(index)
        async with app.run_test() as pilot:
            await type_text(app, pilot, "[")
            assert {w for w, _ in app.suggestions} == {"[/b]x", "[red]y"}
            text = shown(app)
            assert "[/b]x" in text
            assert "[red]y" in text

            await pilot.press("tab")
            await pilot.pause()
            assert index.frequency("[/b]x") == 2

    asyncio.run(scenario())


def test_format_predictions_escapes_words():
    markup = format_predictions([("[bold]w", 0.75), ("plain", 0.25)])
    assert Text.from_markup(markup).plain == "1 • [bold]w  0.750\n2 • plain  0.250"
    assert format_predictions([]) == "[dim]No suggestions[/dim]"
