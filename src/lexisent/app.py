from __future__ import annotations

import json
import signal
import sys
import time
from pathlib import Path
from typing import Optional

import typer

from lexisent.config import Settings, get_lexicon, get_settings
from lexisent.core.events import SentimentResult, WordTag
from lexisent.core.logger import (
    LogContext,
    get_logger,
    log_analysis_event,
    log_error_with_context,
    set_correlation_id,
    setup_logging,
)
from lexisent.session.debounce import Debouncer
from lexisent.session.history import AnalysisHistory, ExportError, export_json
from lexisent.sentiment.lexicon import LexiconError
from lexisent.sentiment.scorer import LexiconSentimentScorer

log = get_logger("lexisent")
cli_app = typer.Typer(help="Lexicon-based sentiment analyzer.")

LABEL_COLORS = {
    "positive": typer.colors.GREEN,
    "negative": typer.colors.RED,
    "neutral": typer.colors.YELLOW,
}
PREVIEW_CHARS = 200

_shutdown_requested = False


def _signal_handler(signum: int, frame) -> None:
    global _shutdown_requested
    log.info(f"Received {signal.Signals(signum).name}, stopping...")
    _shutdown_requested = True


def pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


def _setup(settings: Settings) -> None:
    setup_logging(settings.log_level, json_output=settings.log_json, log_file=settings.log_file)
    set_correlation_id()


def _make_scorer(settings: Settings) -> LexiconSentimentScorer:
    """Build a scorer over the configured lexicon, exiting on a bad lexicon file."""
    try:
        return LexiconSentimentScorer(get_lexicon(settings))
    except LexiconError as e:
        log_error_with_context(log, "Lexicon error", e, path=str(settings.lexicon_path))
        raise typer.Exit(code=1)


def _load_settings() -> Settings:
    try:
        return get_settings()
    except Exception as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def render_result(result: SentimentResult) -> None:
    color = LABEL_COLORS[result.sentiment]
    typer.secho(
        f"{result.sentiment.capitalize()} sentiment  (confidence {pct(result.confidence)})",
        fg=color,
        bold=True,
    )
    typer.echo(f"Words analyzed: {result.word_count}")
    typer.secho(f"  Positive: {pct(result.positive_score)}", fg=LABEL_COLORS["positive"])
    typer.secho(f"  Negative: {pct(result.negative_score)}", fg=LABEL_COLORS["negative"])
    typer.secho(f"  Neutral:  {pct(result.neutral_score)}", fg=LABEL_COLORS["neutral"])


def render_tags(tags: list[WordTag]) -> None:
    parts = []
    for tag in tags:
        if tag.score == 0:
            parts.append(tag.word)
        else:
            parts.append(typer.style(tag.word, fg=LABEL_COLORS[tag.sentiment], bold=True))
    typer.echo(" ".join(parts))


def render_history(history: AnalysisHistory) -> None:
    if len(history) == 0:
        typer.echo("History is empty.")
        return
    for entry in history:
        r = entry.result
        typer.secho(
            f"{r.sentiment} ({pct(r.confidence)} confidence)  {r.timestamp:%Y-%m-%d %H:%M:%S}",
            fg=LABEL_COLORS[r.sentiment],
        )
        typer.echo(f"  {preview(entry.text)}")
        typer.echo(
            f"  Positive: {pct(r.positive_score)}  "
            f"Negative: {pct(r.negative_score)}  "
            f"Neutral: {pct(r.neutral_score)}"
        )


@cli_app.command()
def analyze(
    text: str = typer.Argument(..., help="Text to analyze"),
    words: bool = typer.Option(False, "--words", help="Also show word-level tags"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Classify a piece of text."""
    settings = _load_settings()
    _setup(settings)
    scorer = _make_scorer(settings)

    result = scorer.classify(text)
    log_analysis_event(log, result.sentiment, result.confidence, result.word_count)

    if as_json:
        payload = {"result": result.to_dict()}
        if words:
            payload["words"] = [t.to_dict() for t in scorer.tag_words(text)]
        typer.echo(json.dumps(payload, indent=2))
        return

    render_result(result)
    if words:
        render_tags(scorer.tag_words(text))


@cli_app.command("words")
def words_cmd(text: str = typer.Argument(..., help="Text to tag")):
    """Show the polarity of each word."""
    settings = _load_settings()
    _setup(settings)
    scorer = _make_scorer(settings)
    for tag in scorer.tag_words(text):
        typer.secho(f"{tag.word:<20} {tag.sentiment:<9} {tag.score:+d}", fg=LABEL_COLORS[tag.sentiment])


@cli_app.command()
def session(
    export: Optional[Path] = typer.Option(None, "--export", help="Export history here on exit"),
):
    """Analyze lines from stdin, keeping a history of recent analyses.

    Commands: :history, :export [PATH], :clear, :quit
    """
    settings = _load_settings()
    _setup(settings)
    scorer = _make_scorer(settings)
    history = AnalysisHistory(max_entries=settings.history_size)

    def do_export(path: Path) -> None:
        with LogContext(path=str(path)):
            try:
                written = export_json(history, path)
                typer.echo(f"Exported {len(history)} analyses to {written}")
            except ExportError as e:
                log_error_with_context(log, "Export failed", e)

    for raw in sys.stdin:
        line = raw.rstrip("\n")
        command = line.strip()
        if command in (":quit", ":q"):
            break
        if command == ":history":
            render_history(history)
            continue
        if command == ":clear":
            history.clear()
            typer.echo("History cleared.")
            continue
        if command == ":export" or command.startswith(":export "):
            arg = command[len(":export"):].strip()
            do_export(Path(arg) if arg else settings.export_path)
            continue
        if command.startswith(":"):
            typer.echo(f"Unknown command: {command}")
            continue
        if not command:
            continue

        result = scorer.classify(line)
        log_analysis_event(log, result.sentiment, result.confidence, result.word_count)
        history.add(line, result)
        render_result(result)

    if export is not None:
        do_export(export)


@cli_app.command()
def watch(
    path: Path = typer.Argument(..., help="Text file to re-analyze whenever it changes"),
    interval: float = typer.Option(0.2, "--interval", help="Polling interval in seconds"),
):
    """Re-analyze a file after edits settle.

    Text still waiting out the debounce delay is analyzed on shutdown.
    """
    global _shutdown_requested
    settings = _load_settings()
    _setup(settings)
    scorer = _make_scorer(settings)

    def on_text(text: str) -> None:
        result = scorer.classify(text)
        log_analysis_event(log, result.sentiment, result.confidence, result.word_count)
        render_result(result)

    debouncer = Debouncer(
        on_text,
        delay_seconds=settings.debounce_seconds,
        on_clear=lambda: typer.echo("(empty)"),
    )
    log.info(f"Watching {path} (debounce {settings.debounce_ms}ms)")

    last_content: Optional[str] = None
    _shutdown_requested = False
    previous_handlers = {
        sig: signal.signal(sig, _signal_handler) for sig in (signal.SIGTERM, signal.SIGINT)
    }
    try:
        while not _shutdown_requested:
            try:
                content = path.read_text(encoding="utf-8")
            except OSError as e:
                if last_content:
                    log.warning(f"Cannot read {path}: {e}")
                content = ""
            if content != last_content:
                last_content = content
                debouncer.submit(content)
            time.sleep(interval)
    finally:
        debouncer.flush()
        for sig, handler in previous_handlers.items():
            signal.signal(sig, handler)
    log.info("Watch stopped.")


@cli_app.command()
def validate():
    """Validate configuration and the lexicon without analyzing anything."""
    settings = _load_settings()
    setup_logging("INFO", json_output=settings.log_json)

    try:
        lexicon = get_lexicon(settings)
    except LexiconError as e:
        log.error(f"Lexicon validation failed: {e}")
        raise typer.Exit(code=1)

    log.info("Configuration validation passed!")
    log.info(f"  Lexicon: {settings.lexicon_path or 'built-in'}")
    log.info(
        f"  Words: positive={len(lexicon.positive)}, negative={len(lexicon.negative)}, "
        f"neutral={len(lexicon.neutral)}"
    )
    overlaps = lexicon.overlaps()
    if overlaps:
        for pair, common in overlaps.items():
            log.warning(f"  Overlap {pair}: {sorted(common)}")
    else:
        log.info("  Lists are disjoint")
    log.info(f"  History size: {settings.history_size}, debounce: {settings.debounce_ms}ms")


if __name__ == "__main__":
    cli_app()
