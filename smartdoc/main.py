import argparse
import asyncio
import threading
from pathlib import Path

from smartdoc.analysis.models import AnalysisResult
from smartdoc.chat.session_manager import ChatSessionManager
from smartdoc.config.settings import Settings
from smartdoc.database.connection import close_pool
from smartdoc.exceptions import SmartDocError
from smartdoc.export.exporter import Exporter
from smartdoc.export.models import ExportFormat
from smartdoc.history.factory import KeyValueStoreFactory
from smartdoc.history.ledger import HistoryLedger
from smartdoc.ingestion.models import RawFile
from smartdoc.logging.logger import Log
from smartdoc.processor.orchestrator import build_orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smartdoc")
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="Analyze a document")
    analyze.add_argument("path", type=Path)
    analyze.add_argument("--export", choices=[f.value for f in ExportFormat])
    analyze.add_argument("--out", type=Path, default=Path("."))
    analyze.add_argument("--chat", action="store_true", help="Ask questions after analysis")

    history = commands.add_parser("history", help="List recent analyses")
    history.add_argument("--clear", action="store_true")
    return parser


def _print_result(result: AnalysisResult) -> None:
    stats = result.stats
    print(f"Summary: {result.summary}")
    print(
        f"Words: {stats.word_count}  Pages: {stats.page_count}  "
        f"Sentiment: {stats.sentiment_score:g}  Tone: {stats.tone}"
    )
    if result.keywords:
        print(f"Keywords: {', '.join(result.keywords)}")
    for item in result.action_items:
        print(f"- [{item.priority.value}] {item.task}")


async def _read_line(prompt: str) -> str:
    """Read one line from stdin on a daemon thread so shutdown never waits on it."""
    loop = asyncio.get_running_loop()
    future: asyncio.Future[str] = loop.create_future()

    def _resolve(line: str, exc: EOFError | None) -> None:
        if future.done():
            return
        if exc is not None:
            future.set_exception(exc)
        else:
            future.set_result(line)

    def _worker() -> None:
        try:
            line = input(prompt)
        except EOFError as exc:
            loop.call_soon_threadsafe(_resolve, "", exc)
        else:
            loop.call_soon_threadsafe(_resolve, line, None)

    threading.Thread(target=_worker, daemon=True).start()
    return await future


async def _chat_loop(chat: ChatSessionManager) -> None:
    """Read questions from stdin until a blank line or end of input."""
    try:
        while True:
            question = (await _read_line("> ")).strip()
            if not question:
                break
            try:
                print(await chat.ask(question))
            except SmartDocError as exc:
                print(f"Error: {exc}")
    except EOFError:
        Log.info("Chat closed")


async def _analyze(settings: Settings, args: argparse.Namespace) -> int:
    orchestrator, chat = build_orchestrator(settings)
    try:
        result = await orchestrator.process(RawFile.from_path(args.path))
    except (SmartDocError, OSError) as exc:
        print(f"Failed: {exc}")
        return 1

    _print_result(result)
    if args.export:
        artifact = Exporter().export(result, args.export)
        target = args.out / artifact.file_name
        target.write_bytes(artifact.data)
        print(f"Exported to {target}")
    if args.chat:
        await _chat_loop(chat)
    return 0


def _history(settings: Settings, args: argparse.Namespace) -> int:
    ledger = HistoryLedger(
        KeyValueStoreFactory.create(settings),
        key=settings.history_key,
        max_entries=settings.history_max_entries,
    )
    if args.clear:
        ledger.clear()
        return 0
    for entry in ledger.list():
        print(f"{entry.recorded_at:%Y-%m-%d %H:%M}  {entry.file_name}  {entry.summary}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> run the command."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        if args.command == "history":
            return _history(settings, args)
        return asyncio.run(_analyze(settings, args))
    except KeyboardInterrupt:
        # asyncio.run cancels the running command and re-raises Ctrl-C here.
        print("Interrupted")
        return 130
    finally:
        close_pool()


if __name__ == "__main__":
    raise SystemExit(main())
