#!/usr/bin/env python3
"""
Hinglish Transliterator - terminal front end

Type Romanized Hindi (Hinglish) and get Devanagari candidates back, or use
/mic to dictate into the input buffer through a live transcription session.

Usage:
    python3 transliterator.py [--debug]

Requirements:
    - Python 3.9+
    - GEMINI_API_KEY (or API_KEY) in the environment or a .env file
    - A working microphone for /mic (PyAudio)
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from hinglish.app import TransliteratorApp
from hinglish.core.config import CONFIG_DIR, load_config, save_config
from hinglish.core.errors import CaptureError
from hinglish.core.state import STATE_DESCRIPTIONS, STATE_ICONS

__version__ = "1.0.0"

VOICE_BUSY = "  Stop voice input first (press Enter)."

HELP = """\
Commands:
  <text>            convert Hinglish text
  /convert          convert the current input again
  /mic              start or stop live voice input
  /input            show the current input
  /clear            clear the input
  /history          list recent conversions
  /select N         load history entry N
  /clear-history    delete all history
  /copy N           copy result N to the clipboard
  /theme            toggle light/dark theme
  /devices          list microphones
  /device N         use microphone N
  /help             show this help
  /quit             exit
"""


def configure_logging(argv):
    """Debug logging is opt-in via --debug or HINGLISH_DEBUG=1."""
    debug = ("--debug" in argv) or (os.environ.get("HINGLISH_DEBUG") == "1")
    if "--debug" in argv:
        argv.remove("--debug")
    log_path = CONFIG_DIR / "debug.log"
    if debug:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_path) if debug else os.devnull,
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("google_genai").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return debug


log = logging.getLogger("hinglish")


class TerminalShell:
    """Renders state changes and notifications on stdout."""

    def __init__(self, theme="light"):
        self.theme = theme

    def set_state(self, state, message=None):
        icon = STATE_ICONS.get(state, "")
        text = message or STATE_DESCRIPTIONS.get(state, state)
        print(f"{icon} {text}")

    def show_notification(self, message):
        print(f"  >> {message}")


def print_results(candidates):
    if not candidates:
        print("  (no results)")
        return
    print(f"  Hindi Translations ({len(candidates)} results)")
    for i, candidate in enumerate(candidates, 1):
        print(f"  {i}. {candidate.text}  [{candidate.label}]")


def print_history(entries):
    if not entries:
        print("  (no history yet)")
        return
    for i, entry in enumerate(entries, 1):
        preview = entry.source_text[:40] + "..." if len(entry.source_text) > 40 else entry.source_text
        first = entry.candidates[0].text if entry.candidates else ""
        print(f"  {i}. {preview} -> {first}")


def parse_index(arg, count):
    try:
        index = int(arg)
    except (TypeError, ValueError):
        return None
    if 1 <= index <= count:
        return index - 1
    return None


class TerminalApp:
    """Command loop over a TransliteratorApp."""

    def __init__(self, config, app=None, shell=None):
        self.config = config
        self.shell = shell or TerminalShell()
        self.app = app or TransliteratorApp.from_config(config, shell=self.shell)
        self.running = True

    async def handle(self, line):
        controller = self.app.controller
        state = self.app.state
        line = line.strip()

        if self.app.capture.is_active and not line:
            await self.app.capture.stop()
            print(f"  Input: {state.input_text}")
            return
        if not line:
            return

        if not line.startswith("/"):
            if self.app.capture.is_active:
                # Dictation owns the input buffer until capture stops.
                print(VOICE_BUSY)
                return
            controller.set_input(line)
            if await controller.submit():
                print_results(state.candidates)
            return

        command, _, arg = line.partition(" ")
        arg = arg.strip()

        if command in ("/quit", "/exit"):
            self.running = False
        elif command == "/help":
            print(HELP)
        elif command == "/convert":
            if not controller.can_submit:
                print("  Nothing to convert.")
                return
            if await controller.submit():
                print_results(state.candidates)
        elif command == "/mic":
            if self.app.capture.is_active:
                await self.app.capture.stop()
                print(f"  Input: {state.input_text}")
                return
            try:
                await self.app.capture.start()
            except CaptureError as exc:
                print(f"  Voice input unavailable: {exc}")
                return
            if self.app.capture.is_active:
                print("  Listening... press Enter to stop.")
        elif command == "/input":
            print(f"  Input: {state.input_text}")
        elif command == "/clear":
            controller.clear_input()
        elif command == "/history":
            print_history(self.app.ledger.all())
        elif command == "/select":
            if self.app.capture.is_active:
                print(VOICE_BUSY)
                return
            entries = self.app.ledger.all()
            index = parse_index(arg, len(entries))
            if index is None:
                print("  Usage: /select N")
                return
            controller.select_history_entry(entries[index])
            print(f"  Input: {state.input_text}")
            print_results(state.candidates)
        elif command == "/clear-history":
            controller.clear_history()
            print("  History cleared.")
        elif command == "/copy":
            index = parse_index(arg, len(state.candidates))
            if index is None:
                print("  Usage: /copy N")
                return
            controller.copy_candidate(state.candidates[index])
        elif command == "/theme":
            self.shell.theme = self.app.preferences.toggle()
            print(f"  Theme: {self.shell.theme}")
        elif command == "/devices":
            from hinglish.core.audio import MicrophoneSource

            try:
                devices = MicrophoneSource.list_input_devices()
            except Exception as exc:
                log.warning(f"Failed to list devices: {exc}")
                print("  Could not list audio devices.")
                return
            for device in devices:
                print(f"  {device['index']}: {device['name']} ({device['channels']} ch)")
        elif command == "/device":
            try:
                self.config["input_device"] = int(arg)
            except ValueError:
                print("  Usage: /device N")
                return
            if not save_config(self.config):
                print("  Could not save the config; the choice lasts until exit.")
            print(f"  Using input device {arg} from the next /mic.")
        else:
            print(f"  Unknown command {command}. Type /help.")

    async def run(self):
        try:
            self.shell.theme = self.app.start()
            print(f"Hinglish Transliterator {__version__} (theme: {self.shell.theme}). Type /help.")
            while self.running:
                try:
                    line = await asyncio.to_thread(input, "> ")
                except EOFError:
                    break
                try:
                    await self.handle(line)
                except Exception as exc:
                    log.error(f"Command failed: {exc}", exc_info=True)
                    print(f"  Error: {exc}")
        finally:
            await self.app.shutdown()


def main():
    configure_logging(sys.argv)
    load_dotenv(Path.cwd() / ".env")
    config = load_config()
    try:
        asyncio.run(TerminalApp(config).run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
