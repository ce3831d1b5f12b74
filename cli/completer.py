"""Custom completer for ChunkRelay CLI with file autocompletion."""

import os
from pathlib import Path
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS


class ChunkRelayCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - File path completion for the 'upload' command, relative to the working directory
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on cursor position and context.

        For the first token, completes command names.
        For 'upload' command arguments, completes paths from the filesystem.
        """
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        if command != "upload":
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        already_typed = set(tokens[1:])
        if not is_typing_new_token:
            already_typed.discard(current_word)

        yield from self._complete_paths(current_word, already_typed)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_paths(self, partial: str, exclude: set) -> Iterable[Completion]:
        """
        Complete file and directory paths.

        Directories are suggested with a trailing separator so completion can
        continue into them; hidden entries are only shown when the partial
        name starts with a dot.
        """
        directory, prefix = os.path.split(partial)
        base = Path(directory) if directory else Path.cwd()

        if not base.is_dir():
            return

        candidates = []
        for item in base.iterdir():
            if not item.name.startswith(prefix):
                continue
            if item.name.startswith(".") and not prefix.startswith("."):
                continue
            rel_path = os.path.join(directory, item.name)
            if item.is_dir():
                rel_path += os.sep
            elif rel_path in exclude:
                continue
            candidates.append(rel_path)

        for path in sorted(candidates):
            yield Completion(path, start_position=-len(partial))
