"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["upload", "config", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#2E9CCA bold",
        "command": "#0088ff bold",
    }
)

BLUE = "\033[38;2;46;156;202m"
GREEN = "\033[32m"
RESET = "\033[0m"

LOGO = f"""{BLUE}
  ____ _                 _    ____      _
 / ___| |__  _   _ _ __ | | _|  _ \\ ___| | __ _ _   _
| |   | '_ \\| | | | '_ \\| |/ / |_) / _ \\ |/ _` | | | |
| |___| | | | |_| | | | |   <|  _ <  __/ | (_| | |_| |
 \\____|_| |_|\\__,_|_| |_|_|\\_\\_| \\_\\___|_|\\__,_|\\__, |
                                               |___/
{RESET}"""

WELCOME_TITLE = "ChunkRelay CLI - Chunked File Uploader"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "chunkrelay> "

PROGRESS_BAR_WIDTH = 30

HELP_TEXT = """Available commands:
  upload <file> [file ...]            Upload files in 5 MiB chunks through the relay
  config                              Show relay URL, chunk size and retry settings
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Chunks are sent one at a time; a failed chunk is retried up to 3 times
with 1s and 2s pauses before the upload is aborted.
Examples:
  upload backup.tar.gz
  upload "holiday video.mp4" notes.txt"""
