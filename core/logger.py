from rich.console import Console
from rich.theme import Theme

class Logger:
    """Line writer for the checker's diagnostics.

    Every message is printed verbatim as a single line: markup, emoji codes,
    highlighting and wrapping are disabled so entry names pass through as is.
    """

    def __init__(self, stdout=None, stderr=None):
        theme = Theme({
            "alert": "bold red",
            "error": "red",
            "info": "blue"
        })
        options = dict(theme=theme, markup=False, emoji=False, highlight=False, soft_wrap=True)
        self.console = Console(file=stdout, **options)
        self.error_console = Console(file=stderr, stderr=stderr is None, **options)

    def info(self, message):
        self.console.print(message, style="info")

    def alert(self, message):
        self.error_console.print(message, style="alert")

    def error(self, message):
        self.error_console.print(message, style="error")
