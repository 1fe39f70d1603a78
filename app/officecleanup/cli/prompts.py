"""Terminal implementation of the operator prompt."""

import time

import typer

from officecleanup.services.base import OperatorPrompt
from officecleanup.utils.formatting import console, print_info, print_warning


class ConsolePrompt(OperatorPrompt):
    """Asks questions and runs countdowns on the controlling terminal."""

    def confirm(self, message: str) -> bool:
        try:
            return typer.confirm(message, default=False)
        except typer.Abort:
            # Ctrl+C or EOF at the prompt
            console.print()
            return False

    def countdown(self, seconds: int, message: str) -> bool:
        print_warning(f"{message} ({seconds}s)")
        try:
            for remaining in range(seconds, 0, -1):
                console.print(f"[muted]{remaining}...[/]", end=" ")
                time.sleep(1)
        except KeyboardInterrupt:
            console.print()
            return False
        console.print()
        return True

    def notify(self, message: str) -> None:
        print_info(message)
