"""Interactive chat runner: walks a script in the terminal like a respondent."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from scriptflow.cli.documents import read_document
from scriptflow.core.errors import InvalidAnswerError
from scriptflow.extraction.orders import OrderLine, build_order_line
from scriptflow.runtime.interpreter import ConversationInterpreter
from scriptflow.runtime.session import SessionState
from scriptflow.script.loader import resolve_script_with_source

AskFunction = Callable[[str], str]


@dataclass
class ChatConfig:
    """Configuration for chat runner."""

    script_path: Path
    service_name: str = "Service"
    business_name: str | None = None
    price: float = 0.0


class ChatRunner:
    """Interactive chat session runner.

    Resolves the script (falling back to the default one), asks every
    question in turn and prints the order line the answers produce.
    """

    def __init__(
        self,
        config: ChatConfig,
        console: Console | None = None,
        ask: AskFunction | None = None,
    ):
        """Initialize chat runner.

        Args:
            config: Chat configuration
            console: Console to print to
            ask: Function reading one answer for a prompt label
        """
        self.config = config
        self.console = console or Console()
        self.ask = ask or (lambda label: Prompt.ask(label, console=self.console))

    def run(self) -> OrderLine:
        """Run the session to completion and return the priced order line."""
        document = read_document(self.config.script_path)
        script, fallback = resolve_script_with_source(
            document, self.config.service_name, self.config.business_name
        )
        if fallback:
            self.console.print("[yellow]No usable script found, using the default script.[/]")

        interpreter = ConversationInterpreter(script)
        state = interpreter.start()
        while not state.complete:
            state = self._turn(interpreter, state)

        self.console.print(f"[bold blue]Bot > [/]{interpreter.current_prompt(state).text}\n")
        order_line = build_order_line(
            self.config.service_name, self.config.price, answers=state.transcript
        )
        self._print_order_line(order_line)
        return order_line

    def _turn(self, interpreter: ConversationInterpreter, state: SessionState) -> SessionState:
        prompt = interpreter.current_prompt(state)
        self.console.print(f"[bold blue]Bot > [/]{prompt.text}")

        if prompt.options:
            for index, option in enumerate(prompt.options, start=1):
                self.console.print(f"  {index}. {option.label}")
            raw = self.ask("Choice")
            answer: str | int = raw
            if re.fullmatch(r"\d+", raw.strip(), re.ASCII):
                answer = int(raw.strip()) - 1
        elif prompt.input_type == "file":
            answer = self.ask("File name")
        else:
            answer = self.ask("Answer")

        try:
            return interpreter.advance(state, answer)
        except InvalidAnswerError:
            self.console.print("[red]That is not one of the choices.[/]")
            return state

    def _print_order_line(self, order_line: OrderLine) -> None:
        table = Table(title="Order line")
        table.add_column("Item")
        table.add_column("Quantity", justify="right")
        table.add_column("Unit price", justify="right")
        table.add_column("Total", justify="right")
        table.add_row(
            order_line.line_item.name,
            str(order_line.quantity),
            f"{order_line.line_item.price:.2f}",
            f"{order_line.total_amount:.2f}",
        )
        self.console.print(table)


def run_chat_session(config: ChatConfig) -> OrderLine:
    """Run an interactive chat session."""
    return ChatRunner(config).run()
