"""Console moderator for human-run games.

Uses rich to show the candidates for every choice and to announce events.
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from weerwolven.events.event_formatter import EventFormatter
from weerwolven.events.game_events import GameEvent, GameOver, NightAction


class ConsoleSelector:
    """The moderator types each choice at the console.

    Answers may be a number from the table or a player name. Anything else
    is passed through unchanged; the game will ask again.
    """

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    async def select(
        self,
        prompt: str,
        candidates: Sequence[str],
        hint: Optional[str] = None,
    ) -> str:
        if hint:
            self._console.print(f"[red]{hint}[/red]")

        table = Table(show_header=True)
        table.add_column("#", width=4)
        table.add_column("Player", justify="left")
        for i, name in enumerate(candidates):
            table.add_row(f"[{i + 1}]", name)
        self._console.print(Panel(table, title=prompt))

        try:
            answer = Prompt.ask(f"Choice (1-{len(candidates)} or name)", console=self._console)
        except (KeyboardInterrupt, EOFError):
            self._console.print("\n[yellow]Input closed.[/yellow]")
            raise

        if answer.strip().isdigit():
            index = int(answer.strip()) - 1
            if 0 <= index < len(candidates):
                return candidates[index]
        return answer


class ConsoleAnnouncer:
    """Announcement hook printing events as they happen.

    Night actions are secret and only shown when show_secrets is set.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        roles_secret: Optional[dict[str, str]] = None,
        show_secrets: bool = False,
    ):
        self._console = console or Console()
        self._show_secrets = show_secrets
        self._formatter = EventFormatter(roles_secret if show_secrets else None)

    def __call__(self, event: GameEvent) -> None:
        if isinstance(event, NightAction) and not self._show_secrets:
            return

        text = self._formatter.format(event)
        if isinstance(event, GameOver):
            self._console.print(Panel(f"[bold]{text}[/bold]", title="Game Over"))
        elif text.strip():
            self._console.print(text)
