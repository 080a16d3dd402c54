from typing import Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dungeon_text.domain.models.text_line import TextLine
from dungeon_text.domain.models.text_observation import TextObservation
from dungeon_text.domain.models.text_trigger import TextTriggerType


_BORDER_AMBIENT = "cyan"
_BORDER_TRIGGERED = "yellow"
_BORDER_SILENT = "bright_black"


def _observation_caption(observation: TextObservation) -> str:
    return (
        f"mental {observation.mental_state} | steps {observation.steps_since_text} | "
        f"open {observation.open_ratio_recent:.2f} | wall {observation.wall_contact_recent:.2f} | "
        f"new {observation.new_tiles_recent} | back {observation.backtrack_recent:.2f} | "
        f"depth {observation.depth_norm:.2f}"
    )


def render_turn(
    console: Console,
    turn_no: int,
    observation: TextObservation,
    line: TextLine | None,
    trigger_type: TextTriggerType | None = None,
    *,
    source: str | None = None,
) -> None:
    if source is None and line is not None:
        source = "triggered" if trigger_type is not None else "ambient"
    fell_back = trigger_type is not None and source == "ambient"

    trigger_label = trigger_type.value.replace("_", " ") if trigger_type is not None else "ambient"
    if fell_back:
        trigger_label = f"{trigger_label} -> ambient"
    title = f"[bold yellow]Turn {int(turn_no)}[/bold yellow] [dim]({trigger_label})[/dim]"
    subtitle = f"[dim]{_observation_caption(observation)}[/dim]"

    if line is None:
        body = Text("...", style="dim italic")
        border = _BORDER_SILENT
    else:
        # Authored text is shown verbatim, never parsed as rich markup.
        body = Text(line.text)
        border = _BORDER_TRIGGERED if source == "triggered" else _BORDER_AMBIENT

    console.print(Panel(body, title=title, subtitle=subtitle, border_style=border, expand=True))


def render_cooldowns(console: Console, cooldowns: Mapping[str, int]) -> None:
    table = Table(title="Cooldowns", show_header=True, header_style="bold cyan")
    table.add_column("Line")
    table.add_column("Turns left", justify="right")
    if not cooldowns:
        table.add_row("[dim]none[/dim]", "")
    for line_id in sorted(cooldowns):
        table.add_row(line_id, str(cooldowns[line_id]))
    console.print(table)
