"""Stundenplan-Editor — Haupt-CLI.

Verwendung:
  python main.py config init              Standard-Konfiguration anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py demo                     Demo-Stundenplan als JSON anlegen
  python main.py demo --random            Zufälligen Stundenplan anlegen
  python main.py show                     Wochenraster anzeigen
  python main.py conflicts                Konfliktprüfung
  python main.py check                    Mehrfach belegte Rasterzellen
  python main.py add ...                  Termin anlegen
  python main.py update <id> ...          Termin ändern
  python main.py move <id> <tag> <zeit>   Termin verschieben
  python main.py delete <id>              Termin löschen
  python main.py generate                 Stundenplan (simuliert) generieren
  python main.py stats                    Kennzahlen anzeigen
  python main.py diff <a.json> <b.json>   Zwei Stundenpläne vergleichen
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfad für den gespeicherten Stundenplan
DEFAULT_DATA_JSON = Path("output/timetable.json")


def _setup_logging(verbose: bool) -> None:
    """Bei --verbose: INFO-Logs über Rich ausgeben."""
    if not verbose:
        return
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_config(ctx: click.Context):
    from config.manager import ConfigManager
    try:
        return ConfigManager(ctx.obj["config_path"]).load_or_default()
    except ValueError as e:
        console.print(f"[red bold]Konfiguration ungültig:[/red bold]\n{e}")
        sys.exit(1)


def _load_data_or_abort(ctx: click.Context):
    """Lädt den Stundenplan oder bricht mit Fehlermeldung ab."""
    from models.timetable_data import TimetableData
    path = ctx.obj["data_path"]
    if not path.exists():
        console.print(
            f"[red]Keine Datendatei gefunden: {path}[/red]\n"
            "Verwenden Sie zunächst [bold]python main.py demo[/bold]."
        )
        sys.exit(1)
    return TimetableData.load_json(path)


def _parse_day(value: str, day_names: list[str]) -> int:
    """Wochentag als Zahl (0..6), Kurzname ("Mo") oder Name ("Montag")."""
    from config.defaults import DAY_SHORT_NAMES
    if value.isdigit():
        day = int(value)
        if not 0 <= day < len(day_names):
            raise click.BadParameter(f"Wochentag {day} liegt außerhalb 0..{len(day_names) - 1}")
        return day
    lowered = value.strip().lower()
    for idx, (name, short) in enumerate(zip(day_names, DAY_SHORT_NAMES)):
        if lowered in (name.lower(), short.lower()):
            return idx
    raise click.BadParameter(f"Unbekannter Wochentag: {value}")


def _default_end_time(grid, start_time: str) -> str:
    """Ende ohne --end: nächste Stundenmarke bzw. Ersatz-Endzeit."""
    if start_time not in grid.time_marks:
        raise click.BadParameter(
            "Startzeit ist keine Stundenmarke, bitte --end angeben.",
            param_hint="--end",
        )
    return grid.next_mark(start_time) or grid.fallback_end_time


def _editor_for(data, config):
    from timetable.editor import TimetableEditor
    return TimetableEditor(data.registry, data.slots, config.grid)


def _save_result(ctx: click.Context, data, editor, result, success_msg: str) -> None:
    """Speichert nach Erfolg; bei Ablehnung Meldung und Exit-Code 1."""
    from timetable.errors import ErrorKind

    if not result.ok:
        err = result.error
        title = "Nicht möglich" if err.kind is ErrorKind.CELL_OCCUPIED else "Fehler"
        console.print(f"[red bold]{title}:[/red bold] {err.message}")
        sys.exit(1)
    data = data.model_copy(update={"slots": editor.slots})
    data.save_json(ctx.obj["data_path"])
    console.print(f"[green]✓[/green] {success_msg}")
    slot = result.slot
    if slot is not None and slot.conflicts:
        for info in slot.conflicts:
            color = "red" if info.severity == "error" else "yellow"
            console.print(f"  [{color}]⚠ {info.message}[/{color}]")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
@click.pass_context
def config_init(ctx: click.Context, force: bool):
    """Legt die Standard-Konfiguration als YAML an."""
    from config.defaults import default_editor_config
    from config.manager import ConfigManager

    mgr = ConfigManager(ctx.obj["config_path"])
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    path = mgr.save(default_editor_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config(ctx)
    grid = config.grid

    console.print(Panel(
        f"[bold]{config.institution_name}[/bold]",
        title="Editor-Konfiguration",
        border_style="cyan",
    ))

    table = Table(title="Stundenkatalog", box=box.ROUNDED)
    table.add_column("Nr.")
    table.add_column("Beginn")
    table.add_column("Ende")
    for i, mark in enumerate(grid.time_marks, 1):
        table.add_row(str(i), mark, grid.next_mark(mark) or grid.fallback_end_time)
    console.print(table)

    working = ", ".join(grid.day_names[d] for d in grid.working_days)
    gen = config.generation
    console.print(f"\n[bold]Unterrichtstage:[/bold] {working}")
    console.print(
        f"[bold]Generierung:[/bold] Wartezeit {gen.delay_seconds}s | "
        f"Erfolgsquote {gen.success_rate:.0%} | Seed {gen.seed}"
    )


# ─── DEMO ─────────────────────────────────────────────────────────────────────

@click.command("demo")
@click.option("--random", "use_random", is_flag=True, default=False,
              help="Zufälligen Datensatz statt des festen Demo-Plans erzeugen.")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.pass_context
def cmd_demo(ctx: click.Context, use_random: bool, seed: int):
    """Legt einen Demo-Stundenplan an."""
    from data.fake_data import FakeDataGenerator, demo_timetable
    from timetable.conflicts import compute_conflicts

    config = _load_config(ctx)
    if use_random:
        gen = FakeDataGenerator(seed=seed, config=config.grid)
        data = gen.generate()
        gen.print_summary(data)
    else:
        data = demo_timetable()

    data = data.model_copy(update={"slots": compute_conflicts(data.slots, data.registry)})
    data.save_json(ctx.obj["data_path"])
    console.print(f"\n[dim]{data.summary()}[/dim]")
    console.print(f"[green]✓[/green] JSON gespeichert: {ctx.obj['data_path']}")


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.option("--role", type=click.Choice(["admin", "teacher", "student"]),
              default="admin", help="Sicht der Rolle.")
@click.option("--user", "user_id", default=None, help="ID der Lehrkraft / Person.")
@click.option("--teacher", "teacher_id", default=None, help="Filter: Lehrkraft-ID.")
@click.option("--classroom", "classroom_id", default=None, help="Filter: Raum-ID.")
@click.option("--group", default=None, help="Filter: Gruppe.")
@click.option("--all-days", is_flag=True, default=False,
              help="Alle 7 Tage statt nur Unterrichtstage.")
@click.pass_context
def cmd_show(ctx, role, user_id, teacher_id, classroom_id, group, all_days):
    """Zeigt das Wochenraster an."""
    from analysis.views import UserRole, filter_slots, scoped_slots
    from export.tui_renderer import build_grid_table

    config = _load_config(ctx)
    data = _load_data_or_abort(ctx)
    try:
        slots = scoped_slots(data.slots, UserRole(role), user_id, data.registry)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    slots = filter_slots(slots, teacher_id, classroom_id, group)

    if not slots:
        console.print("[dim]Keine Termine vorhanden.[/dim]")
        return

    days = None if all_days else config.grid.working_days
    console.print(build_grid_table(slots, config.grid, title=data.name, days=days))


# ─── CONFLICTS / CHECK ────────────────────────────────────────────────────────

@click.command("conflicts")
@click.pass_context
def cmd_conflicts(ctx: click.Context):
    """Führt die Konfliktprüfung durch."""
    from timetable.conflicts import detect_conflicts

    data = _load_data_or_abort(ctx)
    report = detect_conflicts(data.slots, data.registry)
    report.print_rich()
    sys.exit(0 if report.is_clean else 1)


@click.command("check")
@click.pass_context
def cmd_check(ctx: click.Context):
    """Listet Rasterzellen, die mehrere Termine enthalten."""
    from timetable.grid import find_cell_collisions

    config = _load_config(ctx)
    data = _load_data_or_abort(ctx)
    collisions = find_cell_collisions(data.slots)
    if not collisions:
        console.print("[green]✓[/green] Jede Rasterzelle ist höchstens einfach belegt.")
        return
    for (day, time), ids in sorted(collisions.items()):
        console.print(
            f"[yellow]•[/yellow] {config.grid.day_names[day]} {time}: {', '.join(ids)}"
        )
    sys.exit(1)


# ─── ADD / UPDATE / MOVE / DELETE ─────────────────────────────────────────────

@click.command("add")
@click.option("--course", "course_id", required=True, help="Veranstaltungs-ID.")
@click.option("--teacher", "teacher_id", required=True, help="Lehrkraft-ID.")
@click.option("--classroom", "classroom_id", required=True, help="Raum-ID.")
@click.option("--day", required=True, help="Wochentag (0..6, Mo, Montag).")
@click.option("--start", "start_time", required=True, help="Beginn HH:MM.")
@click.option("--end", "end_time", default=None, help="Ende HH:MM (Standard: nächste Marke).")
@click.option("--group", "groups", multiple=True, help="Gruppe (mehrfach möglich).")
@click.pass_context
def cmd_add(ctx, course_id, teacher_id, classroom_id, day, start_time, end_time, groups):
    """Legt einen neuen Termin an."""
    from models.timetable_slot import SlotDraft

    config = _load_config(ctx)
    data = _load_data_or_abort(ctx)
    grid = config.grid
    if end_time is None:
        end_time = _default_end_time(grid, start_time)
    draft = SlotDraft(
        course_id=course_id, teacher_id=teacher_id, classroom_id=classroom_id,
        day_of_week=_parse_day(day, grid.day_names),
        start_time=start_time, end_time=end_time, student_groups=list(groups),
    )
    editor = _editor_for(data, config)
    result = editor.add(draft)
    _save_result(ctx, data, editor, result, f"Termin angelegt: {result.slot_id}")


@click.command("update")
@click.argument("slot_id")
@click.option("--course", "course_id", default=None, help="Neue Veranstaltungs-ID.")
@click.option("--teacher", "teacher_id", default=None, help="Neue Lehrkraft-ID.")
@click.option("--classroom", "classroom_id", default=None, help="Neue Raum-ID.")
@click.option("--day", default=None, help="Neuer Wochentag.")
@click.option("--start", "start_time", default=None, help="Neuer Beginn HH:MM.")
@click.option("--end", "end_time", default=None, help="Neues Ende HH:MM.")
@click.option("--group", "groups", multiple=True, help="Gruppen ersetzen.")
@click.pass_context
def cmd_update(ctx, slot_id, course_id, teacher_id, classroom_id,
               day, start_time, end_time, groups):
    """Ändert einen bestehenden Termin."""
    config = _load_config(ctx)
    data = _load_data_or_abort(ctx)
    editor = _editor_for(data, config)
    current = editor.get(slot_id)
    if current is None:
        console.print(f"[red bold]Fehler:[/red bold] Termin '{slot_id}' nicht gefunden")
        sys.exit(1)

    changes: dict = {}
    if course_id is not None:
        changes["course_id"] = course_id
    if teacher_id is not None:
        changes["teacher_id"] = teacher_id
    if classroom_id is not None:
        changes["classroom_id"] = classroom_id
    if day is not None:
        changes["day_of_week"] = _parse_day(day, config.grid.day_names)
    if start_time is not None:
        changes["start_time"] = start_time
        if end_time is None:
            end_time = _default_end_time(config.grid, start_time)
    if end_time is not None:
        changes["end_time"] = end_time
    if groups:
        changes["student_groups"] = list(groups)

    result = editor.update(current.model_copy(update=changes))
    _save_result(ctx, data, editor, result, f"Termin geändert: {slot_id}")


@click.command("move")
@click.argument("slot_id")
@click.argument("day")
@click.argument("time")
@click.pass_context
def cmd_move(ctx, slot_id: str, day: str, time: str):
    """Verschiebt einen Termin in eine freie Rasterzelle."""
    config = _load_config(ctx)
    data = _load_data_or_abort(ctx)
    day_idx = _parse_day(day, config.grid.day_names)
    editor = _editor_for(data, config)
    result = editor.move(slot_id, day_idx, time)
    _save_result(
        ctx, data, editor, result,
        f"Verschoben nach {config.grid.day_names[day_idx]} {time}",
    )


@click.command("delete")
@click.argument("slot_id")
@click.pass_context
def cmd_delete(ctx, slot_id: str):
    """Löscht einen Termin."""
    config = _load_config(ctx)
    data = _load_data_or_abort(ctx)
    editor = _editor_for(data, config)
    result = editor.delete(slot_id)
    _save_result(ctx, data, editor, result, f"Termin gelöscht: {slot_id}")


# ─── GENERATE / STATS ─────────────────────────────────────────────────────────

def _print_stats(stats) -> None:
    table = Table(title="Kennzahlen", box=box.ROUNDED)
    table.add_column("Kennzahl", style="bold")
    table.add_column("Wert", justify="right")
    table.add_row("Veranstaltungen", str(stats.total_courses))
    table.add_row("Lehrkräfte", str(stats.total_teachers))
    table.add_row("Räume", str(stats.total_classrooms))
    table.add_row("Studierende", str(stats.total_students))
    table.add_row("Auslastung", f"{stats.utilization_rate:.1f}%")
    color = "red" if stats.conflict_count else "green"
    table.add_row("Konflikte", f"[{color}]{stats.conflict_count}[/{color}]")
    console.print(table)


@click.command("generate")
@click.option("--seed", default=None, type=int, help="Zufalls-Seed (überschreibt Config).")
@click.option("--delay", default=None, type=float, help="Wartezeit in Sekunden.")
@click.pass_context
def cmd_generate(ctx: click.Context, seed: Optional[int], delay: Optional[float]):
    """Generiert einen Stundenplan (Simulation) und speichert ihn."""
    from timetable.generation import TimetableGenerator

    config = _load_config(ctx)
    data = _load_data_or_abort(ctx)
    gen_cfg = config.generation
    if seed is not None:
        gen_cfg = gen_cfg.model_copy(update={"seed": seed})
    if delay is not None:
        gen_cfg = gen_cfg.model_copy(update={"delay_seconds": delay})
    config = config.model_copy(update={"generation": gen_cfg})

    with console.status("[bold]Stundenplan wird generiert...[/bold]"):
        result = TimetableGenerator(config).generate(data.registry)

    if not result.success:
        console.print(f"[red bold]Generierung fehlgeschlagen:[/red bold] {result.reason}")
        sys.exit(1)

    data = data.model_copy(update={"slots": result.slots})
    data.save_json(ctx.obj["data_path"])
    console.print(
        f"[green]✓[/green] Stundenplan generiert ({len(result.slots)} Termine, "
        f"{result.elapsed_seconds:.1f}s)"
    )
    _print_stats(result.stats)


@click.command("stats")
@click.pass_context
def cmd_stats(ctx: click.Context):
    """Zeigt Kennzahlen des aktuellen Stundenplans."""
    from timetable.generation import compute_stats

    config = _load_config(ctx)
    data = _load_data_or_abort(ctx)
    _print_stats(compute_stats(data.registry, data.slots, config.grid))


# ─── DIFF ─────────────────────────────────────────────────────────────────────

@click.command("diff")
@click.argument("old", type=click.Path(exists=True, path_type=Path))
@click.argument("new", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, default=False, help="Ausgabe als JSON.")
def cmd_diff(old: Path, new: Path, as_json: bool):
    """Vergleicht zwei gespeicherte Stundenpläne."""
    from analysis.diff import diff_timetables
    from models.timetable_data import TimetableData

    diff = diff_timetables(TimetableData.load_json(old), TimetableData.load_json(new))
    if as_json:
        click.echo(diff.to_json())
        return
    if diff.is_empty():
        console.print("[dim]Keine Unterschiede.[/dim]")
        return

    table = Table(title="Änderungen", box=box.ROUNDED, show_lines=True)
    table.add_column("Art", style="bold")
    table.add_column("Termin")
    table.add_column("Details")
    for slot_id in diff.slots_added:
        table.add_row("[green]neu[/green]", slot_id, "")
    for slot_id in diff.slots_removed:
        table.add_row("[red]entfernt[/red]", slot_id, "")
    for change in diff.slots_moved:
        table.add_row("verschoben", f"{change.slot_id} ({change.course_code})",
                      "\n".join(change.changes))
    for change in diff.slots_reassigned:
        table.add_row("umbesetzt", f"{change.slot_id} ({change.course_code})",
                      "\n".join(change.changes))
    console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--data", "data_path", default=str(DEFAULT_DATA_JSON),
              type=click.Path(path_type=Path), help="Pfad zur Stundenplan-JSON.")
@click.option("--config", "config_path", default=None,
              type=click.Path(path_type=Path), help="Pfad zur YAML-Konfiguration.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliche Logs.")
@click.pass_context
def cli(ctx: click.Context, data_path: Path, config_path: Optional[Path], verbose: bool):
    """Stundenplan-Editor: Wochenraster, Konfliktprüfung und Bearbeitung.

    Starten Sie mit: python main.py demo
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["data_path"] = Path(data_path)
    ctx.obj["config_path"] = config_path


def main():
    """Einstiegspunkt."""
    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_demo)
cli.add_command(cmd_show)
cli.add_command(cmd_conflicts)
cli.add_command(cmd_check)
cli.add_command(cmd_add)
cli.add_command(cmd_update)
cli.add_command(cmd_move)
cli.add_command(cmd_delete)
cli.add_command(cmd_generate)
cli.add_command(cmd_stats)
cli.add_command(cmd_diff)


if __name__ == "__main__":
    main()
