from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

import click
from flask import Flask

from .container import Container
from .core.constants import DURATION_REFRESH_SECONDS
from .core.exceptions import DomainError, NothingToExportError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .visits.model import VisitFilters
from .visits.view import CurrentVisitsView


def _echo_cards(cards: list[dict]) -> None:
    if not cards:
        click.echo("No students are currently in the Zen Den.")
        return
    for card in cards:
        click.echo(f"{card['student_name']:<24} {card['grade']:<10} in {card['checked_in']:>8}  {card['duration']}")


def register(app: Flask, container: Container) -> None:
    @app.cli.command("init-db")
    def init_db() -> None:
        """Create the database and the visits table if missing."""
        db_config = app.config["DB_CONFIG"]
        apply_schema(db_config)
        click.echo(f"OK: schema ready (tables={len(list_tables(db_config))})")

    @app.cli.command("present")
    @click.option("--watch", is_flag=True, help="Keep refreshing durations every minute until Ctrl+C.")
    @click.option("--interval", type=float, default=DURATION_REFRESH_SECONDS, show_default=True, hidden=True)
    def present(watch: bool, interval: float) -> None:
        """List students currently checked in."""

        def on_refresh(cards: list[dict]) -> None:
            click.echo("")
            _echo_cards(cards)

        with CurrentVisitsView(container.visit_service, interval_seconds=interval, on_refresh=on_refresh) as view:
            _echo_cards(view.load())
            click.echo(f"Currently here: {view.count}")
            if not watch:
                return

            view.start_duration_updates()
            try:
                while True:
                    time.sleep(1)
            except KeyboardInterrupt:
                click.echo("Stopped.")

    @app.cli.command("checkout")
    @click.argument("visit_id")
    def checkout(visit_id: str) -> None:
        """Check out one visit by id."""
        try:
            visit = container.visit_service.check_out(visit_id)
        except DomainError as e:
            raise click.ClickException(str(e))
        click.echo(f"Checked out {visit.student_name} at {visit.time_out:%H:%M}")

    @app.cli.command("export-csv")
    @click.option("--start-date")
    @click.option("--end-date")
    @click.option("--grade", default="all", show_default=True)
    @click.option("--emotion", default="all", show_default=True)
    @click.option("--student", "student_name")
    @click.option("--output", "output_dir", type=click.Path(file_okay=False, path_type=Path), default=Path("."))
    def export_csv(
        start_date: Optional[str],
        end_date: Optional[str],
        grade: str,
        emotion: str,
        student_name: Optional[str],
        output_dir: Path,
    ) -> None:
        """Write visits matching the filters to zen-den-visits-<date>.csv."""
        try:
            filters = VisitFilters.parse(
                start_date=start_date,
                end_date=end_date,
                grade_level=grade,
                emotion=emotion,
                student_name=student_name,
            )
            export = container.export_service.export(filters)
        except (ValidationError, NothingToExportError) as e:
            raise click.ClickException(str(e))

        output_dir.mkdir(parents=True, exist_ok=True)
        target = output_dir / export.filename
        target.write_bytes(export.to_bytes())
        click.echo(f"Wrote {export.row_count} visits to {target}")
