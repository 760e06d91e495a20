from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer

from conversion_trends.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from conversion_trends.io.payload import load_payload
from conversion_trends.logging import configure_logging
from conversion_trends.pipeline.export import export_series
from conversion_trends.pipeline.session import ChartSession, Intent

app = typer.Typer(no_args_is_help=True, add_completion=False)

INTENT_ARGUMENT_SEPARATOR = ":"


class ModeChoice(str, Enum):
    daily = "daily"
    weekly = "weekly"


def _load_app_config(config_path: Path | None) -> AppConfig:
    if config_path is None and DEFAULT_CONFIG_PATH.is_file():
        config_path = DEFAULT_CONFIG_PATH
    return load_config(config_path)


def _parse_intent(raw: str) -> tuple[Intent, str | None]:
    name, _, argument = raw.partition(INTENT_ARGUMENT_SEPARATOR)
    try:
        intent = Intent(name.strip())
    except ValueError:
        valid = ", ".join(item.value for item in Intent)
        raise typer.BadParameter(f"Unknown intent {name!r}. Expected one of: {valid}") from None
    if intent in (Intent.toggle_variant, Intent.set_aggregation_mode) and not argument:
        raise typer.BadParameter(
            f"Intent {intent.value!r} requires an argument, e.g. {intent.value}:X"
        )
    return intent, argument.strip() or None


@app.command()
def series(
    payload: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    mode: ModeChoice | None = typer.Option(
        None,
        help="Aggregation mode. Falls back to aggregation.default_mode in config.",
    ),
    log_level: str | None = typer.Option(None, help="Logging level, e.g. DEBUG."),
) -> None:
    """Export chart points, parsed records and a summary for a payload file."""
    configure_logging(log_level)
    cfg = _load_app_config(config)
    outputs = export_series(
        payload_path=payload,
        out_dir=out,
        config=cfg,
        mode=mode.value if mode else None,
    )
    typer.echo("Series export complete")
    for name, path in outputs.items():
        typer.echo(f"- {name}: {path}")


@app.command()
def viewport(
    payload: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    mode: ModeChoice | None = typer.Option(None),
    intent: list[str] | None = typer.Option(
        None,
        help="Intent to replay, in order. Use NAME or NAME:ARG, e.g. toggle-variant:0.",
    ),
    log_level: str | None = typer.Option(None, help="Logging level, e.g. DEBUG."),
) -> None:
    """Replay viewport and selection intents and print the resulting view."""
    configure_logging(log_level)
    cfg = _load_app_config(config)
    parsed_intents = [_parse_intent(raw) for raw in intent or []]

    session = ChartSession(load_payload(payload), cfg, mode=mode.value if mode else None)
    for resolved, argument in parsed_intents:
        try:
            session.apply_intent(resolved, argument)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    window = session.window
    low, high = session.visible_value_range()
    typer.echo(f"- mode: {session.mode}")
    typer.echo(f"- total_points: {len(session.chart_points)}")
    typer.echo(f"- window: {window.start_index}..{window.end_index}")
    typer.echo(f"- selected: {', '.join(session.selected_keys)}")
    typer.echo(f"- value_range: {low:.2f}..{high:.2f}")
    typer.echo(f"- labels: {' '.join(point.display_label for point in session.visible_points)}")


if __name__ == "__main__":
    app()
