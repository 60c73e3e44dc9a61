"""CLI command for playing against the computer opponent."""

from __future__ import annotations

import logging

import click

from crazyeights.playtest.session import PlaytestSession, SessionConfig

logger = logging.getLogger(__name__)


@click.command()
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option(
    "--delay",
    type=click.FloatRange(min=0),
    default=1.5,
    show_default=True,
    help="Seconds the AI waits before moving",
)
@click.option("--debug", is_flag=True, help="Show AI's hand")
@click.option("--show-rules/--no-rules", default=True, help="Display rules at start")
@click.option(
    "--max-skipped-turns",
    type=click.IntRange(min=1),
    default=4,
    show_default=True,
    help="Skipped turns on an empty deck before the game is paused",
)
@click.option("--color/--no-color", default=True, help="Color red suits")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    seed: int | None,
    delay: float,
    debug: bool,
    show_rules: bool,
    max_skipped_turns: int,
    color: bool,
    verbose: bool,
):
    """Play Crazy Eights against an AI opponent."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    config = SessionConfig(
        opponent_delay=delay,
        debug=debug,
        seed=seed,
        show_rules=show_rules,
        max_skipped_turns=max_skipped_turns,
        color=color,
    )

    session = PlaytestSession(config)

    try:
        result = session.run(output_fn=click.echo)
    except KeyboardInterrupt:
        click.echo("\n\nGame interrupted.")
        result = None

    if result:
        logger.debug(f"Session result: {result}")
        click.echo(f"\nGames played: {result.games_played} (seed {result.seed})")

    click.echo("\nThanks for playing!")


if __name__ == "__main__":
    main()
