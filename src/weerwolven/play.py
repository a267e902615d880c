#!/usr/bin/env python
"""Playable Weerwolven game, moderated at the console or by a seeded AI.

Usage:
    weerwolven                              # Moderate a classic 8-player game
    weerwolven --names Ann Bob Cas Dirk     # Plain civilians vs werewolves
    weerwolven --ai --seed 42               # Watch a reproducible AI game
    weerwolven --ai --games 100             # Stress test with the validator
"""

import argparse
import asyncio
import logging
import random
import sys
from collections import Counter
from typing import Optional, Sequence

# Enable Windows console colors
if sys.platform == "win32":
    import colorama
    colorama.init()

from rich.console import Console
from rich.panel import Panel

from weerwolven.ai.stub_ai import create_stub_selector
from weerwolven.engine import CollectingValidator, WeerwolvenGame
from weerwolven.engine.validator import GameValidator
from weerwolven.handlers.base import PlayerSelector
from weerwolven.models import (
    CLASSIC_8_PLAYER_CONFIG,
    GameConfig,
    GameMode,
    Player,
    assign_roles,
    civilians_wolves,
    create_roles_from_config,
)
from weerwolven.ui.console import ConsoleAnnouncer, ConsoleSelector

logger = logging.getLogger("weerwolven")

DEFAULT_NAMES = ["Anna", "Bram", "Cees", "Daan", "Eva", "Fleur", "Gijs", "Hanna"]


def create_players(
    seed: Optional[int],
    names: Optional[Sequence[str]] = None,
    config: Optional[GameConfig] = None,
) -> dict[str, Player]:
    """Deal shuffled roles.

    Without names the classic 8-player roster is used. With names, plain
    civilians and werewolves are dealt, one wolf per wolves_per_player.
    """
    rng = random.Random(seed)
    if not names:
        return assign_roles(DEFAULT_NAMES, create_roles_from_config(CLASSIC_8_PLAYER_CONFIG, rng=rng))

    config = config or GameConfig()
    roles = civilians_wolves(len(names), wolves=config.wolf_count, rng=rng)
    return assign_roles(names, roles)


async def run_game(
    players: dict[str, Player],
    selector: PlayerSelector,
    config: GameConfig,
    validator: Optional[GameValidator] = None,
    console: Optional[Console] = None,
    show_secrets: bool = False,
    log_file: Optional[str] = None,
) -> list[str]:
    """Play one game with announcements printed to the console.

    Returns:
        Names of the winners.
    """
    console = console or Console()
    announcer = ConsoleAnnouncer(
        console=console,
        roles_secret={name: p.role.value for name, p in players.items()},
        show_secrets=show_secrets,
    )

    game = WeerwolvenGame(
        players=players,
        selector=selector,
        config=config,
        validator=validator,
        event_callback=announcer,
    )
    event_log, winners = await game.run()

    console.print(Panel(
        f"[bold]Game Over[/bold]\n\n"
        f"Winners: {', '.join(winners) if winners else 'nobody'}",
        title="Result"
    ))

    if log_file:
        try:
            event_log.save_to_file(log_file)
            console.print(f"Event log saved to {log_file}")
        except OSError as e:
            console.print(f"[red]Failed to save log: {e}[/red]")

    return winners


def run_stress_test(
    num_games: int,
    config: GameConfig,
    seed_base: Optional[int] = None,
    names: Optional[Sequence[str]] = None,
) -> None:
    """Run many AI games with the validator and report the results."""
    console = Console()

    if seed_base is None:
        seed_base = random.randint(1, 1000000)

    console.print(f"\n[bold]Running stress test: {num_games} games...[/bold]")
    console.print(f"Seed base: {seed_base}")

    async def run_one(seed: int) -> tuple[str, list]:
        validator = CollectingValidator()
        game = WeerwolvenGame(
            players=create_players(seed, names=names, config=config),
            selector=create_stub_selector(seed),
            config=config,
            validator=validator,
        )
        await game.run()
        if game.win_civilians() and game.win_wolves():
            outcome = "both"
        elif game.win_civilians():
            outcome = "civilians"
        elif game.win_wolves():
            outcome = "wolves"
        else:
            outcome = "none"
        return outcome, validator.get_violations()

    async def run_all():
        return await asyncio.gather(
            *(run_one(seed_base + i) for i in range(num_games)),
            return_exceptions=True,
        )

    results = asyncio.run(run_all())

    outcomes: Counter = Counter()
    violations: Counter = Counter()
    errors = []
    for result in results:
        if isinstance(result, Exception):
            errors.append(result)
            continue
        outcome, found = result
        outcomes[outcome] += 1
        violations.update(v.rule_id for v in found)

    console.print("=" * 60)
    console.print(f"Games run: {num_games}, errors: {len(errors)}")
    console.print("\nOutcomes:")
    for outcome, count in sorted(outcomes.items()):
        console.print(f"  {outcome}: {count} ({count / num_games * 100:.1f}%)")
    console.print("\nViolations:")
    if violations:
        for rule_id, count in sorted(violations.items()):
            console.print(f"  {rule_id}: {count}")
    else:
        console.print("  None")
    for error in errors[:5]:
        console.print(f"[red]  {type(error).__name__}: {error}[/red]")
    console.print("=" * 60)


def main(argv: Optional[Sequence[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Weerwolven - a social deduction game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--names",
        nargs="+",
        default=None,
        help="Player names; deals civilians and werewolves only"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible games"
    )
    parser.add_argument(
        "--ai",
        action="store_true",
        help="Let a seeded AI make every choice and show all secrets"
    )
    parser.add_argument(
        "--mode",
        choices=[m.value.lower() for m in GameMode],
        default=None,
        help="How night actions are collected (default: sequential)"
    )
    parser.add_argument(
        "--max-days",
        type=int,
        default=None,
        help="Stop after this many days without a winner (default: 20)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file with game settings"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=None,
        help="Run N AI games with the validator (stress test mode)"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default="game_log.yaml",
        help="File to save the event log (default: game_log.yaml, use '' to disable)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine decisions"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    config = GameConfig.load(args.config) if args.config else GameConfig()
    overrides = {}
    if args.mode:
        overrides["mode"] = GameMode(args.mode.upper())
    if args.max_days is not None:
        overrides["max_days"] = args.max_days
    if overrides:
        config = GameConfig.model_validate({**config.model_dump(), **overrides})

    if args.games:
        run_stress_test(args.games, config, seed_base=args.seed, names=args.names)
        return

    seed = args.seed if args.seed is not None else random.randint(1, 1000000)
    players = create_players(seed, names=args.names, config=config)
    console = Console()

    if args.ai:
        console.print(f"\n[bold cyan]Watching AI game (seed {seed})...[/bold cyan]\n")
        selector: PlayerSelector = create_stub_selector(seed)
    else:
        console.print("\n[bold]You are the moderator. Choose for every role in turn.[/bold]\n")
        selector = ConsoleSelector(console)

    try:
        asyncio.run(run_game(
            players,
            selector,
            config,
            console=console,
            show_secrets=args.ai,
            log_file=args.log_file or None,
        ))
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Game aborted.[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
