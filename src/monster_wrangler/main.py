"""
Monster Wrangler interactive shell.

Loads the catalog, builds the affinity graph once, and lets a game master
narrow the catalog with filters, pick seeds, and generate groups.

Usage:
    monster-wrangler --catalog path/to/monsters.json --group-size 5
"""

import argparse
import logging
import random
import sys
from collections.abc import Callable
from pathlib import Path

from pydantic import ValidationError

from .choices import MAX_RANDOMNESS, MIN_RANDOMNESS, Choices
from .config import WranglerConfig, load_config
from .exceptions import CatalogError, WranglerError
from .loader import load_catalog, load_default_catalog
from .models import Monster
from .wrangler import MonsterWrangler

logger = logging.getLogger("monster-wrangler")

MENU = (
    "\nChoose: [1:Level, 2:Biome, 3:Tag, 4:Search, 5:List, 6:Random, 7:Walk Group, "
    "8:Clear Seed, u:Undo, g:Generate Group, q:Quit] (current: {state}):"
)


class WranglerRepl:
    """Menu loop driving a ``MonsterWrangler``.

    Each refinement pushes the previous ``Choices`` onto a history stack so
    ``u`` can step back.
    """

    def __init__(
        self,
        wrangler: MonsterWrangler,
        config: WranglerConfig,
        input_fn: Callable[[], str] = input,
        output_fn: Callable[[str], None] = print,
        rng: random.Random | None = None,
    ) -> None:
        self.wrangler = wrangler
        self.config = config
        self.input = input_fn
        self.output = output_fn
        self.rng = rng
        self.choices: Choices = wrangler.choices()
        self.history: list[Choices] = []

    def _ask(self, prompt: str) -> str:
        self.output(prompt)
        return self.input().strip()

    def _push(self, choices: Choices) -> None:
        self.history.append(self.choices)
        self.choices = choices

    def _undo(self) -> None:
        if not self.history:
            self.output("Nothing to undo")
            return
        self.choices = self.history.pop()

    def _print_monsters(self, monsters: list[Monster], numbered: bool = False) -> None:
        for i, monster in enumerate(monsters, start=1):
            prefix = f"{i}. " if numbered else ""
            self.output(f"{prefix}{monster.detailed_summary()}")

    def _log_links(self, chain: list[Monster]) -> None:
        for prev, cur in zip(chain, chain[1:]):
            breakdown = self.wrangler.graph.strength(prev, cur)
            logger.debug(f"{prev.name} -> {cur.name}: {breakdown.describe()}")

    def run(self) -> None:
        """Loop until the user quits or input runs out."""
        try:
            while self.choose():
                self.generate()
        except EOFError:
            pass
        self.output("Goodbye!")

    def generate(self) -> None:
        randomness = self.read_randomness()
        self._push(self.choices.with_randomness(randomness))
        self.output(f"Choices: {self.choices.state()}, Randomness: {randomness}")
        try:
            group = self.wrangler.cluster(self.choices, self.config.group_size, rng=self.rng)
        except WranglerError as e:
            self.output(f"⚠️ {e}")
            return
        self._print_monsters(group)

    def choose(self) -> bool:
        """Handle menu commands until a group is requested.

        Returns:
            True to generate a group, False to quit.
        """
        while True:
            command = self._ask(MENU.format(state=self.choices.state())).lower()
            if command in ("", "g"):
                return True
            if command == "q":
                return False

            try:
                self._dispatch(command)
            except WranglerError as e:
                self.output(f"⚠️ {e}")

    def _dispatch(self, command: str) -> None:
        if command == "1":
            self._push(self.choices.with_level(self.choose_level()))
        elif command == "2":
            self._push(self.choices.with_biome(self.choose_biome()))
        elif command == "3":
            self._push(self.choices.with_tag(self.choose_tag()))
        elif command == "4":
            seed = self.search()
            if seed is not None:
                self._push(self.choices.with_seed_monster(seed))
        elif command == "5":
            self._print_monsters(self.wrangler.list(self.choices))
        elif command == "6":
            self.random_monster()
        elif command == "7":
            chain = self.wrangler.walk(
                self.choices,
                self.config.walk_length,
                rng=self.rng,
                min_distance=self.config.walk_min_distance,
                max_distance=self.config.walk_max_distance,
            )
            self._log_links(chain)
            self._print_monsters(chain)
        elif command == "8":
            self._push(self.choices.with_seed_monster(None))
        elif command == "u":
            self._undo()
        else:
            self.output("Invalid choice")

    def read_randomness(self) -> int:
        default = self.config.default_randomness
        while True:
            raw = self._ask(f"Randomness? [{MIN_RANDOMNESS}-{MAX_RANDOMNESS}] (default {default}):")
            if not raw:
                return default
            try:
                randomness = int(raw)
            except ValueError:
                randomness = 0
            if MIN_RANDOMNESS <= randomness <= MAX_RANDOMNESS:
                return randomness
            self.output("Invalid randomness")

    def choose_level(self) -> int | None:
        levels = self.wrangler.levels(self.choices)
        self.output(f"dungeon level? (default any) {levels}:")
        while True:
            raw = self.input().strip()
            if not raw:
                return None
            try:
                level = int(raw)
            except ValueError:
                self.output("Level must be a number")
                continue
            if level in levels:
                return level
            self.output("Please choose a valid level (or none)")

    def _choose_value(self, label: str, values: list[str]) -> str | None:
        self.output(f"{label}? (default any) {values}:")
        while True:
            raw = self.input().strip()
            if not raw:
                return None
            if raw in values:
                return raw
            self.output(f"Please choose a valid {label} (or none)")

    def choose_biome(self) -> str | None:
        return self._choose_value("biome", self.wrangler.biomes(self.choices))

    def choose_tag(self) -> str | None:
        return self._choose_value("tag", self.wrangler.tags(self.choices))

    def search(self) -> Monster | None:
        term = self._ask("Search:")
        results = self.wrangler.search(self.choices, term)
        if not results:
            self.output("No monsters found matching that search term.")
            return None

        self._print_monsters(results, numbered=True)
        raw = self._ask("\nUse one of these monsters as a seed? Enter the number (or 0 to skip):")
        try:
            choice = int(raw)
        except ValueError:
            choice = 0
        if choice < 1 or choice > len(results):
            return None

        selected = results[choice - 1]
        self.output(f"Selected seed monster: {selected.name}")
        return selected

    def random_monster(self) -> None:
        monster = self.wrangler.rando(self.choices, self.rng)
        self.output(monster.detailed_summary())
        answer = self._ask("\nWould you like to use this monster as a seed? (y/n):")
        if answer.lower() == "y":
            self._push(self.choices.with_seed_monster(monster))
            self.output(f"Selected seed monster: {monster.name}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="monster-wrangler",
        description="Build themed monster groups from a catalog using an affinity graph.",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        action="append",
        help="Catalog file or directory (repeatable; defaults to the bundled catalog)",
    )
    parser.add_argument("--log-level", help="Logging level (e.g. DEBUG, INFO)")
    parser.add_argument("--group-size", type=int, help="Neighbors added to a generated group")
    parser.add_argument("--walk-length", type=int, help="Steps taken by a walk")
    parser.add_argument("--walk-min-distance", type=int, help="Smallest walk rank offset")
    parser.add_argument("--walk-max-distance", type=int, help="Exclusive upper bound of walk rank offsets")
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the loaded catalog and exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config({
            "catalog_paths": args.catalog,
            "log_level": args.log_level,
            "group_size": args.group_size,
            "walk_length": args.walk_length,
            "walk_min_distance": args.walk_min_distance,
            "walk_max_distance": args.walk_max_distance,
        })
    except ValidationError as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=config.log_level)

    try:
        if config.catalog_paths:
            monsters = load_catalog(config.catalog_paths)
        else:
            monsters = load_default_catalog()
        wrangler = MonsterWrangler.from_monsters(monsters)
    except CatalogError as e:
        logger.error(f"❌ Could not load catalog: {e}")
        return 1

    print(f"📚 Loaded {len(monsters)} monsters")
    if args.list:
        for monster in wrangler.list(wrangler.choices()):
            print(monster.detailed_summary())
        return 0

    WranglerRepl(wrangler, config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
