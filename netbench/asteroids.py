"""A terminal asteroid-dodging game."""

from __future__ import annotations

import random
import sys
from dataclasses import dataclass, field

WIDTH = 50
HEIGHT = 20
SPAWN_ODDS = 10
CLEAR_SCREEN = "\033[H\033[J"


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Asteroid:
    position: Point

    @classmethod
    def spawn(cls, rng: random.Random) -> "Asteroid":
        return cls(Point(rng.randrange(WIDTH), 0))

    def fall(self) -> None:
        self.position.y += 1


def _ship_start() -> Point:
    return Point(WIDTH // 2, HEIGHT - 1)


@dataclass
class Ship:
    position: Point = field(default_factory=_ship_start)
    score: int = 0

    def move_left(self) -> None:
        self.position.x = max(self.position.x - 1, 0)

    def move_right(self) -> None:
        self.position.x = min(self.position.x + 1, WIDTH - 1)

    def increase_score(self) -> None:
        self.score += 1


def collides(ship: Ship, asteroid: Asteroid) -> bool:
    return ship.position == asteroid.position


class Game:
    """Game state: one ship and the asteroids on the field."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = random.Random() if rng is None else rng
        self.ship = Ship()
        self.asteroids: list[Asteroid] = []
        self.over = False

    def render(self) -> str:
        rocks = {(a.position.x, a.position.y) for a in self.asteroids}
        ship = (self.ship.position.x, self.ship.position.y)

        def cell(x: int, y: int) -> str:
            if (x, y) == ship:
                return "O"
            return "*" if (x, y) in rocks else " "

        rows = ("".join(cell(x, y) for x in range(WIDTH)) for y in range(HEIGHT))
        return f"Score: {self.ship.score}\n" + "".join(row + "\n" for row in rows)

    def step(self, key: str | None) -> bool:
        """Advance one tick with the given key press; return True when the game is over."""
        for asteroid in self.asteroids:
            asteroid.fall()
        self.asteroids = [a for a in self.asteroids if a.position.y != HEIGHT - 1]

        if self.rng.randrange(SPAWN_ODDS) == 0:
            self.asteroids.append(Asteroid.spawn(self.rng))

        if key == "a":
            self.ship.move_left()
        elif key == "d":
            self.ship.move_right()

        self.over = any(collides(self.ship, a) for a in self.asteroids)

        for asteroid in self.asteroids:
            if asteroid.position.y == HEIGHT - 1:
                self.ship.increase_score()
        return self.over


def main(argv: list[str] | None = None) -> int:
    """Play on the terminal: 'a' and 'd' move the ship, end of input quits."""
    game = Game()
    while True:
        sys.stdout.write(CLEAR_SCREEN + game.render())
        sys.stdout.flush()
        key = sys.stdin.read(1)
        if not key or game.step(key):
            break
    print(f"Game over! Final score: {game.ship.score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())