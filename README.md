# starshooter

A small vertical-scrolling space shooter built on pygame. You fly a ship near
the bottom of a scrolling starfield. Enemies come down from the top of the
screen, and each one fires shots aimed at your ship. A destroyed enemy may drop
a bonus that bounces around the screen. Picking up the bonus gives back one
point of health, up to the maximum of five, and adds to your score. When your
health runs out, the game waits three seconds, asks for your name and puts your
score into a table of the eight best results. The table is saved when the game
closes.

## Installing

```
pip install .
```

This also installs `pygame`.

## Playing

```
starshooter
```

The command takes no options besides `--help`. The window is 600 × 800 pixels
and runs at 60 frames per second.

### Assets

The package contains no images, sounds or fonts. The game loads them from an
`assets` directory in the current working directory:

- `assets/image/`: `Stars-A.png`, `Stars-B.png`, `SpaceShip.png`,
  `laser-1.png`, `insect-2.png`, `bullet-1.png`, `bonus_life.png`,
  `Health UI Black.png`
- `assets/effect/explosion.png`: a horizontal strip of square frames
- `assets/font/`: `VonwaonBitmap-16px.ttf` and `VonwaonBitmap-12px.ttf`
- `assets/music/`: `03_Racing_Through_Asteroids_Loop.ogg` and
  `06_Battle_in_Space_Intro.ogg`
- `assets/sound/`: `laser_shoot4.wav`, `xs_laser.wav`, `explosion1.wav`,
  `explosion3.wav`, `eff11.wav`, `eff5.wav`

If an image or sound is missing, the game logs an error and plays on without
it. If the 16 px font cannot be opened, the game quits straight after start-up.
The high-score table is read from and written to `assets/save.dat`, with one
`score name` pair per line.

### Controls

| Key       | Action                                           |
|-----------|--------------------------------------------------|
| W A S D   | Move the ship                                    |
| J         | Fire (every 300 ms at most); restart from scores |
| Enter     | Confirm your name after game over                |
| Backspace | Delete the last character of your name           |
| F4        | Toggle fullscreen                                |

If you confirm an empty name, the game uses the name `无名氏`.

### Scoring

- Destroying an enemy: 10 points
- Picking up a bonus: 5 points

An enemy needs two hits to destroy. Running into an enemy destroys it and costs
you one point of health. About half of the destroyed enemies drop a bonus. A
bonus bounces off the screen edges at most three times and is lost once it
leaves the screen.

## Using the pieces from Python

The game logic can be used on its own, for example in experiments and tests.

```python
from starshooter.leaderboard import Leaderboard

board = Leaderboard(8)
board.insert(120, "ace")
board.insert(80, "rookie")
for score, name in board:
    print(score, name)
board.save("scores.dat")
```

`Leaderboard` keeps entries from the highest score down, and equal scores stay
in the order they were inserted. When an insert takes the table past its
capacity, the lowest entry is dropped. `load` replaces the entries with those
in a file and stops reading at the first pair it cannot parse.

The other modules:

- `starshooter.objects`: dataclasses for the player, enemies, shots,
  explosions, items (`ItemType`) and the scrolling `Background`.
- `starshooter.scene`: the abstract `Scene` base class.
- `starshooter.scene_main`: `SceneMain`, the playing field. It takes an
  optional `random.Random`, so runs can be repeated.
- `starshooter.scene_end`: `SceneEnd`, which handles name entry and shows the
  high-score table.
- `starshooter.game`: `Game`, which owns the window, the frame loop, the star
  background, text drawing and the leaderboard. `main` is the entry point of
  the `starshooter` command.

## Running the tests

```
pip install .[test]
pytest
```