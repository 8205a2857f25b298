# catdefense

A tower defense game on a 12 × 8 grid. Enemies walk along fixed roads toward
your home. You place cat towers on the marked tiles to stop them. Each level
has six waves. You win when all six waves are cleared. You lose when the home
has no health left.

## Installing

```
pip install .
```

This also installs `pygame`.

## Playing

```
catdefense [--assets DIR] [--progress FILE] [--seed N]
```

- `--assets` is the directory holding images, sounds and level maps. The
  default is `assets` in the current directory.
- `--progress` is the file that records unlocked levels. The default is
  `<assets>/Map/levels.txt`.
- `--seed` seeds the random enemy waves, so the waves come out the same on
  every run.

The title screen opens first. Its start button leads to the level select
screen, which has six levels. Only unlocked levels can be played. When the
progress file does not exist yet, only level 1 is open. Winning a level
unlocks the next one and writes the progress file.

In a level:

- Choose a cat from the side panel, then click a free tower tile to place it.
  - Gun cat costs 100 gold.
  - Mage cat costs 150 gold. Its shots slow enemies down briefly.
  - Fire cat costs 150 gold. Its shots burn an enemy once a second for five
    seconds.
  - Cannon cat costs 200 gold. Its shots hurt every enemy near the point of
    impact.
- Click a placed tower to show its upgrade and sell buttons.
  - A tower has three levels, and each upgrade costs gold.
  - Selling a tower returns half of what it is worth.
- You start with 500 gold. Each enemy you defeat earns more.
- An enemy that reaches the end of its road costs the home one point of
  health. The home starts with 10.
- The first wave arrives three seconds after the level opens.
- The pause button stops the game. While paused you can resume, replay the
  level, or go back to level select.

## What the package does not include

The package ships no images, sounds or level maps. You supply them in the
assets directory:

- Maps are read from `<assets>/Map/map1.txt` through `map6.txt`. A level
  whose map is missing or malformed does not open: the error is printed and
  the level select screen stays up.
- Images and sounds are looked up under the same directory, for example
  `image/Cat/GunCat_1.png` or `Music/click.wav`. A missing image is drawn as a
  plain coloured rectangle. A missing sound is not played.

## Map files

A map is plain text. Fields are separated by single spaces, and coordinates
count from 1. Each road is a block of four lines:

```
PATH
START 1 2
INFPO 6 2 ;
END 6 7
```

`INFPO` lists the turning points between start and end. Each point is `x y`
followed by one separator token. A `TOWERPOS` line lists the tower tiles in
the same way:

```
TOWERPOS 3 3 ; 4 1 ;
```

Roads run in straight lines between consecutive points. A map that does not
follow this layout raises `catdefense.level.MapFormatError`.

## Using the game logic

The rules run without a window, on a simulated millisecond clock:

```python
import random

from catdefense.game import Game
from catdefense.level import parse_map
from catdefense.positions import Point

text = "PATH\nSTART 1 2\nINFPO 6 2 ;\nEND 6 7\nTOWERPOS 3 3 ; 4 1 ;\n"
game = Game(parse_map(text), level=1, rng=random.Random(1))

game.choose(1)                # gun cat
game.click(Point(250, 250))   # place it on tile (3, 3)
game.advance(10_000)          # ten seconds of play
print(game.wave, game.gold, game.home_hp, game.won, game.lost)
```

The modules:

- `catdefense.level`: `parse_map`, `load_map` and `build_grid`, along with
  `GamePath`, `MapData` and `Tile`.
- `catdefense.game`: `Game`, and `wave_spawns`, which plans the enemies of one
  wave.
- `catdefense.enemy`, `catdefense.tower`, `catdefense.bullet`: the enemy
  kinds, the four cat towers (`GunCat`, `MageCat`, `FireCat`, `CannonCat`) and
  their bullets.
- `catdefense.scheduler`: `Scheduler` and `RepeatingTimer`, which drive the
  clock.
- `catdefense.progress`: `LevelProgress`, `parse_levels` and `format_levels`
  for the progress file. The file is a single line of unlocked level numbers,
  each followed by a space.
- `catdefense.app`: the pygame screens and the `main` function behind the
  `catdefense` command.

## Running the tests

```
pip install .[test]
pytest
```