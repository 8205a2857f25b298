"""Windows of the game: title screen, level selection and the playfield."""

from __future__ import annotations

import argparse
import enum
import os
import random
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Protocol

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .game import TOWER_COSTS, Game  # noqa: E402
from .level import Tile, load_map, MapFormatError  # noqa: E402
from .positions import TILE_SIZE, Point  # noqa: E402
from .progress import LEVEL_COUNT, LevelProgress  # noqa: E402
from .tower import Tower  # noqa: E402

APP_NAME = "喵星保卫战"
MENU_SIZE = (1000, 700)
GAME_SIZE = (1300, 800)
FIELD_WIDTH = 1200
FRAME_MS_LIMIT = 250

START_BUTTON_SIZE = (200, 90)
LEVEL_BUTTON_SIZE = (150, 80)
_LEVEL_BUTTON_SPOTS = (
    (550 // 4, 200),
    (1100 // 4 + 150, 200),
    (1550 // 4 + 300, 200),
    (550 // 4, 400),
    (1100 // 4 + 150, 400),
    (1550 // 4 + 300, 400),
)
SELECT_BACK_RECT = pygame.Rect(800, 600, 120, 60)

TOWER_NAMES = ("GunCat", "MageCat", "FireCat", "CannonCat")
PAUSE_RECT = pygame.Rect(1227, 0, 46, 46)
RESTART_RECT = pygame.Rect(450, 300, 100, 100)
MENU_BACK_RECT = pygame.Rect(575, 300, 100, 100)
REPLAY_RECT = pygame.Rect(700, 300, 100, 100)
END_BACK_RECT = pygame.Rect(575, 470, 100, 100)
GOLD_RECT = pygame.Rect(1230, 150, 70, 50)
HOME_RECT = pygame.Rect(1215, 100, 70, 50)
CONTROL_SIZE = 50

_BLACK = (0, 0, 0)
_WHITE = (255, 255, 255)
_RED = (255, 0, 0)
_BLUE = (0, 0, 255)
_MAGENTA = (255, 0, 255)


class Screen(enum.Enum):
    TITLE = "title"
    SELECT = "select"
    GAME = "game"


@dataclass(frozen=True)
class Transition:
    """A request to switch to another screen."""

    screen: Screen
    level: int = 0
    won: bool = False


def level_button_rect(index: int) -> pygame.Rect:
    """Rectangle of the button for level ``index + 1``."""
    if not 0 <= index < len(_LEVEL_BUTTON_SPOTS):
        raise ValueError(f"no level button {index}")
    return pygame.Rect(_LEVEL_BUTTON_SPOTS[index], LEVEL_BUTTON_SIZE)


def tower_button_rect(index: int) -> pygame.Rect:
    """Rectangle of the sidebar button choosing tower kind ``index + 1``."""
    if not 0 <= index < len(TOWER_NAMES):
        raise ValueError(f"no tower button {index}")
    return pygame.Rect(FIELD_WIDTH, 50 * (index + 1) + index * 100 + 150, 100, 100)


def wave_label(wave: int) -> str:
    """Wave counter as shown in the sidebar."""
    return f"0{wave}/06"


def _tower_controls(cell: Point) -> tuple[pygame.Rect, pygame.Rect]:
    """Upgrade and sell buttons placed around a tower so they stay on the field."""
    cx, cy = cell.x * TILE_SIZE + 50, cell.y * TILE_SIZE + 50
    if 100 < cx < 1100:
        upgrade, sell = (cx - 100, cy - 25), (cx + 50, cy - 25)
    elif cx < 100 and cy < 700:
        upgrade, sell = (cx - 25, cy + 50), (cx + 50, cy - 25)
    elif cx < 100:
        upgrade, sell = (cx - 25, cy - 100), (cx + 50, cy - 25)
    elif cy < 700:
        upgrade, sell = (cx - 100, cy - 25), (cx - 25, cy + 50)
    else:
        upgrade, sell = (cx - 100, cy - 25), (cx - 25, cy - 100)
    size = (CONTROL_SIZE, CONTROL_SIZE)
    return pygame.Rect(upgrade, size), pygame.Rect(sell, size)


class _Images:
    """Images from the asset directory, scaled and cached; missing ones are None."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root
        self._cache: dict[tuple[str, tuple[int, int] | None], pygame.Surface | None] = {}

    def get(self, name: str, size: tuple[int, int] | None = None) -> pygame.Surface | None:
        key = (name, size)
        if key not in self._cache:
            self._cache[key] = self._load(name, size)
        return self._cache[key]

    def _load(self, name: str, size: tuple[int, int] | None) -> pygame.Surface | None:
        if self.root is None or not name:
            return None
        file = self.root / name
        if not file.is_file():
            return None
        try:
            surface = pygame.image.load(str(file))
        except pygame.error:
            return None
        if size is None:
            return surface
        return pygame.transform.scale(surface, (max(1, size[0]), max(1, size[1])))

    def blit(self, target: pygame.Surface, name: str, rect: pygame.Rect, fallback=None) -> None:
        image = self.get(name, rect.size)
        if image is not None:
            target.blit(image, rect.topleft)
        elif fallback is not None:
            pygame.draw.rect(target, fallback, rect)


class _Sounds:
    """Sound effects and background music; silent without assets or a mixer."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root
        self._cache: dict[str, pygame.mixer.Sound] = {}

    def _file(self, name: str) -> Path | None:
        if self.root is None or pygame.mixer.get_init() is None:
            return None
        file = self.root / name
        return file if file.is_file() else None

    def play(self, name: str, volume: float = 0.8) -> None:
        file = self._file(name)
        if file is None:
            return
        try:
            if name not in self._cache:
                self._cache[name] = pygame.mixer.Sound(str(file))
            sound = self._cache[name]
            sound.set_volume(volume)
            sound.play()
        except pygame.error:
            pass

    def music(self, name: str) -> None:
        file = self._file(name)
        if file is None:
            return
        try:
            pygame.mixer.music.load(str(file))
            pygame.mixer.music.set_volume(0.5)
            pygame.mixer.music.play(-1)
        except pygame.error:
            pass

    def pause_music(self) -> None:
        if pygame.mixer.get_init() is not None:
            pygame.mixer.music.pause()

    def resume_music(self) -> None:
        if pygame.mixer.get_init() is not None:
            pygame.mixer.music.unpause()

    def stop_music(self) -> None:
        if pygame.mixer.get_init() is not None:
            pygame.mixer.music.stop()


@lru_cache(maxsize=None)
def _font(size: int, bold: bool = False, italic: bool = False) -> pygame.font.Font:
    return pygame.font.SysFont("arial", size, bold=bold, italic=italic)


def _text(target, text, rect, size, color=_BLACK, bold=False, italic=False) -> None:
    rendered = _font(size, bold, italic).render(text, True, color)
    target.blit(rendered, rendered.get_rect(center=rect.center))


class _View(Protocol):
    size: tuple[int, int]
    title: str
    music: str

    def click(self, pos: tuple[int, int]) -> Transition | None: ...

    def update(self, ms: int) -> None: ...

    def draw(self, surface: pygame.Surface, images: _Images) -> None: ...


class TitleView:
    """The start screen with its single start button."""

    size = MENU_SIZE
    title = APP_NAME
    music = "Music/begin.wav"

    def __init__(self, sounds: _Sounds | None = None) -> None:
        self.sounds = sounds or _Sounds()
        width, height = MENU_SIZE
        w, h = START_BUTTON_SIZE
        self.start_rect = pygame.Rect(width // 2 - w // 2, int(height * 0.5), w, h)

    def click(self, pos: tuple[int, int]) -> Transition | None:
        if self.start_rect.collidepoint(pos):
            self.sounds.play("Music/click.wav")
            return Transition(Screen.SELECT)
        return None

    def update(self, ms: int) -> None:
        return None

    def draw(self, surface: pygame.Surface, images: _Images) -> None:
        surface.fill((250, 230, 200))
        images.blit(surface, "image/Start/StartScreen.png", pygame.Rect((0, 0), self.size))
        sign = images.get("image/Start/StartSign.png")
        width, height = self.size
        if sign is not None:
            w, h = int(sign.get_width() * 1.15), int(sign.get_height() * 1.05)
            rect = pygame.Rect(int(width / 2 - w / 2), int(height * 0.15), w, h)
            images.blit(surface, "image/Start/StartSign.png", rect)
        else:
            _text(surface, APP_NAME, pygame.Rect(0, int(height * 0.15), width, 120), 64, bold=True)
        images.blit(surface, "image/Start/StartButton.png", self.start_rect, (240, 180, 60))


class LevelSelectView:
    """Six level buttons; only unlocked levels can be played."""

    size = MENU_SIZE
    title = f"{APP_NAME} 选择关卡"
    music = "Music/begin.wav"

    def __init__(
        self,
        progress: LevelProgress,
        progress_path: str | os.PathLike[str] | None = None,
        sounds: _Sounds | None = None,
    ) -> None:
        self.progress = progress
        self.progress_path = progress_path
        self.sounds = sounds or _Sounds()
        self.back_rect = SELECT_BACK_RECT

    def click(self, pos: tuple[int, int]) -> Transition | None:
        if self.back_rect.collidepoint(pos):
            self.sounds.play("Music/click.wav")
            self.sounds.stop_music()
            return Transition(Screen.TITLE)
        for index in range(LEVEL_COUNT):
            level = index + 1
            if level_button_rect(index).collidepoint(pos) and self.progress.is_unlocked(level):
                self.sounds.stop_music()
                self.sounds.play("Music/click.wav")
                return Transition(Screen.GAME, level)
        return None

    def record_win(self, level: int) -> None:
        """Open the level after ``level`` and store the progress."""
        if level < LEVEL_COUNT:
            self.progress.unlock(level + 1)
        if self.progress_path is not None:
            self.progress.save(self.progress_path)

    def update(self, ms: int) -> None:
        return None

    def draw(self, surface: pygame.Surface, images: _Images) -> None:
        surface.fill((200, 220, 240))
        images.blit(surface, "image/ChooseWi/ChooseBackgroud.png", pygame.Rect((0, 0), self.size))
        for index in range(LEVEL_COUNT):
            rect = level_button_rect(index)
            if self.progress.is_unlocked(index + 1):
                images.blit(surface, "image/ChooseWi/openchoose.png", rect, (250, 200, 90))
            else:
                images.blit(surface, "image/ChooseWi/closechoose.png", rect, (150, 150, 150))
            _text(surface, str(index + 1), rect, 36, italic=True)
        images.blit(surface, "image/GoBack.png", self.back_rect, (200, 120, 90))


class GameView:
    """The playfield with its sidebar, pause menu and tower controls."""

    size = GAME_SIZE
    music = "Music/game.wav"

    def __init__(self, game: Game, sounds: _Sounds | None = None) -> None:
        self.game = game
        self.sounds = sounds or _Sounds()
        self.title = f"{APP_NAME} 第 {game.level} 关"
        self._last_hp = game.home_hp
        self._ended = game.over

    def _leave(self) -> Transition:
        self.sounds.play("Music/click.wav")
        return Transition(Screen.SELECT, self.game.level, self.game.won)

    def click(self, pos: tuple[int, int]) -> Transition | None:
        game = self.game
        if game.over:
            return self._leave() if END_BACK_RECT.collidepoint(pos) else None
        if game.paused:
            if RESTART_RECT.collidepoint(pos):
                self.sounds.play("Music/click.wav")
                self.sounds.resume_music()
                game.resume()
            elif REPLAY_RECT.collidepoint(pos):
                self.sounds.play("Music/click.wav")
                return Transition(Screen.GAME, game.level)
            elif MENU_BACK_RECT.collidepoint(pos):
                return self._leave()
            return None
        if PAUSE_RECT.collidepoint(pos):
            self.sounds.play("Music/click.wav")
            self.sounds.pause_music()
            game.pause()
            return None
        for kind, _ in enumerate(TOWER_NAMES, start=1):
            if tower_button_rect(kind - 1).collidepoint(pos):
                self.sounds.play("Music/hit.wav")
                game.choose(kind)
                return None
        for tower in game.towers:
            if not tower.selected:
                continue
            upgrade_rect, sell_rect = _tower_controls(tower.cell)
            if upgrade_rect.collidepoint(pos):
                if tower.can_upgrade():
                    self.sounds.play("Music/upgrade.wav")
                    tower.upgrade()
                return None
            if sell_rect.collidepoint(pos):
                self.sounds.play("Music/towerreplace.wav")
                tower.sell()
                return None
        game.click(Point(*pos))
        return None

    def update(self, ms: int) -> None:
        self.game.advance(ms)
        if self.game.home_hp < self._last_hp:
            self.sounds.play("Music/homehurt.wav")
        self._last_hp = self.game.home_hp
        if self.game.over and not self._ended:
            self._ended = True
            self.sounds.stop_music()
            self.sounds.play("Music/vic.wav" if self.game.won else "Music/def.wav")

    def draw(self, surface: pygame.Surface, images: _Images) -> None:
        game = self.game
        surface.fill((120, 180, 90))
        images.blit(surface, "image/mainbg.png", pygame.Rect(0, 0, FIELD_WIDTH, GAME_SIZE[1]))
        for x, column in enumerate(game.grid):
            for y, tile in enumerate(column):
                rect = pygame.Rect(x * TILE_SIZE, y * TILE_SIZE, TILE_SIZE, TILE_SIZE)
                if tile is Tile.ROAD:
                    images.blit(surface, "image/map_road.png", rect, (200, 170, 120))
                elif tile is Tile.TOWER:
                    images.blit(surface, "image/Cat/CatAllowPos.png", rect, (90, 140, 70))
        for path in game.map_data.paths:
            for cell, name, color in (
                (path.start, "image/Cat/enemystart.png", (40, 160, 40)),
                (path.end, "image/Cat/enemyend.png", (160, 40, 40)),
            ):
                rect = pygame.Rect(cell.x * TILE_SIZE + 35, cell.y * TILE_SIZE + 25, 30, 50)
                images.blit(surface, name, rect, color)
        self._draw_sidebar(surface, images)
        for tower in game.towers:
            self._draw_tower(surface, images, tower)
        for enemy in game.enemies:
            if enemy.active:
                self._draw_enemy(surface, images, enemy)
        for bullet in game.bullets:
            images.blit(surface, bullet.image, pygame.Rect(bullet.position.x, bullet.position.y, 15, 15), _BLACK)
        banner = pygame.Rect(500, 150, 300, 300)
        if game.won:
            images.blit(surface, "image/gameend/vic.png", banner, (240, 210, 80))
        elif game.lost:
            images.blit(surface, "image/gameend/def.png", banner, (120, 120, 120))
        if game.over:
            images.blit(surface, "image/hidebutton/engame.png", END_BACK_RECT, (200, 120, 90))
        elif game.paused:
            images.blit(surface, "image/hidebutton/backtogame.png", RESTART_RECT, (90, 200, 120))
            images.blit(surface, "image/hidebutton/engame.png", MENU_BACK_RECT, (200, 120, 90))
            images.blit(surface, "image/hidebutton/replay.png", REPLAY_RECT, (90, 120, 200))

    def _draw_sidebar(self, surface: pygame.Surface, images: _Images) -> None:
        game = self.game
        images.blit(surface, "image/toolchosse.jpg", pygame.Rect(FIELD_WIDTH, 0, 100, 800), (230, 220, 200))
        images.blit(surface, "image/GoldCoin.png", pygame.Rect(1200, 155, 35, 40), (240, 200, 40))
        images.blit(surface, "image/heart.png", pygame.Rect(1210, 105, 40, 40), _RED)
        for i in range(4):
            pygame.draw.line(surface, _BLACK, (1200, 50 + i * 50), (1300, 50 + i * 50))
            pygame.draw.line(surface, _BLACK, (1200, 200 + i * 150), (1300, 200 + i * 150))
            pygame.draw.line(surface, _BLACK, (1200, 300 + i * 150), (1300, 300 + i * 150))
        pygame.draw.line(surface, _BLACK, (1200, 800), (1300, 800))
        _text(surface, wave_label(game.wave), pygame.Rect(1200, 50, 100, 50), 27, bold=True)
        _text(surface, str(game.gold), GOLD_RECT, 20, bold=True)
        _text(surface, str(game.home_hp), HOME_RECT, 20, bold=True)
        for index, name in enumerate(TOWER_NAMES):
            rect = tower_button_rect(index)
            focus = "focus" if game.choice == index + 1 else ""
            images.blit(surface, f"image/Cat/{name}_1{focus}.png", rect, (200, 200, 200))
            label = pygame.Rect(1220, 300 + 150 * index, 100, 50)
            _text(surface, str(TOWER_COSTS[index + 1]), label, 35, _MAGENTA, bold=True)
        pause_image = "image/restart.png" if game.paused else "image/stop.png"
        images.blit(surface, pause_image, PAUSE_RECT, (180, 180, 180))

    def _draw_tower(self, surface: pygame.Surface, images: _Images, tower: Tower) -> None:
        rect = pygame.Rect(tower.cell.x * TILE_SIZE, tower.cell.y * TILE_SIZE, TILE_SIZE, TILE_SIZE)
        images.blit(surface, tower.image_name(), rect, (230, 160, 60))
        center = tower.center()
        pygame.draw.circle(surface, _BLUE, (center.x, center.y), tower.attack_range, 1)
        if tower.selected and not self.game.paused:
            upgrade_rect, sell_rect = _tower_controls(tower.cell)
            if tower.can_upgrade():
                images.blit(surface, "image/TowerButton/CanUp1.png", upgrade_rect, (90, 200, 90))
            else:
                images.blit(surface, "image/TowerButton/CannotUp.png", upgrade_rect, (130, 130, 130))
            images.blit(surface, "image/TowerButton/Remove1.png", sell_rect, (200, 80, 80))

    def _draw_enemy(self, surface: pygame.Surface, images: _Images, enemy) -> None:
        x, y = enemy.position.x, enemy.position.y
        images.blit(surface, enemy.image, pygame.Rect(x, y, 100, 100), (110, 60, 140))
        bar_width, bar_height = 200 // 3, 5
        bar_x, bar_y = x + (100 - bar_width) // 2, y - bar_height - 3
        pygame.draw.rect(surface, _BLACK, (bar_x, bar_y, bar_width, bar_height), 1)
        fill = max(0, int(bar_width * enemy.health_ratio))
        if fill:
            pygame.draw.rect(surface, _RED, (bar_x, bar_y, fill, bar_height))


class _App:
    """Window and main loop switching between the three screens."""

    def __init__(self, assets: Path, progress_path: Path, seed: int | None) -> None:
        self.assets = assets
        self.images = _Images(assets)
        self.sounds = _Sounds(assets)
        self.rng = random.Random(seed)
        self.select = LevelSelectView(LevelProgress.load(progress_path), progress_path, self.sounds)
        self.view: _View = TitleView(self.sounds)
        self.screen: pygame.Surface | None = None

    def _show(self, view: _View) -> None:
        self.view = view
        self.screen = pygame.display.set_mode(view.size)
        pygame.display.set_caption(view.title)
        icon = self.images.get("image/Start/GameIcon.png", (32, 32))
        if icon is not None:
            pygame.display.set_icon(icon)
        self.sounds.music(view.music)

    def _switch(self, transition: Transition) -> _View:
        if transition.screen is Screen.TITLE:
            return TitleView(self.sounds)
        if transition.screen is Screen.SELECT:
            if transition.won:
                try:
                    self.select.record_win(transition.level)
                except OSError as error:
                    print(f"could not save progress: {error}", file=sys.stderr)
            return self.select
        map_file = self.assets / "Map" / f"map{transition.level}.txt"
        try:
            map_data = load_map(map_file)
        except (OSError, MapFormatError) as error:
            print(f"could not load level {transition.level}: {error}", file=sys.stderr)
            return self.select
        game = Game(map_data, transition.level, rng=random.Random(self.rng.random()))
        return GameView(game, self.sounds)

    def run(self) -> None:
        clock = pygame.time.Clock()
        self._show(self.view)
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    transition = self.view.click(event.pos)
                    if transition is not None:
                        self._show(self._switch(transition))
            elapsed = min(clock.tick(60), FRAME_MS_LIMIT)
            self.view.update(elapsed)
            assert self.screen is not None
            self.view.draw(self.screen, self.images)
            pygame.display.flip()


def main(argv: list[str] | None = None) -> int:
    """Open the game window and play until it is closed."""
    parser = argparse.ArgumentParser(prog="catdefense", description="A cat tower defense game.")
    parser.add_argument("--assets", type=Path, default=Path("assets"), help="directory with images, sounds and maps")
    parser.add_argument("--progress", type=Path, default=None, help="file recording unlocked levels")
    parser.add_argument("--seed", type=int, default=None, help="seed for enemy waves")
    args = parser.parse_args(argv)
    progress = args.progress if args.progress is not None else args.assets / "Map" / "levels.txt"
    pygame.init()
    try:
        _App(args.assets, progress, args.seed).run()
    finally:
        pygame.quit()
    return 0