"""
Game settings.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from invaders.constants import FPS, WINDOW_SIZE
from invaders.exceptions import InvalidSettings


@dataclass
class WindowSettings:
    width: int = WINDOW_SIZE[0]
    height: int = WINDOW_SIZE[1]
    title: str = "Invaders"
    resizable: bool = True


@dataclass
class RendererSettings:
    background_color: tuple[int, int, int] = (0, 0, 0)


@dataclass
class GameplaySettings:
    fps: int = FPS
    seed: int | None = None


@dataclass
class LoggingSettings:
    level: str = "INFO"


@dataclass
class GameSettings:
    """
    Settings for the pygame front end, grouped like the dict they load from:

        {
            "window": {"width": 800, "height": 600, "title": ..., "resizable": True},
            "renderer": {"background_color": (0, 0, 0)},
            "game": {"fps": 60, "seed": None},
            "logging": {"level": "INFO"},
        }
    """

    window: WindowSettings = field(default_factory=WindowSettings)
    renderer: RendererSettings = field(default_factory=RendererSettings)
    game: GameplaySettings = field(default_factory=GameplaySettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    _sections = {
        "window": WindowSettings,
        "renderer": RendererSettings,
        "game": GameplaySettings,
        "logging": LoggingSettings,
    }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "GameSettings":
        """
        Build settings from a nested dictionary; missing keys keep defaults.

        :param data: Settings dictionary
        :type data: dict[str, Any] | None

        :raise InvalidSettings: On unknown sections/keys or invalid values

        :return: GameSettings
        """
        data = data or {}
        unknown = set(data) - set(cls._sections)
        if unknown:
            raise InvalidSettings(f"Unknown settings sections: {sorted(unknown)}")

        kwargs = {}
        for name, section_cls in cls._sections.items():
            section = data.get(name) or {}
            try:
                kwargs[name] = section_cls(**section)
            except TypeError as e:
                raise InvalidSettings(f"Invalid '{name}' settings: {e}") from e

        settings = cls(**kwargs)
        settings.validate()
        return settings

    def to_dict(self) -> dict[str, Any]:
        return {name: asdict(getattr(self, name)) for name in self._sections}

    def validate(self):
        """
        :raise InvalidSettings: If any value is out of range
        """
        if self.window.width <= 0 or self.window.height <= 0:
            raise InvalidSettings(
                f"Window size must be positive, got "
                f"{self.window.width}x{self.window.height}"
            )
        if self.game.fps <= 0:
            raise InvalidSettings(f"fps must be positive, got {self.game.fps}")
        color = tuple(self.renderer.background_color)
        if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
            raise InvalidSettings(f"Invalid background color {color!r}")
        self.renderer.background_color = color
