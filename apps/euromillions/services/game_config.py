from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class GameConfig:
    game_name: str
    main_count: int
    max_number: int
    star_count: int
    max_star: int
    default_model_version: str

    @property
    def small_threshold(self) -> int:
        return max(1, self.max_number // 2)


def get_game_config() -> GameConfig:
    config = getattr(settings, 'EUROMILLIONS_GAME', {})
    return GameConfig(
        game_name=config.get('game_name', 'EuroMillions'),
        main_count=int(config.get('main_count', 5)),
        max_number=int(config.get('max_number', 50)),
        star_count=int(config.get('star_count', 2)),
        max_star=int(config.get('max_star', 12)),
        default_model_version=config.get('default_model_version', 'v2.4.1'),
    )
