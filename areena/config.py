# areena/config.py
from dataclasses import dataclass, fields
from pathlib import Path

from ruamel.yaml import YAML

DEFAULT_CFG = Path(__file__).resolve().parent.parent / "configs" / "areena.yml"


@dataclass
class GameConfig:
    fps: int = 30
    screen_width: int = 960
    screen_height: int = 540
    sidebar_width: int = 200
    max_ticks: int = 5400          # 3 minutes at 30 fps
    outro_seconds: float = 2.0     # extra frames after the last kill
    max_blood_stains: int = 400
    blood_stain_lifetime: int = 240  # ticks
    max_player_count: int = 30
    render_file_name: str = "areena_fight"
    avatar_timeout: float = 10.0   # seconds per avatar download

    @classmethod
    def from_mapping(cls, data):
        if not data:
            return cls()
        known = {f.name: f.type for f in fields(cls)}
        unknown = set(data) - set(known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        cfg = cls()
        for key, value in data.items():
            default = getattr(cfg, key)
            setattr(cfg, key, type(default)(value))
        return cfg

    @property
    def outro_ticks(self) -> int:
        return int(round(self.outro_seconds * self.fps))


def load_cfg(path=None) -> GameConfig:
    yaml = YAML(typ="safe")
    if path is None:
        if not DEFAULT_CFG.exists():  # non-editable installs don't ship configs/
            return GameConfig()
        path = DEFAULT_CFG
    path = Path(path)
    return GameConfig.from_mapping(yaml.load(path.read_text()))
