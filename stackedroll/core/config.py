import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "stacked_roll_manager"
DEFAULT_RESERVE_THRESHOLD = 180


@dataclass
class AppConfig:
    enabled: bool = True
    reserve_threshold: int = DEFAULT_RESERVE_THRESHOLD
    spreadsheet_id: str = ""
    range_name: str = "Stacked Rolls!A2:Z"
    last_credentials_path: str = ""


def config_path() -> Path:
    base = Path(user_config_dir(APP_NAME))
    return base / "settings.json"


def token_path() -> Path:
    base = Path(user_config_dir(APP_NAME))
    return base / "token.json"


def _threshold(value) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return DEFAULT_RESERVE_THRESHOLD


def load_config(path: Path = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return AppConfig()
    if not isinstance(data, dict):
        return AppConfig()

    return AppConfig(
        enabled=bool(data.get("enabled", True)),
        reserve_threshold=_threshold(data.get("reserve_threshold", DEFAULT_RESERVE_THRESHOLD)),
        spreadsheet_id=data.get("spreadsheet_id", ""),
        range_name=data.get("range_name", "Stacked Rolls!A2:Z"),
        last_credentials_path=data.get("last_credentials_path", ""),
    )


def save_config(cfg: AppConfig, path: Path = None) -> None:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "enabled": bool(cfg.enabled),
        "reserve_threshold": _threshold(cfg.reserve_threshold),
        "spreadsheet_id": cfg.spreadsheet_id,
        "range_name": cfg.range_name,
        "last_credentials_path": cfg.last_credentials_path,
    }
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
