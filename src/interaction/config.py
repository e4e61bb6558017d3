"""
Config loader for GestureTree.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import yaml

from .errors import ConfigError


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 320
    height: int = 240
    fps: int = 30


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class GestureConfig:
    profile: str = "two_hand"         # "two_hand" or "simple"
    pinch_threshold: float = 0.05     # Thumb tip to index tip (3D)
    simple_pinch_threshold: float = 0.04  # Same, for the "simple" profile (2D)
    heart_distance: float = 0.15      # Tip-to-tip distance for the two-hand heart
    thumb_open_distance: float = 0.15 # Thumb tip to pinky MCP, horizontal
    stabilize_window: float = 0.2     # Seconds a raw gesture must hold to commit


@dataclass
class CursorConfig:
    pointer_timeout: float = 1.5  # Pointer beats hand tracking for this long
    size_decay: float = 0.05      # Hand size drop per frame with no hand
    mirror: bool = True           # Camera preview is mirrored
    hit_padding: float = 20.0     # Pixels added around hit targets


@dataclass
class PrizeConfig:
    label: str = ""
    weight: int = 1
    color: str = "#FFFFFF"


def _default_prizes() -> List[PrizeConfig]:
    return [
        PrizeConfig("Fogo de Chão 🥩", 20, "#BAE6FD"),
        PrizeConfig("PS5 Gift Card 🎮", 20, "#BAE6FD"),
        PrizeConfig("Name a Dessert 🍰", 20, "#BAE6FD"),
        PrizeConfig("Qiu Be Punished 😈", 20, "#FBCFE8"),
        PrizeConfig("Rua Gets a Waiver 🎭", 20, "#FBCFE8"),
    ]


@dataclass
class LotteryConfig:
    max_chances: int = 5
    spin_interval: float = 0.05      # Fast shuffle cadence
    spin_steps: int = 25
    slow_initial_delay: float = 0.1
    slow_delay_step: float = 0.06    # Each slowing step waits this much longer
    slow_steps: int = 8
    game_over_label: str = "ここまでだ"
    game_over_color: str = "#FFFFFF"
    prizes: List[PrizeConfig] = field(default_factory=_default_prizes)


@dataclass
class PasscodeConfig:
    enabled: bool = True
    code: str = "05312022"
    hit_padding: float = 15.0
    error_flash: float = 0.5


@dataclass
class UIConfig:
    intro_duration: float = 9.0
    debug_overlay: bool = False


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    cursor: CursorConfig = field(default_factory=CursorConfig)
    lottery: LotteryConfig = field(default_factory=LotteryConfig)
    passcode: PasscodeConfig = field(default_factory=PasscodeConfig)
    ui: UIConfig = field(default_factory=UIConfig)


PROFILES = ("two_hand", "simple")


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def _load_lottery(data: Optional[dict]) -> LotteryConfig:
    if data is None:
        return LotteryConfig()
    data = dict(data)
    prizes = data.pop('prizes', None)
    lottery = _dict_to_dataclass(LotteryConfig, data)
    if prizes is not None:
        lottery.prizes = [_dict_to_dataclass(PrizeConfig, p) for p in prizes]
    return lottery


def validate_config(config: Config) -> Config:
    """
    Fail fast on settings that would leave the engine in a broken state.

    Raises:
        ConfigError: describing the first problem found.
    """
    if config.gestures.profile not in PROFILES:
        raise ConfigError(
            f"Unknown gesture profile {config.gestures.profile!r}, "
            f"expected one of {PROFILES}"
        )
    if config.gestures.stabilize_window < 0:
        raise ConfigError("gestures.stabilize_window must be >= 0")

    lottery = config.lottery
    if not lottery.prizes:
        raise ConfigError("lottery.prizes must not be empty")
    for prize in lottery.prizes:
        if not isinstance(prize.weight, int) or prize.weight <= 0:
            raise ConfigError(
                f"Prize {prize.label!r} needs a positive integer weight, got {prize.weight!r}"
            )
    if lottery.max_chances < 0:
        raise ConfigError("lottery.max_chances must be >= 0")
    if lottery.spin_steps < 0 or lottery.slow_steps < 0:
        raise ConfigError("lottery step counts must be >= 0")
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ConfigError: If the file parses but describes an unusable setup.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    config = Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        cursor=_dict_to_dataclass(CursorConfig, data.get('cursor')),
        lottery=_load_lottery(data.get('lottery')),
        passcode=_dict_to_dataclass(PasscodeConfig, data.get('passcode')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
    return validate_config(config)
