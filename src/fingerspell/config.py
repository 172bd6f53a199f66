"""
Config loader for Fingerspell.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import yaml

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    mirror: bool = True


@dataclass
class MediaPipeConfig:
    model_path: Optional[str] = None
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_presence_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class ClassifierConfig:
    """
    Decision-tree thresholds.

    Every distance is a ratio of hand size (wrist to middle knuckle), so the
    same table works at any distance from the camera.
    """
    # Finger extension
    extension_mode: str = "knuckle"   # "knuckle" or "wrist"
    index_extension: float = 0.6
    middle_extension: float = 0.6
    ring_extension: float = 0.6
    pinky_extension: float = 0.6
    wrist_extension_ratio: float = 1.1  # tip-wrist / knuckle-wrist, "wrist" mode
    use_depth: bool = False
    depth_weight: float = 2.0

    # Sideways index (G / H)
    horizontal_ratio: float = 1.5

    # Index only (L / X / D)
    l_thumb_spread: float = 0.9
    x_hook_drop: float = 0.2

    # Index + middle (R / K / V / U)
    r_cross_gap: float = 0.4
    k_thumb_rise: float = 0.1
    v_tip_spread: float = 0.5

    # All four (B / C / open hand)
    b_thumb_tuck: float = 0.15
    c_thumb_gap: float = 0.8
    c_index_reach: float = 0.85

    # F / Y / I
    f_thumb_gap: float = 0.45
    y_thumb_spread: float = 1.2

    # Fist family
    o_index_reach: float = 0.45
    o_thumb_gap: float = 0.35
    fist_c_reach_min: float = 0.4
    fist_c_reach_max: float = 0.6
    fist_c_gap_min: float = 0.35
    fist_c_gap_max: float = 0.8
    se_thumb_reach: float = 0.3
    s_thumb_knuckle: float = 0.45
    a_thumb_side: float = 0.1
    a_thumb_rise: float = 0.0
    mnt_tolerance: float = 0.12


@dataclass
class WaveConfig:
    noise_floor: float = 0.02     # Min wrist travel per frame, x hand size
    cycle_threshold: int = 4      # Direction flips needed for a wave
    stationary_frames: int = 10   # Still frames before the count drops to 0
    word: str = "HELLO"


@dataclass
class TypingConfig:
    window_size: int = 10         # Smoothing window (frames)
    stable_threshold: int = 15    # Frames a smoothed symbol must hold to commit
    auto_space: bool = True       # Space when the hand leaves the frame


@dataclass
class UIConfig:
    tick_interval_ms: int = 33
    position: str = "right"
    stay_on_top: bool = True


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    wave: WaveConfig = field(default_factory=WaveConfig)
    typing: TypingConfig = field(default_factory=TypingConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    unknown = set(data) - field_names
    if unknown:
        logger.warning("Ignoring unknown %s keys: %s", cls.__name__, ", ".join(sorted(unknown)))
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def validate_config(config: Config) -> Config:
    """Reject values the pipeline cannot work with."""
    if config.typing.window_size < 1:
        raise ConfigError(f"typing.window_size must be >= 1, got {config.typing.window_size}")
    if config.typing.stable_threshold < 1:
        raise ConfigError(f"typing.stable_threshold must be >= 1, got {config.typing.stable_threshold}")
    if config.wave.cycle_threshold < 1:
        raise ConfigError(f"wave.cycle_threshold must be >= 1, got {config.wave.cycle_threshold}")
    if config.wave.noise_floor < 0:
        raise ConfigError(f"wave.noise_floor must be >= 0, got {config.wave.noise_floor}")
    if not config.wave.word:
        raise ConfigError("wave.word must not be empty")
    if config.classifier.extension_mode not in ("knuckle", "wrist"):
        raise ConfigError(
            f"classifier.extension_mode must be 'knuckle' or 'wrist', "
            f"got {config.classifier.extension_mode!r}"
        )
    if config.ui.tick_interval_ms < 1:
        raise ConfigError(f"ui.tick_interval_ms must be >= 1, got {config.ui.tick_interval_ms}")
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
        ConfigError: If a value is out of range.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        logger.info("No config file at %s, using defaults", config_path)
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    logger.info("Loaded config from %s", config_path)
    return validate_config(Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        classifier=_dict_to_dataclass(ClassifierConfig, data.get('classifier')),
        wave=_dict_to_dataclass(WaveConfig, data.get('wave')),
        typing=_dict_to_dataclass(TypingConfig, data.get('typing')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    ))
