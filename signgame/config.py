"""
Configuration management for the sign language game.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

from .classifier import LETTERS

# Installed as package data next to this module
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class GameConfig:
    """Game rules configuration."""
    round_seconds: int
    practice_letters: str
    tick_interval_s: float


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    window_name: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    game: GameConfig
    display: DisplayConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If the game section holds invalid values
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data.get('model_complexity', 1),
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    game_data = data['game']
    game = GameConfig(
        round_seconds=int(game_data['round_seconds']),
        practice_letters=str(game_data['practice_letters']).upper(),
        tick_interval_s=float(game_data.get('tick_interval_s', 1.0))
    )
    _validate_game(game)

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        window_name=display_data['window_name']
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        game=game,
        display=display
    )


def _validate_game(game: GameConfig) -> None:
    """Reject game settings the controller cannot play with."""
    if game.round_seconds <= 0:
        raise ValueError(f"round_seconds must be positive, got {game.round_seconds}")
    if game.tick_interval_s <= 0:
        raise ValueError(f"tick_interval_s must be positive, got {game.tick_interval_s}")
    if not game.practice_letters:
        raise ValueError("practice_letters must not be empty")
    unknown = sorted(set(game.practice_letters) - set(LETTERS))
    if unknown:
        raise ValueError(f"practice_letters contains letters the classifier cannot detect: {''.join(unknown)}")
