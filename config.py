# ========================= config.py =========================
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

MIN_SPEED, MAX_SPEED = 0.1, 4.0

def clamp_speed(speed: float) -> float:
    return round(max(MIN_SPEED, min(MAX_SPEED, speed)), 2)

class PlayMode(Enum):
    WATCH = "watch"  # 只播放
    LEARN = "learn"  # 等使用者按下需要的鍵才前進

@dataclass
class PlaybackConfig:
    lead_in: float = 3.0            # seconds before the first note
    speed_multiplier: float = 1.0
    mode: PlayMode = PlayMode.LEARN
    rewind_step: float = 5.0
    speed_step: float = 0.1

@dataclass
class KeyboardConfig:
    key_range: str = "88"
    keymap_path: Optional[str] = None

@dataclass
class AudioConfig:
    device_id: Optional[int] = None  # None = pygame.midi default output

@dataclass
class WindowConfig:
    width: int = 960
    height: int = 120
    fps: int = 60

@dataclass
class AppConfig:
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    keyboard: KeyboardConfig = field(default_factory=KeyboardConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    window: WindowConfig = field(default_factory=WindowConfig)
