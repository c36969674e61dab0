# midi/events.py
from dataclasses import dataclass
from typing import Optional
import mido

DRUM_CH = 9  # GM: ch10(索引9)為打擊，不列入 play-along

@dataclass(frozen=True)
class TimedEvent:
    time: float           # seconds on the file's own timeline (no lead-in)
    message: mido.Message
    track: int = 0

    @property
    def channel(self) -> Optional[int]:
        return getattr(self.message, "channel", None)

    @property
    def note(self) -> Optional[int]:
        return getattr(self.message, "note", None)

    @property
    def is_note_on(self) -> bool:
        return self.message.type == 'note_on' and self.message.velocity > 0

    @property
    def is_note_off(self) -> bool:
        # note_on velocity 0 等同 note_off
        return self.message.type == 'note_off' or (self.message.type == 'note_on' and self.message.velocity == 0)

    @property
    def is_percussion(self) -> bool:
        return self.channel == DRUM_CH
