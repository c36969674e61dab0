# timeline/playback.py
import logging
from bisect import bisect_left
from typing import List, Sequence
from midi.events import TimedEvent

def scale_elapsed(delta: float, speed_multiplier: float) -> float:
    """Frame delta -> clock time. Quantized (10 buckets x speed in tenths) so
    runs at different frame rates drift the same way."""
    micros = int(round(max(0.0, delta) * 1_000_000))
    tenths = int(max(0.0, speed_multiplier) * 10 + 1e-9)  # 2.3 * 10 == 22.999...
    return (micros // 10) * tenths / 1_000_000

class PlaybackClock:
    """Elapsed-time cursor over an immutable event sequence.

    Events are scheduled at ``lead_in + event.time``; ``time()`` includes the
    lead-in, so playback starts ``lead_in`` seconds before the first note.
    """
    def __init__(self, lead_in: float, events: Sequence[TimedEvent], paused: bool = False):
        self.events = events
        self._lead_in = max(0.0, lead_in)
        self._offsets: List[float] = [self._lead_in + e.time for e in events]
        self._length = self._lead_in + (events[-1].time if events else 0.0)

        self.current_time = 0.0
        self.paused = paused
        self.cursor = 0

    def advance(self, elapsed: float) -> List[TimedEvent]:
        if self.paused:
            return []
        self.current_time += max(0.0, elapsed)

        # cursor 永遠指向第一個 offset >= current_time 的事件
        start = self.cursor
        while self.cursor < len(self._offsets) and self._offsets[self.cursor] < self.current_time:
            self.cursor += 1
        return list(self.events[start:self.cursor])

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    def is_paused(self) -> bool:
        return self.paused

    def seek(self, time: float):
        self.current_time = max(0.0, time)
        self.cursor = bisect_left(self._offsets, self.current_time)
        logging.debug("Seek to %.3fs (cursor=%d/%d)", self.current_time, self.cursor, len(self._offsets))

    def rewind(self, delta: float):
        self.seek(max(0.0, self.current_time + delta))

    def set_percentage_time(self, p: float):
        self.seek(max(0.0, p * self._length))

    def percentage(self) -> float:
        if self._length <= 0:
            return 0.0
        return self.current_time / self._length

    def time(self) -> float:
        return self.current_time

    def time_without_lead_in(self) -> float:
        return self.current_time - self._lead_in

    def length(self) -> float:
        return self._length

    def lead_in(self) -> float:
        return self._lead_in
