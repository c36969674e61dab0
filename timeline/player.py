# timeline/player.py
import logging
import time
from typing import List, Optional, Protocol, Sequence
from config import PlayMode
from input.keyboard_range import KeyboardRange
from midi.events import TimedEvent
from practice.play_along import KeyPressSource, PlayAlong
from timeline.playback import PlaybackClock, scale_elapsed

class OutputSink(Protocol):
    def midi_event(self, event: TimedEvent) -> None: ...
    def stop_all(self) -> None: ...

class MidiPlayer:
    """One playback session: clock + play-along + output sink.

    Every exit path must end in ``close()`` (or use the player as a context
    manager) so no note is left sounding.
    """
    def __init__(self, events: Sequence[TimedEvent], sink: OutputSink, keyboard_range: KeyboardRange,
                 lead_in: float = 3.0, speed_multiplier: float = 1.0, clock=time.monotonic):
        self.events = events
        self.sink = sink
        self.speed_multiplier = speed_multiplier
        # 建立後先暫停，由 start() 開始播放
        self.playback = PlaybackClock(lead_in, events, paused=True)
        self._play_along = PlayAlong(keyboard_range, clock=clock)
        self._closed = False
        self.update(0.0)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def update(self, delta: float) -> Optional[List[TimedEvent]]:
        """Paused: returns None. Playing: returns the events crossed this tick."""
        self._play_along.update()

        elapsed = scale_elapsed(delta, self.speed_multiplier)
        events = self.playback.advance(elapsed)

        for event in events:
            self.sink.midi_event(event)
            if event.is_percussion:
                continue
            if event.is_note_on:
                self._play_along.press_key(KeyPressSource.FILE, event.note, True)
            elif event.is_note_off:
                self._play_along.press_key(KeyPressSource.FILE, event.note, False)

        if self.playback.is_paused():
            return None
        return events

    def user_press(self, note: int, active: bool):
        self._play_along.press_key(KeyPressSource.USER, note, active)

    def should_wait(self, mode: PlayMode) -> bool:
        return mode is PlayMode.LEARN and not self._play_along.are_required_keys_pressed()

    def _clear(self):
        self.sink.stop_all()

    def close(self):
        if self._closed:
            return
        self._closed = True
        self._clear()
        logging.debug("Playback session closed")

    # ---------- transport ----------
    def start(self):
        self.resume()

    def pause_resume(self):
        if self.playback.is_paused():
            self.resume()
        else:
            self.pause()

    def pause(self):
        self._clear()
        self.playback.pause()

    def resume(self):
        self.playback.resume()

    def _set_time(self, time: float):
        self.playback.seek(time)
        # 丟掉跳轉點之前的事件，不送出
        self.playback.advance(0.0)
        self._clear()
        # 跳轉後 note_off 可能被略過，需求鍵一併清掉
        self._play_along.clear()

    def rewind(self, delta: float):
        self._set_time(max(0.0, self.playback.time() + delta))

    def set_percentage_time(self, p: float):
        self._set_time(max(0.0, p * self.playback.length()))

    # ---------- queries ----------
    def percentage(self) -> float:
        return self.playback.percentage()

    def time(self) -> float:
        return self.playback.time()

    def time_without_lead_in(self) -> float:
        return self.playback.time_without_lead_in()

    def length(self) -> float:
        return self.playback.length()

    def is_paused(self) -> bool:
        return self.playback.is_paused()

    @property
    def play_along(self) -> PlayAlong:
        return self._play_along
