# practice/play_along.py
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Deque, FrozenSet, Set, Tuple
from input.keyboard_range import KeyboardRange

PRESS_LEEWAY = 0.5  # 提前按鍵可被接受的時間窗（秒）

class KeyPressSource(Enum):
    FILE = auto()
    USER = auto()

@dataclass(frozen=True)
class UserPress:
    timestamp: float
    note_id: int

class PlayAlong:
    """Tracks which notes the user still owes.

    A file note-on either consumes a recent user press of the same note or
    becomes a required note; a user press clears a required note, or waits in
    the queue (up to PRESS_LEEWAY) for the file to catch up.
    """
    def __init__(self, keyboard_range: KeyboardRange, clock: Callable[[], float] = time.monotonic):
        self.keyboard_range = keyboard_range
        self._clock = clock
        self._required_notes: Set[int] = set()
        # 最近 500ms 的使用者按鍵；依插入順序 = 時間順序
        self._user_pressed_recently: Deque[UserPress] = deque()

    def update(self):
        now = self._clock()
        while self._user_pressed_recently:
            if now - self._user_pressed_recently[0].timestamp > PRESS_LEEWAY:
                self._user_pressed_recently.popleft()
            else:
                # 後面的都比較新
                break

    def _user_press_key(self, note_id: int, active: bool):
        if active:
            self._user_pressed_recently.append(UserPress(self._clock(), note_id))
            self._required_notes.discard(note_id)

    def _file_press_key(self, note_id: int, active: bool):
        if not active:
            self._required_notes.discard(note_id)
            return
        for press in self._user_pressed_recently:
            if press.note_id == note_id:
                self._user_pressed_recently.remove(press)
                return
        self._required_notes.add(note_id)

    def press_key(self, source: KeyPressSource, note_id: int, active: bool):
        if note_id not in self.keyboard_range:
            return
        if source is KeyPressSource.USER:
            self._user_press_key(note_id, active)
        else:
            self._file_press_key(note_id, active)

    def are_required_keys_pressed(self) -> bool:
        return not self._required_notes

    @property
    def required_notes(self) -> FrozenSet[int]:
        return frozenset(self._required_notes)

    @property
    def pending_presses(self) -> Tuple[int, ...]:
        return tuple(p.note_id for p in self._user_pressed_recently)

    def clear(self):
        self._required_notes.clear()
        self._user_pressed_recently.clear()
