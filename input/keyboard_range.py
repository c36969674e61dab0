# input/keyboard_range.py
from dataclasses import dataclass

# 鍵盤尺寸 -> (最低音, 最高音)
KEY_RANGES = {
    "88": (21, 108),
    "76": (28, 103),
    "61": (36, 96),
}

@dataclass(frozen=True)
class KeyboardRange:
    first: int = 21
    last: int = 108

    @classmethod
    def from_name(cls, name: str) -> "KeyboardRange":
        first, last = KEY_RANGES.get(str(name), KEY_RANGES["88"])
        return cls(first, last)

    def contains(self, note: int) -> bool:
        return self.first <= note <= self.last

    def __contains__(self, note) -> bool:
        return self.contains(note)

    def __len__(self) -> int:
        return max(0, self.last - self.first + 1)
