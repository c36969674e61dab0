# midi/parser.py
import logging
import mido
from typing import List, Sequence
from midi.events import TimedEvent

def load_events(path: str) -> List[TimedEvent]:
    """Read a MIDI file into one merged, time-ordered list of TimedEvents (seconds)."""
    mid = mido.MidiFile(path)
    tpb = mid.ticks_per_beat
    tempo = 500000  # default 120 bpm
    time_sec = 0.0
    events: List[TimedEvent] = []

    for msg in mido.merge_tracks(mid.tracks):
        time_sec += mido.tick2second(msg.time, tpb, tempo)
        if msg.is_meta:
            if msg.type == 'set_tempo':
                tempo = msg.tempo
        else:
            events.append(TimedEvent(time=time_sec, message=msg.copy(time=0)))
    # merge_tracks 已依時間排序，這裡只保險（stable）
    events.sort(key=lambda e: e.time)
    logging.debug("Loaded %d events from %s (%.2fs)", len(events), path, sequence_length(events))
    return events

def sequence_length(events: Sequence[TimedEvent]) -> float:
    return events[-1].time if events else 0.0
