import mido

from midi.events import TimedEvent


def note_on(t, note, channel=0, velocity=64):
    return TimedEvent(time=t, message=mido.Message('note_on', note=note, velocity=velocity, channel=channel))


def note_off(t, note, channel=0):
    return TimedEvent(time=t, message=mido.Message('note_off', note=note, velocity=0, channel=channel))


def write_midi(path, notes=(60, 64), beat_ticks=480):
    """One-track file, each note a beat long at 120 bpm."""
    mid = mido.MidiFile(ticks_per_beat=beat_ticks)
    track = mido.MidiTrack()
    for note in notes:
        track.append(mido.Message('note_on', note=note, velocity=80, time=0))
        track.append(mido.Message('note_off', note=note, velocity=0, time=beat_ticks))
    mid.tracks.append(track)
    mid.save(str(path))
    return str(path)
