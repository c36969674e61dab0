# audio/synth.py
import logging
import pygame.midi
from typing import Set, Tuple
from config import AudioConfig
from midi.events import TimedEvent

USER_CH = 0        # 使用者彈奏用的 channel
ALL_NOTES_OFF = 123

class Synth:
    """
    系統 MIDI 音源（pygame.midi），作為播放的輸出端：
    - midi_event(event) 送出檔案事件，並記錄正在發聲的 (channel, note)
    - stop_all() 關掉所有發聲中的音（暫停、跳轉、結束時呼叫）
    - note_on / note_off 給使用者自己按的鍵
    沒有輸出裝置時變成靜音輸出。
    """
    def __init__(self, cfg: AudioConfig):
        self.cfg = cfg
        self.midi_out = None
        self.use_midi_out = False
        self._sounding: Set[Tuple[int, int]] = set()

        try:
            pygame.midi.init()
            dev = cfg.device_id if cfg.device_id is not None else pygame.midi.get_default_output_id()
            if dev != -1:
                self.midi_out = pygame.midi.Output(dev)
                self.use_midi_out = True
                logging.info("[Synth] Using system MIDI out (device %s)", dev)
            else:
                logging.warning("[Synth] No MIDI output device found, running silent")
        except Exception as e:
            logging.warning("[Synth] MIDI init failed: %s", e)

    def close(self):
        if self.midi_out:
            self.stop_all()
            self.midi_out.close()
        pygame.midi.quit()
        self.midi_out = None
        self.use_midi_out = False

    def _write(self, data: list):
        if not (self.use_midi_out and self.midi_out): return
        # write_short 最多三個 byte；sysex 等長訊息略過
        if len(data) > 3: return
        self.midi_out.write_short(*data)

    def midi_event(self, event: TimedEvent):
        msg = event.message
        if event.is_note_on:
            self._sounding.add((msg.channel, msg.note))
        elif event.is_note_off:
            self._sounding.discard((msg.channel, msg.note))
        self._write(msg.bytes())

    def note_on(self, pitch: int, vel: int = 100):
        if not (self.use_midi_out and self.midi_out): return
        v = max(1, min(int(vel), 127))
        self.midi_out.note_on(int(pitch), v, USER_CH)

    def note_off(self, pitch: int):
        if not (self.use_midi_out and self.midi_out): return
        self.midi_out.note_off(int(pitch), 0, USER_CH)

    def stop_all(self):
        sounding = len(self._sounding)
        if self.use_midi_out and self.midi_out:
            for ch, p in self._sounding:
                self.midi_out.note_off(p, 0, ch)
            for ch in range(16):
                self.midi_out.write_short(0xB0 | ch, ALL_NOTES_OFF, 0)
        self._sounding.clear()
        logging.debug("[Synth] stop_all (%d sounding)", sounding)
