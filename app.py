# app.py
import logging
import pygame
from typing import Dict, List, Optional
from config import AppConfig, clamp_speed
from audio.synth import Synth
from input.keyboard_range import KeyboardRange
from input.keymap import DEFAULT_KEYMAP, load_keymap
from midi.events import TimedEvent
from midi.parser import load_events
from timeline.player import MidiPlayer
from utils.crashlog import log_exception

class App:
    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self.keyboard_range = KeyboardRange.from_name(cfg.keyboard.key_range)
        self.keymap: Dict[int, int] = dict(DEFAULT_KEYMAP)
        if cfg.keyboard.keymap_path:
            try:
                self.keymap = load_keymap(cfg.keyboard.keymap_path)
            except (OSError, ValueError) as e:
                log_exception("load_keymap", e)

        pygame.init()
        self.screen = pygame.display.set_mode((cfg.window.width, cfg.window.height))
        pygame.display.set_caption("piano play-along")
        self.font = pygame.font.SysFont("consolas", 18)
        self.clock = pygame.time.Clock()

        self.synth = Synth(cfg.audio)
        self.player: Optional[MidiPlayer] = None
        self.current_midi: Optional[str] = None
        self._running = False

    # ---------- Session ----------
    def load(self, path: str) -> bool:
        try:
            events: List[TimedEvent] = load_events(path)
        except (OSError, EOFError, ValueError) as e:
            log_exception("load_midi", e)
            return False

        # 舊 session 一定要先收尾（停掉所有發聲中的音）
        if self.player:
            self.player.close()
        self.player = MidiPlayer(
            events, self.synth, self.keyboard_range,
            lead_in=self.cfg.playback.lead_in,
            speed_multiplier=self.cfg.playback.speed_multiplier,
        )
        self.current_midi = path
        # 播放中換檔：新 session 直接開始
        if self._running:
            self.player.start()
        logging.info("Loaded %s (%d events)", path, len(events))
        return True

    def _adjust_speed(self, delta: float):
        pb = self.cfg.playback
        pb.speed_multiplier = clamp_speed(pb.speed_multiplier + delta)
        if self.player:
            self.player.speed_multiplier = pb.speed_multiplier

    def _handle_key(self, e) -> bool:
        """回傳 False 代表要離開。"""
        pb = self.cfg.playback
        if e.type == pygame.KEYDOWN:
            if e.key == pygame.K_ESCAPE:
                return False
            if self.player:
                if e.key == pygame.K_SPACE:
                    self.player.pause_resume(); return True
                if e.key == pygame.K_LEFT:
                    self.player.rewind(-pb.rewind_step); return True
                if e.key == pygame.K_RIGHT:
                    self.player.rewind(pb.rewind_step); return True
            if e.key == pygame.K_UP:
                self._adjust_speed(+pb.speed_step); return True
            if e.key == pygame.K_DOWN:
                self._adjust_speed(-pb.speed_step); return True

        if e.type in (pygame.KEYDOWN, pygame.KEYUP) and e.key in self.keymap:
            pitch = self.keymap[e.key]
            down = e.type == pygame.KEYDOWN
            if down:
                self.synth.note_on(pitch, 110)
            else:
                self.synth.note_off(pitch)
            if self.player:
                self.player.user_press(pitch, down)
        return True

    def _draw_status(self):
        self.screen.fill((12, 12, 14))
        if self.player:
            pb = self.cfg.playback
            waiting = self.player.should_wait(pb.mode)
            fields = [
                f"{self.player.time_without_lead_in():7.2f}s",
                f"{self.player.percentage() * 100:5.1f}%",
                f"SPEED: {int(pb.speed_multiplier * 100)}%",
                f"MODE: {pb.mode.value.upper()}",
                "PAUSED" if self.player.is_paused() else ("WAITING" if waiting else "PLAY"),
            ]
            text = "  |  ".join(fields)
        else:
            text = "No MIDI loaded"
        surf = self.font.render(text, True, (220, 220, 230))
        self.screen.blit(surf, (10, (self.cfg.window.height - surf.get_height()) // 2))
        pygame.display.flip()

    # ---------- Main loop ----------
    def run(self):
        try:
            if self.player:
                self.player.start()
            running = self._running = True
            while running:
                dt = self.clock.tick(self.cfg.window.fps) / 1000.0
                for e in pygame.event.get():
                    if e.type == pygame.QUIT:
                        running = False
                    elif not self._handle_key(e):
                        running = False
                if not running:
                    break

                if self.player:
                    # LEARN：還有需要按的鍵時時間停住
                    self.player.update(0.0 if self.player.should_wait(self.cfg.playback.mode) else dt)
                self._draw_status()
        finally:
            self._running = False
            self.close()

    def close(self):
        if self.player:
            self.player.close()
            self.player = None
        self.synth.close()
        pygame.quit()
