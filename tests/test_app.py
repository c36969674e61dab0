"""Tests for App session handling (headless pygame, no MIDI device)."""

import pygame
import pytest

import app as app_module
from config import AppConfig

from helpers import write_midi


class FakeSynth:
    def __init__(self, cfg):
        self.stop_all_calls = 0

    def midi_event(self, event):
        pass

    def stop_all(self):
        self.stop_all_calls += 1

    def note_on(self, pitch, vel=100):
        pass

    def note_off(self, pitch):
        pass

    def close(self):
        pass


@pytest.fixture
def application(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)  # logs/ 寫在暫存目錄
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    monkeypatch.setattr(app_module, "Synth", FakeSynth)
    a = app_module.App(AppConfig())
    yield a
    a.close()


def test_load_before_run_stays_paused(application, tmp_path):
    assert application.load(write_midi(tmp_path / "a.mid"))
    assert application.player.is_paused()


def test_load_while_running_starts_new_session(application, tmp_path):
    application.load(write_midi(tmp_path / "a.mid"))
    old = application.player
    application._running = True

    assert application.load(write_midi(tmp_path / "b.mid", notes=(67,)))
    assert application.player is not old
    assert not application.player.is_paused()
    # 舊 session 已收尾
    assert application.synth.stop_all_calls == 1


def test_failed_load_keeps_session(application, tmp_path):
    application.load(write_midi(tmp_path / "a.mid"))
    old = application.player
    assert not application.load(str(tmp_path / "missing.mid"))
    assert application.player is old


def test_close_releases_player(application, tmp_path):
    application.load(write_midi(tmp_path / "a.mid"))
    application.close()
    assert application.player is None
    assert not pygame.get_init()
