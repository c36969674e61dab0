import os

import pygame
import pytest

from input.keymap import DEFAULT_KEYMAP, load_keymap, name_to_keycode, save_keymap


@pytest.fixture(autouse=True)
def headless_pygame():
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    pygame.display.init()
    yield
    pygame.display.quit()


def test_save_load_keymap(tmp_path):
    path = str(tmp_path / "keymap.json")
    save_keymap(path, DEFAULT_KEYMAP)
    assert load_keymap(path) == DEFAULT_KEYMAP


def test_numeric_key_names():
    assert name_to_keycode("122") == 122


def test_unknown_key_name():
    with pytest.raises(ValueError):
        name_to_keycode("definitely-not-a-key")
