# src/flight/audio.py
from __future__ import annotations
import logging
import os
from typing import Optional

import pygame

logger = logging.getLogger(__name__)


class CrashCue:
    """
    Fire-and-forget crash sound. Missing mixer, missing file or a failed
    play leave the game silent, never broken.
    """

    def __init__(self, path: Optional[str] = None):
        self.sound = None
        if path is None or not os.path.exists(path):
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=512)
            self.sound = pygame.mixer.Sound(path)
        except pygame.error as e:
            logger.debug("crash sound unavailable (%s): %s", path, e)
            self.sound = None

    def __call__(self) -> None:
        if self.sound is None:
            return
        try:
            self.sound.stop()   # restart from the beginning
            self.sound.play()
        except pygame.error as e:
            logger.debug("crash sound failed: %s", e)
