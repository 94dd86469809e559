# src/flight/render.py
from __future__ import annotations
import math
import random
from typing import Optional, Tuple

import pygame

from .config import (
    WIDTH, HEIGHT, EXPLOSION_FRAMES, EXPLOSION_SIZE,
    RESULT_PANEL_X, RESULT_PANEL_Y, RESULT_PANEL_W, RESULT_PANEL_H,
    RETRY_BTN_X, RETRY_BTN_Y, RETRY_BTN_W, RETRY_BTN_H,
    COLOR_BG, COLOR_BG_BAND, COLOR_FG, COLOR_MUTED, COLOR_PANEL, COLOR_PANEL_EDGE,
    COLOR_BUILDING, COLOR_PLANE, COLOR_PLANE_HIT, COLOR_EXPLOSION, COLOR_BUTTON,
)
from .controller import RunState, Snapshot
from .crash import CrashPhase

SHAKE_PX = 8


def _panel(surf: pygame.Surface, rect: pygame.Rect, alpha: int = 160):
    panel = pygame.Surface(rect.size, pygame.SRCALPHA)
    panel.fill((*COLOR_PANEL, alpha))
    surf.blit(panel, rect.topleft)
    pygame.draw.rect(surf, COLOR_PANEL_EDGE, rect, width=1)


def _text(surf, font, msg: str, pos: Tuple[int, int], color=COLOR_FG, center: bool = False):
    img = font.render(msg, True, color)
    if center:
        pos = (pos[0] - img.get_width() // 2, pos[1])
    surf.blit(img, pos)


def _draw_background(surf: pygame.Surface, parallax_x: float):
    surf.fill(COLOR_BG)
    # two bands scrolling at the parallax offset so motion is visible without assets
    band_w = WIDTH // 2
    off = int(parallax_x) % (band_w * 2)
    for x in range(off - band_w * 2, WIDTH, band_w * 2):
        pygame.draw.rect(surf, COLOR_BG_BAND, (x, 0, band_w, HEIGHT))


def plane_color(snap: Snapshot):
    """Impact tint for the crash hold window, normal body colour otherwise."""
    if snap.crash is not None and snap.crash.is_holding():
        return COLOR_PLANE_HIT
    return COLOR_PLANE


def _draw_plane(surf: pygame.Surface, snap: Snapshot):
    p = snap.plane
    body = pygame.Surface((p.width, p.height), pygame.SRCALPHA)
    pygame.draw.ellipse(body, plane_color(snap), body.get_rect())
    rotated = pygame.transform.rotate(body, -math.degrees(p.angle))
    r = rotated.get_rect(center=(int(p.center_x), int(p.center_y)))
    surf.blit(rotated, r.topleft)


def _draw_explosion(surf: pygame.Surface, snap: Snapshot):
    c = snap.crash
    if c is None or not c.explosion_visible():
        return
    f = max(0, min(c.frame, EXPLOSION_FRAMES - 1))
    radius = int(EXPLOSION_SIZE * 0.5 * (0.4 + 0.6 * (f + 1) / EXPLOSION_FRAMES))
    pygame.draw.circle(surf, COLOR_EXPLOSION, (int(c.origin_x), int(c.origin_y)), radius)


def draw_world(surf: pygame.Surface, snap: Snapshot, font: Optional[pygame.font.Font] = None):
    """Draw one snapshot. Never mutates it."""
    world = pygame.Surface((WIDTH, HEIGHT))
    _draw_background(world, snap.parallax_x)

    for ob in snap.obstacles:
        pygame.draw.rect(world, COLOR_BUILDING, (int(ob.x), 0, int(ob.width), int(ob.top)))
        pygame.draw.rect(world, COLOR_BUILDING,
                         (int(ob.x), int(ob.gap_bottom), int(ob.width), HEIGHT - int(ob.gap_bottom)))

    if snap.crash_phase not in (CrashPhase.EXPLODING, CrashPhase.RESULT):
        _draw_plane(world, snap)
    _draw_explosion(world, snap)

    if font is not None:
        _draw_hud(world, snap, font)
        _draw_overlays(world, snap, font)

    shake = 0
    if snap.crash is not None and snap.crash.shake_ms > 0:
        shake = int((random.random() - 0.5) * SHAKE_PX)
    surf.fill((0, 0, 0))
    surf.blit(world, (shake, int(shake * 0.65)))

    if snap.crash is not None and snap.crash.flash_ms > 0:
        flash = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        flash.fill((255, 255, 255, int(255 * min(1.0, snap.crash.flash_alpha))))
        surf.blit(flash, (0, 0))


def _draw_hud(surf, snap: Snapshot, font):
    _panel(surf, pygame.Rect(10, 10, 190, 78))
    _text(surf, font, f"Score {snap.score}", (20, 16))
    _text(surf, font, f"Mode: {snap.mode.name}", (20, 36), COLOR_MUTED)
    _text(surf, font, f"Speed: {snap.speed:.1f}", (20, 50), COLOR_MUTED)
    _text(surf, font, f"Near Miss: {snap.near_miss}", (20, 64), COLOR_MUTED)
    best = font.render(f"Best {snap.best}", True, COLOR_MUTED)
    surf.blit(best, (WIDTH - 14 - best.get_width(), 16))


def _draw_overlays(surf, snap: Snapshot, font):
    cx = WIDTH // 2
    if snap.state is RunState.MENU:
        _panel(surf, pygame.Rect(40, 145, 320, 210))
        _text(surf, font, "FLOPPY PLANE", (cx, 170), center=True)
        _text(surf, font, f"{snap.mode.name} MODE", (cx, 200), COLOR_MUTED, center=True)
        _text(surf, font, "Space / Click: Fly", (cx, 240), COLOR_MUTED, center=True)
        _text(surf, font, "M: Toggle ARCADE / PRO", (cx, 260), COLOR_MUTED, center=True)
        _text(surf, font, "Press Space or Click to launch", (cx, 310), COLOR_MUTED, center=True)

    if snap.crash_phase is CrashPhase.RESULT:
        _panel(surf, pygame.Rect(int(RESULT_PANEL_X), RESULT_PANEL_Y, RESULT_PANEL_W, RESULT_PANEL_H), 185)
        _text(surf, font, "CRASHED", (cx, RESULT_PANEL_Y + 30), center=True)
        _text(surf, font, f"Score: {snap.score}", (cx, RESULT_PANEL_Y + 66), COLOR_MUTED, center=True)
        _text(surf, font, f"Best ({snap.mode.name}): {snap.best}", (cx, RESULT_PANEL_Y + 86),
              COLOR_MUTED, center=True)
        btn = pygame.Rect(int(RETRY_BTN_X), int(RETRY_BTN_Y), RETRY_BTN_W, RETRY_BTN_H)
        pygame.draw.rect(surf, COLOR_BUTTON, btn)
        pygame.draw.rect(surf, COLOR_PANEL_EDGE, btn, width=1)
        _text(surf, font, "TRY AGAIN", (btn.centerx, btn.y + 12), center=True)
