# src/flight/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_m

from .config import WIDTH, HEIGHT, FPS, BEST_SCORE_FILE
from .audio import CrashCue
from .clock import SimulationClock
from .controller import RunController
from .level import SeededRandom
from .modes import get_mode
from .render import draw_world
from .scoring import JsonBestScoreStore


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Floppy Plane")
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed. Omit for a random seed each launch.")
    p.add_argument("--mode", type=str, default="PRO", choices=["ARCADE", "PRO"],
                   help="Starting mode (M toggles it on the menu).")
    p.add_argument("--best-file", type=str, default=BEST_SCORE_FILE,
                   help="JSON file holding best scores per mode.")
    p.add_argument("--crash-sound", type=str, default="crash.wav",
                   help="Crash sound played once per death (optional).")
    p.add_argument("--verbose", action="store_true", help="Log state transitions")
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    pygame.display.set_caption("Floppy Plane")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    frame_clock = pygame.time.Clock()
    font = pygame.font.SysFont("segoeui", 14)

    rng = SeededRandom(args.seed)
    ctrl = RunController(
        mode=get_mode(args.mode),
        rng=rng,
        store=JsonBestScoreStore(args.best_file),
        crash_cue=CrashCue(args.crash_sound),
    )
    sim_clock = SimulationClock()
    print(f"Floppy Plane  seed={rng.seed}  mode={ctrl.mode.name}")

    while True:
        frame_clock.tick(FPS)

        # commands only between ticks
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    ctrl.flap()
                if event.key == K_m:
                    ctrl.toggle_mode()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                ctrl.pointer_down(*event.pos)

        for _ in range(sim_clock.advance(pygame.time.get_ticks())):
            ctrl.step()

        draw_world(screen, ctrl.snapshot(), font)
        pygame.display.flip()


if __name__ == "__main__":
    run()
