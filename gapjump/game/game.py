# gapjump/game/game.py
import argparse
import logging
import pygame
from pygame import K_SPACE, K_ESCAPE
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT
from .render import draw_snapshot
from .simulation import Simulation


def parse_args(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Wall seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--width", type=int, default=WIDTH, help="Initial window width")
    p.add_argument("--height", type=int, default=HEIGHT, help="Initial window height")
    p.add_argument("--fps", type=int, default=FPS, help="Frame (= tick) rate")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def resolve_seed(seed_arg):
    # None -> SEED_DEFAULT; -1 -> random
    if seed_arg is None:
        return SEED_DEFAULT
    if seed_arg == -1:
        return None
    return seed_arg


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    sim = Simulation(seed=resolve_seed(args.seed))

    pygame.init()
    try:
        pygame.display.set_caption("gapjump")
        screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == K_ESCAPE:
                        running = False
                    elif event.key == K_SPACE:
                        sim.jump()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    sim.jump()
                elif event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)

            # Viewport is read fresh every frame; the sim caches nothing from it.
            snap = sim.advance(*screen.get_size())
            draw_snapshot(screen, snap)
            pygame.display.flip()
            clock.tick(args.fps)
    finally:
        pygame.quit()


if __name__ == "__main__":
    run()
