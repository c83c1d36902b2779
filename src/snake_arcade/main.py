# main.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import argparse
import logging
import random

import pygame # type: ignore

from .audio import AudioService
from .commentary import CommentaryService
from .config import WIDTH, HEIGHT, Config, Direction, Intent, Status
from .difficulty import Difficulty
from .driver import TickDriver
from .engine import Engine
from .render import Overlay, draw_frame, make_fonts
from .session import LeaderboardStore, Session, share_message

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,       pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,   pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,   pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}
KEY_DIFFICULTY = {
    pygame.K_1: Difficulty.EASY,
    pygame.K_2: Difficulty.MEDIUM,
    pygame.K_3: Difficulty.HARD,
}
CONFIRM_KEYS = (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER)


# ---------- Host ----------
@dataclass
class Host:
    """Everything the window loop needs besides pygame itself."""
    engine: Engine
    session: Session
    audio: AudioService
    commentary: CommentaryService
    driver: Optional[TickDriver] = None
    view: Overlay = field(default_factory=Overlay)

    def sync_view(self) -> Overlay:
        self.view.high_score = max(self.session.high_score, self.engine.get_state().high_score)
        self.view.comment = self.commentary.comment
        self.view.awaiting_name = self.session.awaiting_name
        self.view.ranking = list(self.session.ranking)
        self.view.audio_on = self.audio.enabled
        return self.view


def build_host(cfg: Config, clock=None) -> Host:
    session = Session(LeaderboardStore(cfg.leaderboard_path))
    rng = random.Random(cfg.seed)
    engine = Engine(
        difficulty=Difficulty.parse(cfg.difficulty),
        high_score=session.high_score,
        rng=rng,
    )
    audio = AudioService(enabled=cfg.audio_enabled, volume=cfg.volume)
    commentary = CommentaryService(
        model=cfg.commentary_model,
        timeout=cfg.commentary_timeout,
        high_score=session.high_score,
    )
    session.bind(engine)
    engine.subscribe(audio)
    engine.subscribe(commentary)
    return Host(engine, session, audio, commentary, TickDriver(engine, clock))


def restart(host: Host, then_play: bool) -> None:
    host.commentary.reset()
    host.session.dismiss()
    host.view.name_buffer = ""
    host.engine.submit_control_intent(Intent.RESTART)
    if then_play:
        host.engine.submit_control_intent(Intent.TOGGLE)


def _handle_name_entry(host: Host, event) -> None:
    if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
        entry = host.session.save_score(host.view.name_buffer)
        if entry is not None:
            host.view.name_buffer = ""
            host.view.show_ranking = True
    elif event.key == pygame.K_BACKSPACE:
        host.view.name_buffer = host.view.name_buffer[:-1]
    elif event.key == pygame.K_ESCAPE:
        host.session.dismiss()
        host.view.name_buffer = ""
    elif event.unicode and event.unicode.isalnum() and len(host.view.name_buffer) < 3:
        host.view.name_buffer += event.unicode.upper()


def handle_event(host: Host, event) -> bool:
    """Route one pygame event to the engine. Return False to quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type != pygame.KEYDOWN:
        return True

    # typing initials swallows every other binding
    if host.session.awaiting_name and host.engine.status is Status.GAME_OVER:
        _handle_name_entry(host, event)
        return True

    if host.view.show_ranking:
        if event.key in CONFIRM_KEYS or event.key in (pygame.K_l, pygame.K_ESCAPE):
            host.view.show_ranking = False
        return True

    status = host.engine.status
    if event.key == pygame.K_ESCAPE:
        return False
    if event.key in KEY_DIRECTIONS:
        host.engine.submit_direction(KEY_DIRECTIONS[event.key])
    elif event.key in CONFIRM_KEYS:
        if status is Status.GAME_OVER:
            restart(host, then_play=True)
        else:
            host.engine.submit_control_intent(Intent.TOGGLE)
    elif event.key == pygame.K_p:
        host.engine.submit_control_intent(Intent.TOGGLE)
    elif event.key == pygame.K_r:
        if status is Status.GAME_OVER:
            restart(host, then_play=False)
    elif event.key in KEY_DIFFICULTY:
        host.engine.set_difficulty(KEY_DIFFICULTY[event.key])
    elif event.key == pygame.K_m:
        host.audio.toggle()
    elif event.key == pygame.K_l:
        host.view.show_ranking = True
    elif event.key == pygame.K_c and status is Status.GAME_OVER:
        state = host.engine.get_state()
        print(share_message(state.score, state.difficulty))
    return True


def run(cfg: Config) -> None:
    pygame.init()
    fonts = make_fonts()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Snake Arcade")
    clock = pygame.time.Clock()

    host = build_host(cfg, clock=pygame.time.get_ticks)
    logger.info("Starting on %s (seed=%s, high score %d)",
                cfg.difficulty, cfg.seed, host.session.high_score)
    running = True
    try:
        while running:
            # 1) input
            for event in pygame.event.get():
                if not handle_event(host, event):
                    running = False
                    break

            # 2) update
            host.driver.poll()

            # 3) render
            draw_frame(screen, fonts, host.engine.get_state(), host.sync_view())
            pygame.display.flip()
            clock.tick(cfg.fps)  # high FPS; movement gated by the tick driver
    finally:
        host.commentary.close()
        pygame.quit()


def parse_args(argv=None) -> Config:
    cfg = Config.from_env()
    parser = argparse.ArgumentParser(description="Classic single-player snake.")
    parser.add_argument(
        "--difficulty",
        type=str.upper,
        default=cfg.difficulty,
        choices=[d.value for d in Difficulty],
    )
    parser.add_argument("--seed", type=int, default=cfg.seed, help="seed for food placement")
    parser.add_argument("--fps", type=int, default=cfg.fps)
    parser.add_argument("--mute", action="store_true", help="start with sound off")
    parser.add_argument("--leaderboard", type=str, default=cfg.leaderboard_path,
                        help="JSON file holding the high score and top 5")
    parser.add_argument("--model", type=str, default=cfg.commentary_model,
                        help="chat model used for the game-over remark")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    cfg.difficulty = args.difficulty
    cfg.seed = args.seed
    cfg.fps = args.fps
    cfg.audio_enabled = not args.mute
    cfg.leaderboard_path = args.leaderboard
    cfg.commentary_model = args.model
    return cfg


def main(argv=None):
    run(parse_args(argv))

if __name__ == "__main__":
    main()
