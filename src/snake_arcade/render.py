# render.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import pygame # type: ignore

from .config import (
    WIDTH, HEIGHT, CELL_SIZE, HEADER_H, GRID_SIZE,
    BG, GRID_LINE, GREEN, HEAD, RED, YELLOW, TEXT, DIM,
    Status,
)
from .difficulty import DIFFICULTY_TABLE, Difficulty, settings_for
from .state import GameState

Color = Tuple[int, int, int]

# ---------- View model ----------
@dataclass
class Overlay:
    """Everything drawn on top of the board that isn't part of GameState."""
    high_score: int = 0
    comment: Optional[str] = None
    awaiting_name: bool = False
    name_buffer: str = ""
    show_ranking: bool = False
    ranking: Sequence = ()
    audio_on: bool = True

# ---------- Helpers ----------
def cell_rect(gx: int, gy: int) -> pygame.Rect:
    return pygame.Rect(gx * CELL_SIZE, HEADER_H + gy * CELL_SIZE, CELL_SIZE, CELL_SIZE)

def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Color, inset: int = 1) -> None:
    pygame.draw.rect(screen, color, cell_rect(gx, gy).inflate(-2 * inset, -2 * inset))

def _text(screen, font, msg: str, color: Color, center: Tuple[int, int]) -> None:
    surf = font.render(msg, True, color)
    screen.blit(surf, surf.get_rect(center=center))

def _dim(screen: pygame.Surface, alpha: int) -> None:
    overlay = pygame.Surface((WIDTH, HEIGHT - HEADER_H), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, alpha))
    screen.blit(overlay, (0, HEADER_H))

def make_fonts() -> dict:
    return {
        "small": pygame.font.SysFont(None, 20),
        "body": pygame.font.SysFont(None, 26),
        "title": pygame.font.SysFont(None, 44),
    }

# ---------- Board ----------
def draw_board(screen: pygame.Surface, state: GameState) -> None:
    screen.fill(BG)
    for i in range(GRID_SIZE + 1):
        pygame.draw.line(screen, GRID_LINE, (i * CELL_SIZE, HEADER_H), (i * CELL_SIZE, HEIGHT))
        pygame.draw.line(screen, GRID_LINE, (0, HEADER_H + i * CELL_SIZE), (WIDTH, HEADER_H + i * CELL_SIZE))

    if state.item is not None:
        draw_cell(screen, state.item[0], state.item[1], RED, inset=3)
    head, body = state.actor[0], state.actor[1:]
    for x, y in body:
        draw_cell(screen, x, y, GREEN)
    draw_cell(screen, head[0], head[1], HEAD)

def draw_header(screen: pygame.Surface, fonts: dict, state: GameState, view: Overlay) -> None:
    label = settings_for(state.difficulty).label
    screen.blit(fonts["body"].render("SNAKE ARCADE", True, TEXT), (8, 6))
    screen.blit(fonts["small"].render(f"{label}   {'SOUND ON' if view.audio_on else 'MUTED'}", True, DIM), (8, 32))
    best = fonts["small"].render(f"BEST: {view.high_score}", True, DIM)
    screen.blit(best, best.get_rect(topright=(WIDTH - 8, 6)))
    score = fonts["title"].render(f"{state.score:03d}", True, GREEN)
    screen.blit(score, score.get_rect(topright=(WIDTH - 8, 20)))

# ---------- Overlays ----------
def draw_idle(screen, fonts, state: GameState) -> None:
    _dim(screen, 200)
    cx, cy = WIDTH // 2, HEADER_H + (HEIGHT - HEADER_H) // 2
    _text(screen, fonts["title"], "PRESS START", TEXT, (cx, cy - 80))
    for i, diff in enumerate(Difficulty):
        cfg = DIFFICULTY_TABLE[diff]
        color = YELLOW if diff is state.difficulty else DIM
        _text(screen, fonts["body"], f"[{i + 1}] {cfg.label}  {cfg.points} pt", color, (cx, cy - 30 + i * 26))
    _text(screen, fonts["small"], "Eat the food. Avoid walls and your tail.", TEXT, (cx, cy + 60))
    _text(screen, fonts["small"], "Arrows/WASD move  SPACE start  L ranking  M sound", DIM, (cx, cy + 84))

def draw_paused(screen, fonts) -> None:
    _dim(screen, 110)
    _text(screen, fonts["title"], "PAUSED", TEXT, (WIDTH // 2, HEADER_H + (HEIGHT - HEADER_H) // 2))

def draw_game_over(screen, fonts, state: GameState, view: Overlay) -> None:
    _dim(screen, 215)
    cx, cy = WIDTH // 2, HEADER_H + (HEIGHT - HEADER_H) // 2
    _text(screen, fonts["title"], "GAME OVER", RED, (cx, cy - 70))
    _text(screen, fonts["body"], f"Score: {state.score}", TEXT, (cx, cy - 30))
    if view.awaiting_name:
        _text(screen, fonts["body"], "NEW RECORD! Enter your initials:", YELLOW, (cx, cy + 10))
        _text(screen, fonts["title"], (view.name_buffer + "___")[:3], YELLOW, (cx, cy + 48))
    else:
        remark = f'"{view.comment}"' if view.comment else "Analyzing your moves..."
        _text(screen, fonts["small"], remark, TEXT, (cx, cy + 10))
        _text(screen, fonts["small"], "SPACE play again   L ranking   C share", DIM, (cx, cy + 60))

def draw_ranking(screen, fonts, view: Overlay) -> None:
    _dim(screen, 235)
    cx, top = WIDTH // 2, HEADER_H + 40
    _text(screen, fonts["title"], "TOP 5", YELLOW, (cx, top))
    if not view.ranking:
        _text(screen, fonts["body"], "No records yet. Play now!", DIM, (cx, top + 60))
    for i, entry in enumerate(view.ranking):
        color = YELLOW if i == 0 else TEXT
        line = f"{i + 1}. {entry.name:<3}  {settings_for(entry.difficulty).label:<6}  {entry.score:>4}"
        _text(screen, fonts["body"], line, color, (cx, top + 50 + i * 30))
    _text(screen, fonts["small"], "L back", DIM, (cx, HEIGHT - 24))

def draw_frame(screen: pygame.Surface, fonts: dict, state: GameState, view: Overlay) -> None:
    draw_board(screen, state)
    draw_header(screen, fonts, state, view)
    if view.show_ranking:
        draw_ranking(screen, fonts, view)
    elif state.status is Status.IDLE:
        draw_idle(screen, fonts, state)
    elif state.status is Status.PAUSED:
        draw_paused(screen, fonts)
    elif state.status is Status.GAME_OVER:
        draw_game_over(screen, fonts, state, view)
