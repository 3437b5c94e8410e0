# ========================= input/keymap.py =========================
import pygame
from typing import Dict, Optional
from transport.commands import Command, CommandKind
from transport.state import TransportState

TOGGLE_PLAY = "toggle_play"
TEMPO_UP = "tempo_up"
TEMPO_DOWN = "tempo_down"

# 預設快捷鍵
DEFAULT_KEYMAP: Dict[int, object] = {
    pygame.K_SPACE: TOGGLE_PLAY,
    pygame.K_r: CommandKind.REPLAY,
    pygame.K_n: CommandKind.REGENERATE,
    pygame.K_a: CommandKind.TOGGLE_AUDIO,
    pygame.K_UP: TEMPO_UP,
    pygame.K_DOWN: TEMPO_DOWN,
    pygame.K_KP_PLUS: TEMPO_UP,
    pygame.K_KP_MINUS: TEMPO_DOWN,
}

def resolve(action, state: TransportState, tempo_step: int = 5) -> Optional[Command]:
    """Turn a keymap/button action into a Command for the current transport state."""
    if action == TOGGLE_PLAY:
        return Command(CommandKind.PAUSE if state.is_playing else CommandKind.PLAY)
    if action == TEMPO_UP:
        return Command.set_tempo(state.tempo + tempo_step)
    if action == TEMPO_DOWN:
        return Command.set_tempo(state.tempo - tempo_step)
    if isinstance(action, CommandKind) and action is not CommandKind.SET_TEMPO:
        return Command(action)
    return None

def command_for_key(key: int, state: TransportState, tempo_step: int = 5,
                    keymap: Optional[Dict[int, object]] = None) -> Optional[Command]:
    action = (keymap or DEFAULT_KEYMAP).get(key)
    return resolve(action, state, tempo_step) if action is not None else None
