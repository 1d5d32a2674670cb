"""Pure game-state transitions, one module per intent family."""

from seabattle.game.app.services.action_flow import clear_shots, move, queue_shot, select_unit, unqueue_shot
from seabattle.game.app.services.deployment_flow import confirm_deployment, deploy, select_deployment_cell
from seabattle.game.app.services.match_setup import end_game, init_game, lobby_state, reset_game
from seabattle.game.app.services.phase_flow import PhaseFlowService
from seabattle.game.app.services.server_sync import (
    GameEnded,
    ServerEvent,
    ShotResolved,
    TurnAdvanced,
    UnitDeployed,
    UnitMoved,
    apply_server_event,
    decode_server_event,
    encode_server_event,
)
from seabattle.game.app.services.turn_flow import (
    complete_turn,
    confirm_turn,
    handle_timeout,
    start_match,
    tick,
)

__all__ = [
    "GameEnded",
    "PhaseFlowService",
    "ServerEvent",
    "ShotResolved",
    "TurnAdvanced",
    "UnitDeployed",
    "UnitMoved",
    "apply_server_event",
    "clear_shots",
    "complete_turn",
    "confirm_deployment",
    "confirm_turn",
    "decode_server_event",
    "deploy",
    "encode_server_event",
    "end_game",
    "handle_timeout",
    "init_game",
    "lobby_state",
    "move",
    "queue_shot",
    "reset_game",
    "select_deployment_cell",
    "select_unit",
    "start_match",
    "tick",
    "unqueue_shot",
]
