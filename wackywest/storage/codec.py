"""
State Codec - GameState <-> JSON-compatible dicts.

The mapping mirrors the dataclasses field for field; enums are stored
by value, positions as [row, col] lists, empty cells as null.
"""

from __future__ import annotations
from dataclasses import asdict
from typing import Any

from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.board import Board, Building, BuildingType, Outhouse, PlacedTile, TileFamily
from ..engine_core.errors import StoreError
from ..engine_core.state import (
    GamePhase,
    GameState,
    PlayerState,
    Tile,
    Vote,
    VoteCard,
    VoteCardKind,
    VotingTile,
    Worker,
)


FORMAT_VERSION = 1


# =============================================================================
# Encoding
# =============================================================================

def _cell_to_dict(cell) -> dict[str, Any] | None:
    if cell is None:
        return None
    if isinstance(cell, Building):
        return {"type": "building", "building_type": cell.building_type.value, "value": cell.value}
    if isinstance(cell, Outhouse):
        return {"type": "outhouse"}
    return {"type": "tile", "family": cell.family.value}


def _tile_to_dict(tile: Tile) -> dict[str, Any]:
    return {"tile_id": tile.tile_id, "family": tile.family.value, "length": tile.length}


def _card_to_dict(card: VoteCard) -> dict[str, Any]:
    return {
        "card_id": card.card_id,
        "kind": card.kind.value,
        "weight": card.weight,
        "label": card.label,
        "used": card.used,
    }


def _player_to_dict(player: PlayerState) -> dict[str, Any]:
    return {
        "player_id": player.player_id,
        "name": player.name,
        "secret_building": player.secret_building.value if player.secret_building else None,
        "hand": [_tile_to_dict(t) for t in player.hand],
        "vote_cards": [_card_to_dict(c) for c in player.vote_cards],
        "ready": player.ready,
    }


def _action_to_dict(action: Action) -> dict[str, Any]:
    payload = {k: v for k, v in asdict(action.payload).items() if v is not None}
    return {
        "action_type": action.action_type.value,
        "payload": payload,
        "timestamp": action.timestamp,
    }


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Encode a GameState as plain JSON types."""
    voting_tile = None
    if state.voting_tile:
        voting_tile = {
            "tile": _tile_to_dict(state.voting_tile.tile),
            "row": state.voting_tile.row,
            "col": state.voting_tile.col,
            "player_id": state.voting_tile.player_id,
        }

    return {
        "format_version": FORMAT_VERSION,
        "game_id": state.game_id,
        "phase": state.phase.value,
        "turn_number": state.turn_number,
        "current_player_idx": state.current_player_idx,
        "players": [_player_to_dict(p) for p in state.players],
        "board": [[_cell_to_dict(cell) for cell in row] for row in state.board.grid],
        "workers": [
            {
                "worker_id": w.worker_id,
                "family": w.family.value,
                "position": list(w.position),
                "active": w.active,
            }
            for w in state.workers
        ],
        "voting_tile": voting_tile,
        "votes": [
            {"player_id": v.player_id, "card": _card_to_dict(v.card)}
            for v in state.votes
        ],
        "action_history": [_action_to_dict(a) for a in state.action_history],
        "random_seed": state.random_seed,
        "last_update": state.last_update,
    }


# =============================================================================
# Decoding
# =============================================================================

def _cell_from_dict(data: dict[str, Any] | None):
    if data is None:
        return None
    kind = data["type"]
    if kind == "building":
        return Building(building_type=BuildingType(data["building_type"]), value=data["value"])
    if kind == "outhouse":
        return Outhouse()
    if kind == "tile":
        return PlacedTile(family=TileFamily(data["family"]))
    raise ValueError(f"Unknown cell type: {kind}")


def _tile_from_dict(data: dict[str, Any]) -> Tile:
    return Tile(tile_id=data["tile_id"], family=TileFamily(data["family"]), length=data["length"])


def _card_from_dict(data: dict[str, Any]) -> VoteCard:
    return VoteCard(
        card_id=data["card_id"],
        kind=VoteCardKind(data["kind"]),
        weight=data["weight"],
        label=data["label"],
        used=data["used"],
    )


def _player_from_dict(data: dict[str, Any]) -> PlayerState:
    building = data.get("secret_building")
    return PlayerState(
        player_id=data["player_id"],
        name=data["name"],
        secret_building=BuildingType(building) if building else None,
        hand=tuple(_tile_from_dict(t) for t in data["hand"]),
        vote_cards=tuple(_card_from_dict(c) for c in data["vote_cards"]),
        ready=data["ready"],
    )


def _action_from_dict(data: dict[str, Any]) -> Action:
    return Action(
        action_type=ActionType(data["action_type"]),
        payload=ActionPayload(**data["payload"]),
        timestamp=data.get("timestamp"),
    )


def state_from_dict(data: dict[str, Any]) -> GameState:
    """
    Decode a dict produced by state_to_dict.

    Raises StoreError if the data is malformed.
    """
    try:
        version = data.get("format_version", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            raise ValueError(f"Unsupported format version {version}")

        voting_tile = None
        if data.get("voting_tile"):
            vt = data["voting_tile"]
            voting_tile = VotingTile(
                tile=_tile_from_dict(vt["tile"]),
                row=vt["row"],
                col=vt["col"],
                player_id=vt["player_id"],
            )

        return GameState(
            game_id=data["game_id"],
            phase=GamePhase(data["phase"]),
            turn_number=data["turn_number"],
            current_player_idx=data["current_player_idx"],
            players=tuple(_player_from_dict(p) for p in data["players"]),
            board=Board(grid=tuple(
                tuple(_cell_from_dict(cell) for cell in row) for row in data["board"]
            )),
            workers=tuple(
                Worker(
                    worker_id=w["worker_id"],
                    family=TileFamily(w["family"]),
                    position=(w["position"][0], w["position"][1]),
                    active=w["active"],
                )
                for w in data["workers"]
            ),
            voting_tile=voting_tile,
            votes=tuple(
                Vote(player_id=v["player_id"], card=_card_from_dict(v["card"]))
                for v in data["votes"]
            ),
            action_history=tuple(_action_from_dict(a) for a in data.get("action_history", [])),
            random_seed=data.get("random_seed", 0),
            last_update=data.get("last_update", 0),
        )
    except (KeyError, TypeError, ValueError, IndexError) as e:
        raise StoreError(f"Corrupt game data: {e}") from e
