"""
Match Routes

Endpoints for creating matches and playing them.
"""

from fastapi import APIRouter, HTTPException

from ..session import session_manager, serialize_event
from ..models import (
    CreateMatchRequest, CreateMatchResponse,
    PlayerActionRequest, ActionResultResponse,
    GameStateResponse
)

router = APIRouter(prefix="/match", tags=["match"])


@router.post("/create", response_model=CreateMatchResponse)
async def create_match(request: CreateMatchRequest) -> CreateMatchResponse:
    """
    Create and start a new match against the scripted opponent.
    """
    session = await session_manager.create_session(
        seed=request.seed,
        player_name=request.player_name
    )
    session.start_game()

    return CreateMatchResponse(
        match_id=session.id,
        seed=session.game.config.seed,
        status="started"
    )


@router.get("/{match_id}/state", response_model=GameStateResponse)
async def get_match_state(match_id: str) -> GameStateResponse:
    """
    Get the current state of a match from the human side's perspective.
    """
    session = session_manager.get_session(match_id)
    if not session:
        raise HTTPException(status_code=404, detail="Match not found")

    return session.get_client_state()


@router.post("/{match_id}/action", response_model=ActionResultResponse)
async def submit_action(
    match_id: str,
    action: PlayerActionRequest
) -> ActionResultResponse:
    """
    Submit a human action.

    Rejected actions report why and leave the match unchanged.
    """
    session = session_manager.get_session(match_id)
    if not session:
        raise HTTPException(status_code=404, detail="Match not found")

    success, message, events = await session.handle_action(action)

    return ActionResultResponse(
        success=success,
        message=message,
        new_state=session.get_client_state(),
        events=[serialize_event(e) for e in events]
    )


@router.delete("/{match_id}")
async def delete_match(match_id: str) -> dict:
    """Discard a match."""
    session = session_manager.get_session(match_id)
    if not session:
        raise HTTPException(status_code=404, detail="Match not found")

    await session_manager.remove_session(match_id)
    return {"status": "deleted", "match_id": match_id}
