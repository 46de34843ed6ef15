"""
Cards Routes

Endpoints for querying the card catalog.
"""

from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from ..models import CardDefinitionData, CardListResponse

from riftduel.cards import CORE_SET
from riftduel.engine.types import CardDefinition, CardType

router = APIRouter(prefix="/cards", tags=["cards"])


def card_def_to_data(card_def: CardDefinition) -> CardDefinitionData:
    """Convert a CardDefinition to CardDefinitionData."""
    return CardDefinitionData(
        id=card_def.id,
        name=card_def.name,
        type=card_def.type.value,
        cost=card_def.cost,
        attack=card_def.attack,
        health=card_def.health,
        durability=card_def.durability,
        text=card_def.text,
        mechanics=sorted(card_def.mechanics),
        requires_target=card_def.requires_target,
        target_type=card_def.target_type.value if card_def.target_type else None
    )


@router.get("", response_model=CardListResponse)
async def list_cards(
    type_filter: Optional[str] = Query(None, description="Filter by card type (Creature, Spell, Artifact)"),
    name_search: Optional[str] = Query(None, description="Search by card name")
) -> CardListResponse:
    """
    List the catalog in id order.
    """
    cards = []

    for card_def in CORE_SET:
        if type_filter:
            try:
                if card_def.type != CardType(type_filter.capitalize()):
                    continue
            except ValueError:
                raise HTTPException(status_code=400, detail=f"Unknown card type '{type_filter}'")

        if name_search and name_search.lower() not in card_def.name.lower():
            continue

        cards.append(card_def_to_data(card_def))

    return CardListResponse(cards=cards, total=len(cards))


@router.get("/{card_id}", response_model=CardDefinitionData)
async def get_card(card_id: int) -> CardDefinitionData:
    """
    Get details for a specific card by catalog id.
    """
    for card_def in CORE_SET:
        if card_def.id == card_id:
            return card_def_to_data(card_def)

    raise HTTPException(status_code=404, detail=f"Card {card_id} not found")
