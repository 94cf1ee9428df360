"""Product interaction tracking endpoint."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field

from search_service.dependencies import get_search_service
from search_service.schemas import CamelModel, InteractionType
from search_service.services import SearchService

router = APIRouter()


class InteractionRequest(CamelModel):
    """Request model for tracking a product interaction."""

    user_id: str | None = Field(None, description="User identifier")
    product_id: str | None = Field(None, description="Product identifier")
    type: InteractionType = Field(InteractionType.VIEW, description="view, click or cart")


class InteractionResponse(CamelModel):
    success: bool
    message: str


@router.post("", response_model=InteractionResponse)
async def track_interaction(
    interaction: InteractionRequest,
    service: SearchService = Depends(get_search_service),
) -> InteractionResponse:
    """
    Track a product interaction for personalization.

    **Interaction Types:**
    - `view`: User viewed a product page
    - `click`: User clicked a product in results
    - `cart`: User added the product to cart

    Views and clicks boost the product in the user's future searches.
    """
    if not interaction.user_id or not interaction.product_id:
        raise HTTPException(status_code=400, detail="userId and productId are required")

    service.track_interaction(interaction.user_id, interaction.product_id, interaction.type)

    return InteractionResponse(success=True, message="Interaction tracked")
