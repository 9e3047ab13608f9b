from fastapi import APIRouter, Depends

from jointhub.api.deps import generation_access
from jointhub.schemas.generation import (
    GenerateImageIn,
    GenerateImageOut,
    GenerateTextIn,
    candidate_response,
)
from jointhub.services.generation import generation_gateway

router = APIRouter(tags=["generation"], dependencies=[Depends(generation_access)])

@router.post("/generate-text")
async def generate_text(body: GenerateTextIn):
    """
    Proxy a conversation to the text model.

    Returns the reply wrapped as a single candidate:
        {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}

    Errors:
        400 INVALID_INPUT: contents missing or empty (no provider call is made)
        500 UPSTREAM_ERROR: provider failure, message passed through
    """
    contents = [c.model_dump() for c in body.contents] if body.contents else None
    instruction = None
    if body.systemInstruction and body.systemInstruction.parts:
        instruction = body.systemInstruction.parts[0].text
    text = await generation_gateway.generate_text(contents, instruction)
    return candidate_response(text)

@router.post("/generate-image", response_model=GenerateImageOut)
async def generate_image(body: GenerateImageIn):
    """
    Proxy an image prompt to the image model.

    Errors:
        400 INVALID_INPUT: no prompt given
        500 UPSTREAM_ERROR: provider failure or no image data returned
    """
    prompt = body.instances[0].prompt if body.instances else None
    image = await generation_gateway.generate_image(prompt)
    return {"imageBase64": image}
