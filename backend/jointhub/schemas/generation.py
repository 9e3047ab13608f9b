"""
Pydantic schemas for the generation proxy endpoints.
The request shapes mirror what the chat client already speaks: Gemini-style
``contents`` for text and Imagen-style ``instances`` for images.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel

class TextPart(BaseModel):
    text: str

class Content(BaseModel):
    role: str = "user"
    parts: List[Dict[str, Any]]  # text, inlineData, ... forwarded as sent

class SystemInstruction(BaseModel):
    parts: List[TextPart] = []

class GenerateTextIn(BaseModel):
    contents: Optional[List[Content]] = None  # Emptiness is checked by the gateway
    systemInstruction: Optional[SystemInstruction] = None

class ImageInstance(BaseModel):
    prompt: Optional[str] = None

class GenerateImageIn(BaseModel):
    instances: Optional[List[ImageInstance]] = None

class GenerateImageOut(BaseModel):
    imageBase64: str

def candidate_response(text: str) -> dict[str, Any]:
    """Wrap generated text in the single-candidate shape the client reads."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}
