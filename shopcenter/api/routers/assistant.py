# shopcenter/api/routers/assistant.py
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from shopcenter.data.database import get_db
from shopcenter.domain.schemas import ChatIn, ChatOut, ProductOut, RecommendationIn
from shopcenter.services.assistant import ShoppingAssistant

router = APIRouter(prefix="/assistant", tags=["assistant"])


def get_assistant(request: Request, db: Session = Depends(get_db)) -> ShoppingAssistant:
    return ShoppingAssistant(db, request.app.state.generator)


@router.post("/chat", response_model=ChatOut)
def chat(payload: ChatIn, assistant: ShoppingAssistant = Depends(get_assistant)):
    return {"response": assistant.generate_response(payload.message, payload.history)}


@router.post("/recommendations", response_model=List[ProductOut])
def recommendations(payload: RecommendationIn, assistant: ShoppingAssistant = Depends(get_assistant)):
    return assistant.get_product_recommendations(payload.query)
