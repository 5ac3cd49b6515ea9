"""Reflection journaling endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, Request
from pydantic import BaseModel, Field

from moodmuse.config import get_settings
from moodmuse.reflection.client import ReflectionClient
from moodmuse.reflection.prompts import PromptCategory, ReflectionPrompt, pick_prompts
from moodmuse.reflection.timeline import ChatMessage, Timeline, build_timeline

router = APIRouter(prefix="/api/v1/reflections", tags=["Reflections"])


class PromptsResponse(BaseModel):
    prompts: list[ReflectionPrompt]


class ReplyRequest(BaseModel):
    messages: list[ChatMessage] = Field(min_length=1, max_length=200)


class ReplyResponse(BaseModel):
    reply: str


class TimelineRequest(BaseModel):
    messages: list[ChatMessage]
    pinned_ids: list[str] = []


def get_reflection_client(request: Request) -> ReflectionClient:
    return request.app.state.reflection_client


@router.get("/prompts", response_model=PromptsResponse)
async def list_prompts(
    count: int = Query(5, ge=1, le=12),
    category: PromptCategory | None = Query(None),
):
    """A fresh random selection of journaling prompts."""
    return PromptsResponse(prompts=pick_prompts(count, category))


@router.post("/reply", response_model=ReplyResponse)
async def generate_reply(
    body: ReplyRequest,
    x_api_key: str | None = Header(None),
    client: ReflectionClient = Depends(get_reflection_client),
):
    """Generate a supportive reply to the conversation so far.

    The caller's own key (X-Api-Key) takes precedence over the server key.
    """
    api_key = x_api_key or get_settings().gemini_api_key
    reply = await client.generate_reply(body.messages, api_key)
    return ReplyResponse(reply=reply)


@router.post("/timeline", response_model=Timeline)
async def timeline(body: TimelineRequest):
    return build_timeline(body.messages, set(body.pinned_ids))
