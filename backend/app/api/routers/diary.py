"""Diary screen endpoints: list, submit and delete entries."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field

from ...domain.diary.controller import DiaryViewController, DiaryViewState
from ...domain.diary.types import StoreResult
from ..dependencies import get_diary_controller

router = APIRouter(prefix="/api/diary", tags=["diary"])

EntryId = Annotated[str, Path(..., min_length=1, max_length=64)]


class FormState(BaseModel):
    title: str = ""
    mood: str = ""
    content: str = ""


class FormUpdateRequest(BaseModel):
    title: Optional[str] = None
    mood: Optional[str] = None
    content: Optional[str] = None


class EntrySubmitRequest(BaseModel):
    title: str = Field(..., min_length=1)
    mood: str = Field(..., min_length=1, description="How are you feeling today?")
    content: str = Field(..., min_length=1)


class EntryCardResponse(BaseModel):
    id: str
    title: str
    mood: str
    content: str
    created_at: datetime
    display_date: str
    is_deleting: bool
    delete_enabled: bool


class DiaryViewResponse(BaseModel):
    show_loading: bool
    entries: List[EntryCardResponse] = Field(default_factory=list)
    form: FormState
    deleting_ids: List[str] = Field(default_factory=list)


class DiaryActionResponse(BaseModel):
    ok: bool
    outcome: str
    view: DiaryViewResponse


@router.get("", response_model=DiaryViewResponse, summary="Current diary screen")
async def get_diary_view(
    controller: DiaryViewController = Depends(get_diary_controller),
) -> DiaryViewResponse:
    return _serialize_view(controller.snapshot())


@router.post(
    "/refresh",
    response_model=DiaryActionResponse,
    summary="Reload entries from the store",
)
async def refresh_entries(
    controller: DiaryViewController = Depends(get_diary_controller),
) -> DiaryActionResponse:
    result = await controller.refresh()
    return _action_response(result, controller)


@router.put("/form", response_model=FormState, summary="Update form buffers")
async def update_form(
    payload: FormUpdateRequest,
    controller: DiaryViewController = Depends(get_diary_controller),
) -> FormState:
    form = controller.update_form(
        title=payload.title,
        mood=payload.mood,
        content=payload.content,
    )
    return FormState(title=form.title, mood=form.mood, content=form.content)


@router.post(
    "/entries",
    response_model=DiaryActionResponse,
    summary="Save a new diary entry",
)
async def submit_entry(
    payload: EntrySubmitRequest,
    controller: DiaryViewController = Depends(get_diary_controller),
) -> DiaryActionResponse:
    controller.update_form(
        title=payload.title,
        mood=payload.mood,
        content=payload.content,
    )
    result = await controller.submit()
    return _action_response(result, controller)


@router.delete(
    "/entries/{entry_id}",
    response_model=DiaryActionResponse,
    summary="Delete an entry after confirmation",
)
async def delete_entry(
    entry_id: EntryId,
    confirm: bool = Query(False, description="Explicit yes from the confirmation prompt."),
    controller: DiaryViewController = Depends(get_diary_controller),
) -> DiaryActionResponse:
    result = await controller.request_delete(entry_id, confirmed=confirm)
    return _action_response(result, controller)


def _action_response(
    result: StoreResult, controller: DiaryViewController
) -> DiaryActionResponse:
    return DiaryActionResponse(
        ok=result.ok,
        outcome=result.outcome.value,
        view=_serialize_view(controller.snapshot()),
    )


def _serialize_view(state: DiaryViewState) -> DiaryViewResponse:
    return DiaryViewResponse(
        show_loading=state.show_loading,
        entries=[
            EntryCardResponse(
                id=card.id,
                title=card.title,
                mood=card.mood,
                content=card.content,
                created_at=card.created_at,
                display_date=card.display_date,
                is_deleting=card.is_deleting,
                delete_enabled=card.delete_enabled,
            )
            for card in state.cards
        ],
        form=FormState(
            title=state.form.title,
            mood=state.form.mood,
            content=state.form.content,
        ),
        deleting_ids=list(state.deleting_ids),
    )
