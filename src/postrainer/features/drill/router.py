from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, model_validator

from ...core.models import Answer, IpAnswer, LabelAnswer, SeatAnswer
from ...core.settings import DrillConfig, InvalidConfigError, clamp_players, clamp_timer, parse_mode, parse_naming
from .service import DrillManager

__all__ = ["AnswerRequest", "ConfigRequest", "CreateDrillRequest", "TickRequest", "create_drill_router"]


class ConfigRequest(BaseModel):
    players: int | None = None
    timer: float | None = None
    naming: str | None = None
    mode: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: dict[str, object]) -> dict[str, object]:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, object] = dict(data)
        for field, cast in (("players", int), ("timer", float)):
            value = cleaned.get(field)
            if value in (None, ""):
                cleaned[field] = None
                continue
            if isinstance(value, str):
                try:
                    cleaned[field] = cast(value)
                except ValueError:
                    cleaned[field] = None
        return cleaned

    @model_validator(mode="after")
    def _normalize(self) -> ConfigRequest:
        if self.players is not None:
            self.players = clamp_players(self.players)
        if self.timer is not None:
            self.timer = clamp_timer(self.timer)
        # Unknown names are dropped so the session keeps its current value.
        if self.naming is not None:
            try:
                self.naming = parse_naming(self.naming).value
            except InvalidConfigError:
                self.naming = None
        if self.mode is not None:
            try:
                self.mode = parse_mode(self.mode).value
            except InvalidConfigError:
                self.mode = None
        return self


class CreateDrillRequest(ConfigRequest):
    seed: int | None = None


class AnswerRequest(BaseModel):
    seat: int | None = Field(default=None, ge=0, le=9)
    label: str | None = None
    ip: bool | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> AnswerRequest:
        given = [value for value in (self.seat, self.label, self.ip) if value is not None]
        if len(given) != 1:
            raise ValueError("provide exactly one of 'seat', 'label' or 'ip'")
        return self

    def to_answer(self) -> Answer:
        if self.seat is not None:
            return SeatAnswer(seat=self.seat)
        if self.label is not None:
            return LabelAnswer(label=self.label.strip().upper())
        return IpAnswer(is_ip=bool(self.ip))


class TickRequest(BaseModel):
    elapsed: float = Field(..., ge=0.0)


class _DrillController:
    def __init__(self, manager: DrillManager) -> None:
        self.manager = manager

    async def create(self, body: CreateDrillRequest) -> Response:
        config = DrillConfig.create(players=body.players, timer_seconds=body.timer, naming=body.naming, mode=body.mode)
        session_id = await self.manager.create_session_async(config, seed=body.seed)
        return JSONResponse({"session": session_id})

    async def round(self, sid: str) -> Response:
        try:
            payload = await self.manager.get_round_async(sid)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return JSONResponse(payload.to_dict())

    async def configure(self, sid: str, body: ConfigRequest) -> Response:
        try:
            payload = await self.manager.configure_async(
                sid,
                players=body.players,
                timer_seconds=body.timer,
                naming=body.naming,
                mode=body.mode,
            )
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(400, str(exc)) from exc
        return JSONResponse(payload.to_dict())

    async def answer(self, sid: str, body: AnswerRequest) -> Response:
        try:
            result = await self.manager.answer_async(sid, body.to_answer())
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return JSONResponse(result.to_dict())

    async def tick(self, sid: str, body: TickRequest) -> Response:
        try:
            payload = await self.manager.tick_async(sid, body.elapsed)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return JSONResponse(payload.to_dict())

    async def close(self, sid: str) -> Response:
        try:
            await self.manager.close_async(sid)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return Response(status_code=204)


def create_drill_router(manager: DrillManager) -> APIRouter:
    controller = _DrillController(manager)
    router = APIRouter(prefix="/api/v1/drill", tags=["drill"])

    @router.post("")
    async def create_drill(body: CreateDrillRequest) -> Response:
        return await controller.create(body)

    @router.get("/{sid}/round")
    async def get_round(sid: str) -> Response:
        return await controller.round(sid)

    @router.post("/{sid}/config")
    async def post_config(sid: str, body: ConfigRequest) -> Response:
        return await controller.configure(sid, body)

    @router.post("/{sid}/answer")
    async def post_answer(sid: str, body: AnswerRequest) -> Response:
        return await controller.answer(sid, body)

    @router.post("/{sid}/tick")
    async def post_tick(sid: str, body: TickRequest) -> Response:
        return await controller.tick(sid, body)

    @router.delete("/{sid}", status_code=204)
    async def delete_drill(sid: str) -> Response:
        return await controller.close(sid)

    return router
