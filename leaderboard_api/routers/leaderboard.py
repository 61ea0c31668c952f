import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from redis.asyncio import Redis

from leaderboard_api.converter import DataConverter
from leaderboard_api.create_redis_client import get_redis
from leaderboard_api.domain.leaderboard_rules import parse_score_param, sanitize_name
from leaderboard_api.models.dc_models import (
    DeviceTypeModel,
    ErrorModel,
    LeaderboardEntryModel,
    QualificationModel,
    ScoreSubmissionModel,
    SubmitResultModel,
)
from leaderboard_api.services.leaderboard_store import LeaderboardStore

leaderboard_router = APIRouter(prefix="/api")
data_converter = DataConverter()


def get_now() -> datetime:
    """Server local time, the clock every partition key is derived from."""
    return datetime.now()


def get_store(redis: Redis = Depends(get_redis)) -> LeaderboardStore:
    return LeaderboardStore(redis)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


class ScoreAPI:
    @staticmethod
    @leaderboard_router.post(
        "/score",
        response_model=SubmitResultModel,
        responses={400: {"model": ErrorModel}, 500: {"model": ErrorModel}},
    )
    async def submit_score(
        request: Request,
        store: LeaderboardStore = Depends(get_store),
        now: datetime = Depends(get_now),
    ):
        # Parsed by hand so that text/plain bodies are read as JSON too.
        body = await request.body()
        try:
            submission = ScoreSubmissionModel.model_validate_json(body)
        except ValidationError as e:
            if any(error["type"] == "json_invalid" for error in e.errors()):
                logging.error(f"Failed to parse score body: {e}")
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error"
                )
            logging.info(f"Rejected score submission: {e.errors()}")
            return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")

        clean_name = sanitize_name(submission.name)
        if not clean_name:
            return error_response(status.HTTP_400_BAD_REQUEST, "Invalid name")

        try:
            await store.add_score(
                clean_name, submission.score, submission.device_type, now
            )
        except Exception as e:
            logging.error(f"Failed to add score: {e}")
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")
        return SubmitResultModel(success=True)


class LeaderboardAPI:
    @staticmethod
    @leaderboard_router.get(
        "/leaderboard",
        response_model=List[LeaderboardEntryModel],
        responses={500: {"model": ErrorModel}},
    )
    async def get_leaderboard(
        deviceType: Optional[str] = None,
        store: LeaderboardStore = Depends(get_store),
        now: datetime = Depends(get_now),
    ):
        device_type = DeviceTypeModel.from_query(deviceType)
        try:
            pairs = await store.read_top(device_type, now)
        except Exception as e:
            logging.error(f"Failed to load leaderboard: {e}")
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to load leaderboard"
            )
        return data_converter.convert_pairs_to_entries(pairs)

    @staticmethod
    @leaderboard_router.get(
        "/check-score",
        response_model=QualificationModel,
        responses={500: {"model": ErrorModel}},
    )
    async def check_score(
        score: Optional[str] = None,
        deviceType: Optional[str] = None,
        store: LeaderboardStore = Depends(get_store),
        now: datetime = Depends(get_now),
    ):
        candidate = parse_score_param(score)
        device_type = DeviceTypeModel.from_query(deviceType)
        try:
            result = await store.check_qualification(candidate, device_type, now)
        except Exception as e:
            logging.error(f"Failed to check score: {e}")
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to check score"
            )
        return QualificationModel(qualifies=result)
