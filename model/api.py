# model/api.py
from typing import List, Literal
from pydantic import BaseModel
from model.log_record import LogRecord


class StatusResponse(BaseModel):
    exists: bool
    isOwner: bool
    canGenerateBearer: bool


class BearerResponse(BaseModel):
    bearer: str


class ContentResponse(BaseModel):
    content: List[LogRecord]


class DeleteResponse(BaseModel):
    success: Literal[True] = True


class ErrorResponse(BaseModel):
    error: str
