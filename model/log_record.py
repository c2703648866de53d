# model/log_record.py
from pydantic import BaseModel


class LogRecord(BaseModel):
    id: int
    created: str
    content: str
