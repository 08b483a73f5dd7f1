from __future__ import annotations
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr

# JSON numbers only: no numeric strings, no booleans
Number = Union[StrictInt, StrictFloat]


class Position(BaseModel):
    x: Optional[float] = None
    y: Optional[float] = None


class Size(BaseModel):
    width: Optional[float] = None
    height: Optional[float] = None


class CardBody(BaseModel):
    """External card fields accepted by full writes (create and replace)."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    content: Optional[str] = None
    position: Optional[Position] = None
    size: Optional[Size] = None


class CardCreate(CardBody):
    messageId: Optional[int] = None


class StrictPosition(BaseModel):
    x: Number
    y: Number


class StrictSize(BaseModel):
    width: Number
    height: Number


class MoveRequest(BaseModel):
    position: StrictPosition


class ResizeRequest(BaseModel):
    size: StrictSize


class ContentRequest(BaseModel):
    content: StrictStr


class TitleRequest(BaseModel):
    title: StrictStr
