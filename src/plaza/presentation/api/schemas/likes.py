"""Like schemas."""

from plaza.application.dtos import LikerView, LikeResult
from plaza.presentation.api.schemas.common import CamelModel


class LikeResponse(CamelModel):
    target_type: str
    target_id: int
    liked: bool
    like_count: int

    @classmethod
    def from_result(cls, result: LikeResult) -> "LikeResponse":
        return cls(
            target_type=result.target_type,
            target_id=result.target_id,
            liked=result.liked,
            like_count=result.like_count,
        )


class LikerResponse(CamelModel):
    id: int
    name: str

    @classmethod
    def from_view(cls, view: LikerView) -> "LikerResponse":
        return cls(id=view.id, name=view.name)
