"""
락커 그룹 관련 Pydantic 모델
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional


class LockerGroupCreate(BaseModel):
    """락커 그룹 생성"""
    name: str = Field(..., description="그룹명", max_length=50)
    start_number: int = Field(..., gt=0, description="시작 번호")
    end_number: int = Field(..., gt=0, description="종료 번호")
    sort_order: int = Field(0, description="표시 순서")

    @model_validator(mode="after")
    def check_range(self):
        if self.start_number > self.end_number:
            raise ValueError("시작 번호는 종료 번호보다 작거나 같아야 합니다")
        return self


class LockerGroupUpdate(BaseModel):
    """락커 그룹 수정"""
    name: Optional[str] = Field(None, description="그룹명", max_length=50)
    start_number: Optional[int] = Field(None, gt=0, description="시작 번호")
    end_number: Optional[int] = Field(None, gt=0, description="종료 번호")
    sort_order: Optional[int] = Field(None, description="표시 순서")


class LockerGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    start_number: int
    end_number: int
    sort_order: int
