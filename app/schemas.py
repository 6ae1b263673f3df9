from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Payload fields are typed ``Any`` on purpose: shape errors are reported by
# the validation engine, not by pydantic.  Unknown keys are ignored.


# --- Category ---

class CategoryPayload(BaseModel):
    name: Any = None
    parent: Any = None
    model_config = ConfigDict(extra="ignore")


class CategoryMove(BaseModel):
    category_id: Any = Field(None, validation_alias="categoryId")
    model_config = ConfigDict(extra="ignore")


class CategoryResponse(BaseModel):
    id: str = Field(serialization_alias="_id")
    name: str
    parent: str | None
    is_deleted: bool = Field(serialization_alias="isDeleted")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")
    model_config = ConfigDict(from_attributes=True)


class MoveResponse(BaseModel):
    moved: int


# --- Article ---

class ArticlePayload(BaseModel):
    name: Any = None
    category_id: Any = Field(None, validation_alias="categoryId")
    text: Any = None
    description: Any = None
    model_config = ConfigDict(extra="ignore")


class ArticleResponse(BaseModel):
    id: str = Field(serialization_alias="_id")
    category_id: str = Field(serialization_alias="categoryId")
    name: str
    text: str | None
    description: str | None
    is_deleted: bool = Field(serialization_alias="isDeleted")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")
    model_config = ConfigDict(from_attributes=True)


# --- Errors ---

class ErrorItem(BaseModel):
    param: str
    message: str
