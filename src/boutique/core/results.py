"""API representations of document-store write results."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for response/request bodies exchanged in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InsertResult(ApiModel):
    acknowledged: bool = Field(..., description="Whether the write was acknowledged")
    inserted_id: UUID = Field(..., description="ID of the inserted document")

    @classmethod
    def from_pymongo(cls, result: Any) -> "InsertResult":
        return cls(acknowledged=result.acknowledged, inserted_id=result.inserted_id)


class UpdateResult(ApiModel):
    acknowledged: bool = Field(..., description="Whether the write was acknowledged")
    matched_count: int = Field(..., description="Number of documents matched by the filter", ge=0)
    modified_count: int = Field(..., description="Number of documents modified", ge=0)

    @classmethod
    def from_pymongo(cls, result: Any) -> "UpdateResult":
        return cls(
            acknowledged=result.acknowledged, matched_count=result.matched_count, modified_count=result.modified_count
        )


class DeleteResult(ApiModel):
    acknowledged: bool = Field(..., description="Whether the write was acknowledged")
    deleted_count: int = Field(..., description="Number of documents deleted", ge=0)

    @classmethod
    def from_pymongo(cls, result: Any) -> "DeleteResult":
        return cls(acknowledged=result.acknowledged, deleted_count=result.deleted_count)
