from pydantic import BaseModel, ConfigDict, Field


class PresignRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str = Field(min_length=1)
    content_type: str = Field(alias="contentType", pattern=r"^image/")


class PresignResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    presigned_url: str = Field(serialization_alias="presignedUrl")
    key: str
    public_url: str = Field(serialization_alias="publicUrl")
    method: str = "PUT"
    expires_in: int = Field(serialization_alias="expiresIn")
