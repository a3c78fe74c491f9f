"""Response schemas for the image upload endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class UploadedFile(BaseModel):
    """Descriptor of one stored upload."""

    originalname: str = Field(..., description="File name as sent by the client.")
    filename: str = Field(..., description="Storage name on disk.")
    mimetype: str
    size: int = Field(..., ge=0, description="Size in bytes.")
    path: str = Field(..., description="Path of the stored file relative to the working directory.")
    url: str = Field(..., description="Public URL the file is served from.")


class UploadResponse(BaseModel):
    """Response after storing a batch of images and their metadata."""

    files: list[UploadedFile] = Field(default_factory=list)
    processing_time: float = Field(
        ...,
        ge=0,
        alias="processingTime",
        description="Seconds spent handling the upload.",
    )

    model_config = ConfigDict(populate_by_name=True)
