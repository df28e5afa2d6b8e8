from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ExerciseCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    target: Optional[str] = None
    body_part: Optional[str] = Field(
        None, validation_alias=AliasChoices("body_part", "bodyPart")
    )
    equipment: Optional[str] = None
    gif_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("gif_url", "gifUrl")
    )


class ExerciseCatalogEntry(BaseModel):
    """Упражнение из справочника. Принимает dict, ORM-объект или модель."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: Optional[int | str] = None
    name: Optional[str] = None
    target: Optional[str] = None
    body_part: Optional[str] = Field(
        None, validation_alias=AliasChoices("body_part", "bodyPart")
    )
    equipment: Optional[str] = None
    gif_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("gif_url", "gifUrl")
    )
