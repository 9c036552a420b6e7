from pydantic import BaseModel, Field


class ImportacaoRequestDTO(BaseModel):
    path: str = Field(min_length=1)
