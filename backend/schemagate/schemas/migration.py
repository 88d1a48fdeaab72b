from pydantic import BaseModel


class MigrationRecord(BaseModel):
    version: int
    name: str
    applied_on: str
    checksum: str

    class Config:
        from_attributes = True
        frozen = True
