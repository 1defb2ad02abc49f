from pydantic import BaseModel, ConfigDict, Field


class CleanupOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted: int
    orphaned_assets: int = Field(alias="orphanedAssets")
    recovered_assets: int = Field(alias="recoveredAssets")
