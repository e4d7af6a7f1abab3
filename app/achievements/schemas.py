from pydantic import BaseModel, ConfigDict


class AchievementOut(BaseModel):
    id: int
    name: str
    description: str
    is_premium: bool

    model_config = ConfigDict(from_attributes=True)
