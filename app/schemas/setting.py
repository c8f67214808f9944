# app/schemas/setting.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SettingUpsert(BaseModel):
    setting_name: Optional[str] = None
    setting_value: Optional[str] = None


class SettingOut(BaseModel):
    setting_id: int
    setting_name: str
    setting_value: Optional[str] = None
    setting_last_update: Optional[datetime] = None

    model_config = {"from_attributes": True}
