from typing import Any, Dict, Optional
from datetime import datetime

from srms.schemas import CamelModel


class SettingValue(CamelModel):
    key: str
    value: Any = None


class ApplicationSetting(SettingValue):
    id: int
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SettingsBulkUpdate(CamelModel):
    settings: Dict[str, Any]


class SettingUpdate(CamelModel):
    value: Any
    description: Optional[str] = None
