from fastapi import Depends

from ..core.config import Settings, get_settings
from ..services.rdw import RdwClient


def get_rdw_client(settings: Settings = Depends(get_settings)) -> RdwClient:
    return RdwClient.from_settings(settings)
