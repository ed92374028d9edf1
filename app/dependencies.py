from fastapi import Header, HTTPException

from app.config import settings
from app.services.external_records import ExternalRecordsProvider, PlaceholderRecordsProvider

_external_records = PlaceholderRecordsProvider()


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=403, detail="Invalid or missing API key")


def get_external_records() -> ExternalRecordsProvider:
    return _external_records
