"""Records produced while extracting pixel events, and how they are written as JSON lines."""

import datetime
from typing import IO

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, field_serializer


class ParsedLogRecord(BaseModel):
    """The semantic content of one raw S3 log line."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime.datetime
    ip_address: str
    method: str
    resource_url: AnyHttpUrl
    referrer: str | None
    user_agent: str
    status_code: str


class PixelEvent(BaseModel):
    """A single hit on the tracking pixel; one line of the event log."""

    model_config = ConfigDict(frozen=True)

    date: datetime.datetime
    ip: str
    params: list[tuple[str, str]]
    referrer: str | None
    ua: str

    @field_serializer("date")
    def _serialize_date(self, date: datetime.datetime) -> str:
        # UTC with millisecond precision and a 'Z' suffix, e.g. '2019-02-06T00:00:38.000Z'
        utc_date = date.astimezone(datetime.timezone.utc)
        return utc_date.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_date.microsecond // 1000:03d}Z"


class GeoRecord(BaseModel):
    """Geolocation attributes of one IP address; one line of the geo cache."""

    model_config = ConfigDict(frozen=True)

    ip: str
    city: str | None = None
    region: str | None = None
    region_code: str | None = None
    organization: str | None = None
    country: str | None = None
    postal_code: str | None = None
    asn: int | str | None = None
    latitude: float | None = None
    longitude: float | None = None


def _write_json_line(*, record: BaseModel, io: IO[str]) -> None:
    """Append one record as a compact JSON line and flush it immediately."""
    io.write(record.model_dump_json() + "\n")
    io.flush()
