"""
Typed records returned by the API.

All models ignore unknown keys and treat empty strings as absent. Anything
that does not convert raises pydantic.ValidationError (a ValueError), which
the transport reports as TransportError.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_serializer, field_validator

from .constants import TIMESTAMP_FORMAT


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and v == "":
            return None
        return v


def _split(v: Any) -> List[str]:
    if v is None or v == "":
        return []
    if isinstance(v, (list, tuple)):
        return [str(part) for part in v if part]
    return [part for part in str(v).split(",") if part]


# -----------------------------
# Station
# -----------------------------
_TIMESTAMP_FIELDS = (
    "lastchecktime",
    "lastcheckoktime",
    "lastlocalchecktime",
    "lastchangetime",
    "clicktimestamp",
)


class Station(_ApiModel):
    stationuuid: Optional[UUID] = None
    changeuuid: Optional[UUID] = None
    name: Optional[str] = None
    url: Optional[str] = None
    url_resolved: Optional[str] = None
    homepage: Optional[str] = None
    favicon: Optional[str] = None
    tag_list: List[str] = Field(default_factory=list, validation_alias=AliasChoices("tags", "tag_list"))
    country: Optional[str] = None
    countrycode: Optional[str] = None
    state: Optional[str] = None
    language_list: List[str] = Field(default_factory=list, validation_alias=AliasChoices("language", "language_list"))
    votes: Optional[int] = None
    codec: Optional[str] = None
    bitrate: Optional[int] = None
    hls: Optional[int] = None
    lastcheckok: Optional[int] = None
    lastchecktime: Optional[datetime] = None
    lastcheckoktime: Optional[datetime] = None
    lastlocalchecktime: Optional[datetime] = None
    lastchangetime: Optional[datetime] = None
    clicktimestamp: Optional[datetime] = None
    clickcount: Optional[int] = None
    clicktrend: Optional[int] = None
    geo_lat: Optional[float] = None
    geo_long: Optional[float] = None
    has_extended_info: Optional[bool] = None

    @field_validator("tag_list", "language_list", mode="before")
    @classmethod
    def _comma_separated(cls, v: Any) -> List[str]:
        return _split(v)

    @field_validator(*_TIMESTAMP_FIELDS, mode="before")
    @classmethod
    def _parse_timestamp(cls, v: Any) -> Optional[datetime]:
        if v is None or v == "":
            return None
        if isinstance(v, datetime):
            return v
        return datetime.strptime(str(v), TIMESTAMP_FORMAT)

    @field_serializer(*_TIMESTAMP_FIELDS)
    def _format_timestamp(self, v: Optional[datetime]) -> Optional[str]:
        return v.strftime(TIMESTAMP_FORMAT) if v is not None else None

    @property
    def tags(self) -> str:
        return ",".join(self.tag_list)

    @property
    def language(self) -> str:
        return ",".join(self.language_list)

    def __str__(self) -> str:
        return f"Station{{name={self.name}, url={self.url}}}"

    def to_row(self) -> Dict[str, Any]:
        """Flat, JSON-friendly dict (uuids and timestamps as strings)."""
        row = self.model_dump(mode="json", exclude={"tag_list", "language_list"})
        row["tags"] = self.tags
        row["language"] = self.language
        return row


_STATION_LIST = TypeAdapter(List[Station])


def decode_station(raw: Any) -> Station:
    return Station.model_validate(raw)


def decode_station_list(raw: Any) -> List[Station]:
    return _STATION_LIST.validate_python(raw)


# -----------------------------
# Server stats / url resolution / value counts
# -----------------------------
class Stats(_ApiModel):
    model_config = ConfigDict(frozen=True)

    supported_version: Optional[int] = None
    software_version: Optional[str] = None
    status: Optional[str] = None
    stations: Optional[int] = None
    stations_broken: Optional[int] = None
    tags: Optional[int] = None
    clicks_last_hour: Optional[int] = None
    clicks_last_day: Optional[int] = None
    languages: Optional[int] = None
    countries: Optional[int] = None


def decode_stats(raw: Any) -> Stats:
    return Stats.model_validate(raw)


class UrlResponse(_ApiModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    message: Optional[str] = None
    uuid: Optional[UUID] = Field(default=None, validation_alias=AliasChoices("stationuuid", "uuid"))
    name: Optional[str] = None
    url: Optional[str] = None


def decode_url_response(raw: Any) -> UrlResponse:
    return UrlResponse.model_validate(raw)


class ValueCount(_ApiModel):
    name: str
    stationcount: int


_VALUE_COUNT_LIST = TypeAdapter(List[ValueCount])


def decode_value_counts(raw: Any) -> Dict[str, int]:
    """[{"name": "jazz", "stationcount": "12"}, ...] -> {"jazz": 12}; first name wins."""
    out: Dict[str, int] = {}
    for item in _VALUE_COUNT_LIST.validate_python(raw):
        out.setdefault(item.name, item.stationcount)
    return out
