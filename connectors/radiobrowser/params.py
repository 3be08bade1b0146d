"""
Request parameter bundles for station listings.

Each bundle is an explicit, immutable set of named options. `apply()` writes
only the options that were set into the form parameters of the request; the
paging window is never part of a bundle (see paging.Paging.apply).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence


class FieldName(str, Enum):
    """Fields a station listing can be ordered by."""

    NAME = "name"
    URL = "url"
    HOMEPAGE = "homepage"
    FAVICON = "favicon"
    TAGS = "tags"
    COUNTRY = "country"
    STATE = "state"
    LANGUAGE = "language"
    VOTES = "votes"
    CODEC = "codec"
    BITRATE = "bitrate"
    LASTCHECKOK = "lastcheckok"
    LASTCHECKTIME = "lastchecktime"
    CLICKTIMESTAMP = "clicktimestamp"
    CLICKCOUNT = "clickcount"
    CLICKTREND = "clicktrend"


class SearchMode(str, Enum):
    """Path segment for json/stations/<mode>/<term> searches."""

    BYUUID = "byuuid"
    BYNAME = "byname"
    BYNAMEEXACT = "bynameexact"
    BYCODEC = "bycodec"
    BYCODECEXACT = "bycodecexact"
    BYCOUNTRY = "bycountry"
    BYCOUNTRYEXACT = "bycountryexact"
    BYCOUNTRYCODEEXACT = "bycountrycodeexact"
    BYSTATE = "bystate"
    BYSTATEEXACT = "bystateexact"
    BYLANGUAGE = "bylanguage"
    BYLANGUAGEEXACT = "bylanguageexact"
    BYTAG = "bytag"
    BYTAGEXACT = "bytagexact"


def _bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class ListParameter:
    """
    Sorting for plain listings.

    order: field to sort by, sent as `order=<field>`
    reverse: descending order when True, sent as `reverse=true|false`
    """

    order: Optional[FieldName] = None
    reverse: Optional[bool] = None

    def apply(self, request_params: Dict[str, str]) -> None:
        if self.order is not None:
            request_params["order"] = FieldName(self.order).value
        if self.reverse is not None:
            request_params["reverse"] = _bool(self.reverse)


# (attribute, request key) for the text filters; each has a matching `<attribute>_exact` flag
_TEXT_FILTERS = (
    ("name", "name"),
    ("country", "country"),
    ("state", "state"),
    ("language", "language"),
    ("tag", "tag"),
    ("codec", "codec"),
)


@dataclass(frozen=True)
class AdvancedSearch:
    """
    Filters for json/stations/search. Unset (None) options are not sent.

    name / country / state / language / tag / codec:
        substring match on that field; `<field>_exact=True` sends `<field>Exact=true`
        to require a full match instead.
    country_code: two-letter code, sent as `countrycode`
    tag_list: all of these tags must match, sent comma-joined as `tagList`
    bitrate_min / bitrate_max: bitrate bounds in kbps, sent as `bitrateMin` / `bitrateMax`
    has_geo_info: only stations with (True) or without (False) coordinates, `has_geo_info`
    has_extended_info: only stations with (True) or without (False) extended info, `has_extended_info`
    is_https: only stations with (True) or without (False) an https stream url, `is_https`
    order / reverse: sorting, sent as `order` / `reverse`
    hide_broken: drop stations that failed the last check, sent as `hidebroken`
    """

    name: Optional[str] = None
    name_exact: Optional[bool] = None
    country: Optional[str] = None
    country_exact: Optional[bool] = None
    country_code: Optional[str] = None
    state: Optional[str] = None
    state_exact: Optional[bool] = None
    language: Optional[str] = None
    language_exact: Optional[bool] = None
    tag: Optional[str] = None
    tag_exact: Optional[bool] = None
    tag_list: Optional[Sequence[str]] = None
    codec: Optional[str] = None
    codec_exact: Optional[bool] = None
    bitrate_min: Optional[int] = None
    bitrate_max: Optional[int] = None
    has_geo_info: Optional[bool] = None
    has_extended_info: Optional[bool] = None
    is_https: Optional[bool] = None
    order: Optional[FieldName] = None
    reverse: Optional[bool] = None
    hide_broken: Optional[bool] = None

    def apply(self, request_params: Dict[str, str]) -> None:
        for attr, key in _TEXT_FILTERS:
            value = getattr(self, attr)
            if value is not None:
                request_params[key] = str(value)
            exact = getattr(self, f"{attr}_exact")
            if exact is not None:
                request_params[f"{key}Exact"] = _bool(exact)

        if self.country_code is not None:
            request_params["countrycode"] = self.country_code
        if self.tag_list is not None:
            request_params["tagList"] = ",".join(self.tag_list)
        if self.bitrate_min is not None:
            request_params["bitrateMin"] = str(int(self.bitrate_min))
        if self.bitrate_max is not None:
            request_params["bitrateMax"] = str(int(self.bitrate_max))
        if self.has_geo_info is not None:
            request_params["has_geo_info"] = _bool(self.has_geo_info)
        if self.has_extended_info is not None:
            request_params["has_extended_info"] = _bool(self.has_extended_info)
        if self.is_https is not None:
            request_params["is_https"] = _bool(self.is_https)

        # limit and offset come from the paging window
        ListParameter(order=self.order, reverse=self.reverse).apply(request_params)
        if self.hide_broken is not None:
            request_params["hidebroken"] = _bool(self.hide_broken)


def request_params(*bundles: object) -> Dict[str, str]:
    """Merge the given bundles (None entries skipped) into one form-parameter dict."""
    out: Dict[str, str] = {}
    for bundle in bundles:
        if bundle is not None:
            bundle.apply(out)  # type: ignore[attr-defined]
    return out
