from __future__ import annotations

from connectors.radiobrowser.paging import Paging
from connectors.radiobrowser.params import (
    AdvancedSearch,
    FieldName,
    ListParameter,
    SearchMode,
    request_params,
)


def test_list_parameter_only_writes_what_is_set():
    assert request_params(ListParameter()) == {}
    assert request_params(ListParameter(order=FieldName.VOTES)) == {"order": "votes"}
    assert request_params(ListParameter(reverse=False)) == {"reverse": "false"}


def test_list_parameter_accepts_plain_field_names():
    assert request_params(ListParameter(order="clickcount", reverse=True)) == {
        "order": "clickcount",
        "reverse": "true",
    }


def test_none_bundles_are_skipped():
    assert request_params(None, ListParameter(reverse=True), None) == {"reverse": "true"}


def test_empty_search_sends_nothing():
    assert request_params(AdvancedSearch()) == {}


def test_advanced_search_keys():
    search = AdvancedSearch(
        name="jazz",
        name_exact=False,
        country="Germany",
        country_exact=True,
        country_code="DE",
        language="german",
        tag_list=["jazz", "blues"],
        codec="MP3",
        codec_exact=True,
        bitrate_min=64,
        bitrate_max=320,
        has_geo_info=True,
        is_https=False,
        order=FieldName.BITRATE,
        reverse=True,
        hide_broken=False,
    )
    assert request_params(search) == {
        "name": "jazz",
        "nameExact": "false",
        "country": "Germany",
        "countryExact": "true",
        "countrycode": "DE",
        "language": "german",
        "tagList": "jazz,blues",
        "codec": "MP3",
        "codecExact": "true",
        "bitrateMin": "64",
        "bitrateMax": "320",
        "has_geo_info": "true",
        "is_https": "false",
        "order": "bitrate",
        "reverse": "true",
        "hidebroken": "false",
    }


def test_hide_broken_does_not_follow_reverse():
    params = request_params(AdvancedSearch(reverse=True, hide_broken=False))
    assert params["reverse"] == "true"
    assert params["hidebroken"] == "false"


def test_paging_window_is_added_on_top_of_bundles():
    params = request_params(AdvancedSearch(tag="rock"))
    Paging.at(256, 128).apply(params)
    assert params == {"tag": "rock", "offset": "256", "limit": "128"}


def test_enum_values_are_lowercase_path_segments():
    assert all(m.value == m.value.lower() for m in SearchMode)
    assert all(f.value == f.value.lower() for f in FieldName)
    assert SearchMode("bycountrycodeexact") is SearchMode.BYCOUNTRYCODEEXACT
