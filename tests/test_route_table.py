from webhook_relay.config import Settings
from webhook_relay.routing.table import build_route_table, normalize_path_key, parse_csv_routes


def _settings(**values) -> Settings:
    return Settings(**values)


def test_normalize_path_key_trims_slashes_and_case() -> None:
    assert normalize_path_key("  /Dev/US/ ") == "dev/us"
    assert normalize_path_key("///") == ""
    assert normalize_path_key(None) == ""


def test_json_routes_are_normalized() -> None:
    routes = build_route_table(_settings(RELAY_ROUTES_JSON='{"/Dev/": "https://dev.example.com", "us": "https://us.example.com"}'))
    assert routes == {"dev": "https://dev.example.com", "us": "https://us.example.com"}


def test_malformed_json_falls_through_to_other_sources() -> None:
    routes = build_route_table(
        _settings(
            RELAY_ROUTES_JSON="{not json",
            RELAY_ROUTES="dev=https://dev.example.com",
            RELAY_TARGETS={"EU": "https://eu.example.com"},
        )
    )
    assert routes == {"dev": "https://dev.example.com", "eu": "https://eu.example.com"}


def test_json_non_object_and_empty_values_are_ignored() -> None:
    assert build_route_table(_settings(RELAY_ROUTES_JSON='["dev"]')) == {}
    assert build_route_table(_settings(RELAY_ROUTES_JSON='{"dev": "", "us": 5, "": "https://x"}')) == {}


def test_csv_accepts_both_separators_and_drops_empty_entries() -> None:
    routes = build_route_table(
        _settings(RELAY_ROUTES=" dev=https://dev.example.com , us->https://us.example.com/hook?a=b,,=https://x,eu=  ")
    )
    assert routes == {
        "dev": "https://dev.example.com",
        "us": "https://us.example.com/hook?a=b",
    }


def test_csv_prefers_arrow_separator() -> None:
    assert parse_csv_routes("a=b->https://x") == [("a=b", "https://x")]


def test_later_sources_win_on_collision() -> None:
    routes = build_route_table(
        _settings(
            RELAY_ROUTES_JSON='{"dev": "https://json", "json-only": "https://json-only"}',
            RELAY_ROUTES="DEV=https://csv,csv-only=https://csv-only",
            RELAY_TARGETS={"dev": "https://prefixed"},
        )
    )
    assert routes["dev"] == "https://prefixed"
    assert routes["json-only"] == "https://json-only"
    assert routes["csv-only"] == "https://csv-only"


def test_json_then_csv_precedence_without_prefixed() -> None:
    routes = build_route_table(_settings(RELAY_ROUTES_JSON='{"dev": "https://json"}', RELAY_ROUTES="dev=https://csv"))
    assert routes == {"dev": "https://csv"}
