"""Tests for snapshot decoding into pydantic models."""

from __future__ import annotations

import json

import pytest

from adsbexporter.exceptions import DecodeError, SnapshotReadError
from adsbexporter.ingestion.snapshot import decode_aircraft, decode_stats, read_snapshot
from adsbexporter.models.stats import GainStep


def _bytes(payload: object) -> bytes:
    return json.dumps(payload).encode()


# ------------------------------------------------------------------
# stats.json
# ------------------------------------------------------------------


class TestStatsSnapshot:
    SAMPLE_PERIOD: dict = {
        "start": 1700000000.0,
        "end": 1700000060.0,
        "messages": 1234,
        "local": {
            "samples_processed": 144179200,
            "samples_dropped": 0,
            "modeac": 0,
            "modes": 52012,
            "bad": 40011,
            "unknown_icao": 10780,
            "accepted": [1200, 34],
            "signal": -12.5,
            "noise": -33.1,
            "peak_signal": -1.9,
            "strong_signals": 3,
            "gain_db": 49.6,
        },
        "remote": {"modeac": 0, "modes": 15, "bad": 0, "unknown_icao": 0, "accepted": [15]},
        "cpu": {"demod": 800, "reader": 120, "background": 30},
        "cpr": {"surface": 2, "airborne": 400, "global_ok": 350, "filtered": 1},
        "tracks": {"all": 12, "single_message": 4},
        "messages_by_df": [10, 0, 0, 0, 200],
        "adaptive": {
            "gain_db": 49.6,
            "dynamic_range_limit_db": 30.0,
            "gain_changes": 2,
            "loud_undecoded": 0,
            "loud_decoded": 5,
            "noise_dbfs": -34.2,
            "gain_seconds": {"13": [49.6, 55.5], "12": ["44.5", "4.5"]},
        },
        "future_field": {"ignored": True},
    }

    def test_basic_parsing(self) -> None:
        snapshot = decode_stats(_bytes({"latest": self.SAMPLE_PERIOD, "total": self.SAMPLE_PERIOD}))
        assert [name for name, _ in snapshot.periods()] == ["latest", "total"]

        period = snapshot.latest
        assert period is not None
        assert period.messages == 1234.0
        assert period.local is not None
        assert period.local.accepted == (1200.0, 34.0)
        assert period.local.gain_db == 49.6
        assert period.remote is not None
        assert period.remote.signal is None
        assert period.cpr is not None
        assert period.cpr.local_ok == 0.0
        assert period.tracks == {"all": 12.0, "single_message": 4.0}
        assert period.messages_by_df == (10.0, 0.0, 0.0, 0.0, 200.0)

    def test_gain_seconds_pairs_are_coerced(self) -> None:
        snapshot = decode_stats(_bytes({"latest": self.SAMPLE_PERIOD}))
        assert snapshot.latest is not None and snapshot.latest.adaptive is not None
        assert snapshot.latest.adaptive.gain_seconds == {
            "13": GainStep(gain_db=49.6, seconds=55.5),
            "12": GainStep(gain_db=44.5, seconds=4.5),
        }

    def test_malformed_gain_pairs_are_skipped(self) -> None:
        payload = {
            "latest": {
                "adaptive": {
                    "gain_seconds": {
                        "0": [0, 12],
                        "1": [49.6],
                        "2": "49.6",
                        "3": [49.6, "long"],
                        "4": [None, 3],
                        "5": [40.2, 1, "extra"],
                    }
                }
            }
        }
        adaptive = decode_stats(_bytes(payload)).latest.adaptive  # type: ignore[union-attr]
        assert adaptive is not None
        assert set(adaptive.gain_seconds) == {"0", "5"}
        assert adaptive.gain_seconds["5"] == GainStep(gain_db=40.2, seconds=1.0)

    def test_only_latest_messages(self) -> None:
        snapshot = decode_stats(b'{"latest": {"messages": 42}}')
        assert [name for name, _ in snapshot.periods()] == ["latest"]
        latest = snapshot.latest
        assert latest is not None
        assert latest.messages == 42.0
        assert latest.local is None
        assert latest.cpu is None
        assert latest.cpr is None
        assert latest.adaptive is None
        assert latest.tracks == {}
        assert latest.messages_by_df == ()

    def test_empty_and_non_object_sub_records_are_missing(self) -> None:
        snapshot = decode_stats(_bytes({"latest": {"local": {}, "cpu": 5, "cpr": None, "adaptive": []}}))
        latest = snapshot.latest
        assert latest is not None
        assert latest.local is None
        assert latest.cpu is None
        assert latest.cpr is None
        assert latest.adaptive is None

    def test_empty_period_is_present(self) -> None:
        snapshot = decode_stats(b'{"latest": {}}')
        assert [name for name, _ in snapshot.periods()] == ["latest"]
        assert snapshot.latest is not None
        assert snapshot.latest.messages == 0.0

    def test_non_object_periods_are_missing(self) -> None:
        snapshot = decode_stats(_bytes({"latest": {}, "last1min": "soon", "last5min": [1], "total": {"messages": 1}}))
        assert [name for name, _ in snapshot.periods()] == ["latest", "total"]

    def test_uncoercible_scalars_do_not_fail_the_snapshot(self) -> None:
        payload = {
            "latest": {
                "messages": "many",
                "local": {"modes": "12", "bad": [1], "signal": "loud", "accepted": [5, "x", 2]},
                "tracks": {"all": "3", "single_message": "n/a"},
                "messages_by_df": "not-a-list",
            }
        }
        latest = decode_stats(_bytes(payload)).latest
        assert latest is not None
        assert latest.messages is None
        assert latest.local is not None
        assert latest.local.modes == 12.0
        assert latest.local.bad is None
        assert latest.local.modeac == 0.0
        assert latest.local.signal is None
        assert latest.local.accepted == (5.0, None, 2.0)
        assert latest.tracks == {"all": 3.0}
        assert latest.messages_by_df == ()

    def test_empty_object_is_valid(self) -> None:
        assert decode_stats(b"{}").periods() == []


# ------------------------------------------------------------------
# aircraft.json
# ------------------------------------------------------------------


class TestAircraftSnapshot:
    SAMPLE_AIRCRAFT: dict = {
        "hex": "4ca1d3",
        "flight": "RYR12AB ",
        "category": "A3",
        "alt_baro": 37000,
        "alt_geom": 37425,
        "gs": 452.1,
        "track": 91.3,
        "baro_rate": -64,
        "squawk": "7700",
        "emergency": "general",
        "nav_qnh": 1013.6,
        "nav_altitude_mcp": 36992,
        "nav_heading": 90.0,
        "nav_modes": ["autopilot", "vnav", "tcas"],
        "lat": 53.123,
        "lon": -6.456,
        "nic": 8,
        "rc": 186,
        "seen_pos": 0.4,
        "version": 2,
        "sil_type": "perhour",
        "mlat": [],
        "tisb": [],
        "messages": 1520,
        "seen": 0.1,
        "rssi": -21.4,
    }

    def test_basic_parsing(self) -> None:
        snapshot = decode_aircraft(_bytes({"now": 1700000000.5, "messages": 99, "aircraft": [self.SAMPLE_AIRCRAFT]}))
        assert snapshot.now == 1700000000.5
        assert len(snapshot.aircraft) == 1

        aircraft = snapshot.aircraft[0]
        assert aircraft.identity == ("4ca1d3", "RYR12AB", "A3")
        assert aircraft.alt_baro == 37000.0
        assert aircraft.baro_rate == -64.0
        assert aircraft.squawk == "7700"
        assert aircraft.nav_modes == frozenset({"autopilot", "vnav", "tcas"})
        assert aircraft.messages == 1520.0
        assert aircraft.has_position

    def test_ground_altitude_is_absent(self) -> None:
        raw = _bytes({"aircraft": [{"hex": "abc123", "alt_baro": "ground", "gs": 12}]})
        aircraft = decode_aircraft(raw).aircraft[0]
        assert aircraft.alt_baro is None
        assert aircraft.gs == 12.0

    def test_numeric_strings_are_coerced(self) -> None:
        aircraft = decode_aircraft(_bytes({"aircraft": [{"hex": "abc123", "alt_geom": "1250", "rssi": "-30.5"}]}))
        assert aircraft.aircraft[0].alt_geom == 1250.0
        assert aircraft.aircraft[0].rssi == -30.5

    def test_defaults_for_missing_fields(self) -> None:
        aircraft = decode_aircraft(b'{"aircraft": [{}]}').aircraft[0]
        assert aircraft.identity == ("", "", "")
        assert aircraft.lat is None
        assert aircraft.messages == 0.0
        assert aircraft.nav_modes == frozenset()
        assert not aircraft.has_position

    def test_uncoercible_counter_is_absent(self) -> None:
        aircraft = decode_aircraft(b'{"aircraft": [{"hex": "abc123", "messages": "n/a"}]}').aircraft[0]
        assert aircraft.messages is None

    @pytest.mark.parametrize("nav_modes", [{"autopilot": True}, "autopilot", 3, [], None])
    def test_non_array_nav_modes_read_as_no_flags(self, nav_modes) -> None:
        aircraft = decode_aircraft(_bytes({"aircraft": [{"hex": "abc123", "nav_modes": nav_modes}]})).aircraft[0]
        assert aircraft.nav_modes == frozenset()

    def test_non_string_nav_mode_entries_are_ignored(self) -> None:
        aircraft = decode_aircraft(_bytes({"aircraft": [{"nav_modes": ["lnav", 4, None, " althold "]}]})).aircraft[0]
        assert aircraft.nav_modes == frozenset({"lnav", "althold"})

    def test_non_object_entries_are_dropped(self) -> None:
        snapshot = decode_aircraft(_bytes({"aircraft": [{"hex": "a"}, "junk", 5, None, [], {"hex": "b"}]}))
        assert [a.hex for a in snapshot.aircraft] == ["a", "b"]

    def test_empty_aircraft_list(self) -> None:
        assert decode_aircraft(b'{"now": 1, "aircraft": []}').aircraft == []


# ------------------------------------------------------------------
# Decode errors
# ------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"{not json",
        b'{"latest": {"messages": 4',
        b"\xff\xfe\xfa",
        b"[1, 2]",
        b'"stats"',
        b"null",
    ],
)
def test_decode_stats_rejects_malformed_input(raw: bytes) -> None:
    with pytest.raises(DecodeError):
        decode_stats(raw, path="stats.json")


@pytest.mark.parametrize(
    "raw",
    [
        b'{"aircraft": [{"hex": "abc',
        b"[]",
        b"{}",
        b'{"aircraft": null}',
        b'{"aircraft": {"hex": "abc123"}}',
        b'{"aircraft": "none"}',
    ],
)
def test_decode_aircraft_rejects_wrong_shape(raw: bytes) -> None:
    with pytest.raises(DecodeError) as excinfo:
        decode_aircraft(raw, path="aircrafts.json")
    assert excinfo.value.path == "aircrafts.json"


def test_read_snapshot_missing_file(tmp_path) -> None:
    with pytest.raises(SnapshotReadError) as excinfo:
        read_snapshot(tmp_path / "missing.json")
    assert excinfo.value.path == str(tmp_path / "missing.json")


def test_read_snapshot_reads_whole_file(tmp_path) -> None:
    path = tmp_path / "stats.json"
    path.write_bytes(b'{"latest": {"messages": 1}}')
    assert read_snapshot(path) == b'{"latest": {"messages": 1}}'
