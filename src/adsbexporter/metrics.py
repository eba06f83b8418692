"""Metric catalog.

Every series the exporter publishes belongs to one of the families declared
here. The registry creates one Prometheus gauge per family; projection
refers to families by name.

Field tables are 3-tuples: the model attribute the value is read from, the
exported metric name, and its help string. Stats families are labeled by
``period`` first; aircraft families by ``hex``, ``flight`` and ``category``
first.

So ``Period.local.modes`` for the last minute ends up as:

.. code-block:: console

    adsb_stats_modes_total{period="last1min", origin="local"}
"""

from __future__ import annotations

from dataclasses import dataclass

from adsbexporter._constants import AIRCRAFT_IDENTITY_LABELS


@dataclass(frozen=True, slots=True)
class MetricFamily:
    """Name, help and label names of one gauge family."""

    name: str
    help: str
    labelnames: tuple[str, ...] = ()


_PERIOD = ("period",)
_ORIGIN = ("period", "origin")
_AIRCRAFT = AIRCRAFT_IDENTITY_LABELS

# ---------------------------------------------------------------------------
# stats.json
# ---------------------------------------------------------------------------

STATS_MESSAGES = MetricFamily("adsb_stats_messages_total", "Number of messages for the stats period", _PERIOD)
STATS_MESSAGES_BY_DF = MetricFamily(
    "adsb_stats_messages_by_df", "Messages per downlink format for the stats period", ("period", "df")
)
STATS_TRACKS = MetricFamily(
    "adsb_stats_tracks", "Tracks created for the stats period, by category", ("period", "category")
)
STATS_ACCEPTED = MetricFamily(
    "adsb_stats_accepted",
    "Messages accepted with the given number of corrected bits",
    ("period", "origin", "bits"),
)
STATS_ACCEPTED_TOTAL = MetricFamily(
    "adsb_stats_accepted_total", "Messages accepted, summed over all corrected-bit counts", _ORIGIN
)
STATS_ADAPTIVE_GAIN_SECONDS = MetricFamily(
    "adsb_stats_adaptive_gain_seconds",
    "Seconds spent at a given adaptive gain step",
    ("period", "gain_step", "gain_db"),
)

ORIGIN_COUNTERS: tuple[tuple[str, str, str], ...] = (
    ("samples_processed", "adsb_stats_samples_processed_total", "Number of samples processed"),
    ("samples_dropped", "adsb_stats_samples_dropped_total", "Number of samples dropped"),
    ("modeac", "adsb_stats_modeac_total", "Number of Mode A/C preambles decoded"),
    ("modes", "adsb_stats_modes_total", "Number of Mode S preambles received"),
    ("bad", "adsb_stats_bad_total", "Mode S preambles that did not result in a valid message"),
    ("unknown_icao", "adsb_stats_unknown_icao_total", "Mode S messages with an unrecognized ICAO address"),
    ("strong_signals", "adsb_stats_strong_signals_total", "Messages with a signal power above -3 dBFS"),
)

ORIGIN_READINGS: tuple[tuple[str, str, str], ...] = (
    ("signal", "adsb_stats_signal_dbfs", "Mean signal power of received messages (dBFS)"),
    ("noise", "adsb_stats_noise_dbfs", "Mean noise power (dBFS)"),
    ("peak_signal", "adsb_stats_peak_signal_dbfs", "Peak signal power of received messages (dBFS)"),
    ("gain_db", "adsb_stats_gain_db", "SDR gain (dB)"),
)

CPU_COUNTERS: tuple[tuple[str, str, str], ...] = (
    ("demod", "adsb_stats_cpu_demod_ms", "Milliseconds spent doing demodulation"),
    ("reader", "adsb_stats_cpu_reader_ms", "Milliseconds spent reading samples from the SDR"),
    ("background", "adsb_stats_cpu_background_ms", "Milliseconds spent in background processing"),
)

CPR_COUNTERS: tuple[tuple[str, str, str], ...] = (
    ("surface", "adsb_stats_cpr_surface", "Surface CPR messages received"),
    ("airborne", "adsb_stats_cpr_airborne", "Airborne CPR messages received"),
    ("global_ok", "adsb_stats_cpr_global_ok", "Global positions successfully derived"),
    ("global_bad", "adsb_stats_cpr_global_bad", "Global positions that were rejected"),
    ("global_range", "adsb_stats_cpr_global_range", "Global positions rejected by the receiver max range check"),
    ("global_speed", "adsb_stats_cpr_global_speed", "Global positions rejected by the speed check"),
    ("global_skipped", "adsb_stats_cpr_global_skipped", "Global position attempts skipped due to missing data"),
    ("local_ok", "adsb_stats_cpr_local_ok", "Local (relative) positions successfully found"),
    (
        "local_aircraft_relative",
        "adsb_stats_cpr_local_aircraft_relative",
        "Local positions found relative to a previous aircraft position",
    ),
    (
        "local_receiver_relative",
        "adsb_stats_cpr_local_receiver_relative",
        "Local positions found relative to the receiver position",
    ),
    ("local_skipped", "adsb_stats_cpr_local_skipped", "Local positions skipped due to missing data"),
    ("local_range", "adsb_stats_cpr_local_range", "Local positions rejected by the receiver max range check"),
    ("local_speed", "adsb_stats_cpr_local_speed", "Local positions rejected by the speed check"),
    ("filtered", "adsb_stats_cpr_filtered", "CPR messages ignored"),
)

ADAPTIVE_READINGS: tuple[tuple[str, str, str], ...] = (
    ("gain_db", "adsb_stats_adaptive_gain_db", "Adaptive gain setting (dB)"),
    ("dynamic_range_limit_db", "adsb_stats_adaptive_dynamic_range_limit_db", "Adaptive dynamic range limit (dB)"),
    ("gain_changes", "adsb_stats_adaptive_gain_changes_total", "Number of adaptive gain changes"),
    ("loud_undecoded", "adsb_stats_adaptive_loud_undecoded_total", "Loud bursts that could not be decoded"),
    ("loud_decoded", "adsb_stats_adaptive_loud_decoded_total", "Loud messages that were decoded"),
    ("noise_dbfs", "adsb_stats_adaptive_noise_dbfs", "Adaptive noise floor estimate (dBFS)"),
)

# ---------------------------------------------------------------------------
# aircraft.json
# ---------------------------------------------------------------------------

AIRCRAFT_RECENT_OBSERVED = MetricFamily("adsb_aircraft_recent_observed", "Number of aircraft recently observed")
AIRCRAFT_RECENT_WITH_POSITION = MetricFamily(
    "adsb_aircraft_recent_with_position", "Number of aircraft recently observed with a position"
)
AIRCRAFT_MESSAGES = MetricFamily("adsb_aircraft_messages_total", "Messages received from the aircraft", _AIRCRAFT)
AIRCRAFT_NAV_MODE = MetricFamily(
    "adsb_aircraft_nav_mode", "Whether the autopilot mode is engaged (1) or not (0)", (*_AIRCRAFT, "mode")
)

AIRCRAFT_READINGS: tuple[tuple[str, str, str], ...] = (
    ("alt_baro", "adsb_aircraft_alt_baro_feet", "Barometric altitude (feet)"),
    ("alt_geom", "adsb_aircraft_alt_geom_feet", "Geometric (GNSS/INS) altitude (feet)"),
    ("gs", "adsb_aircraft_ground_speed_kts", "Ground speed (knots)"),
    ("ias", "adsb_aircraft_ias_kts", "Indicated air speed (knots)"),
    ("tas", "adsb_aircraft_tas_kts", "True air speed (knots)"),
    ("mach", "adsb_aircraft_mach", "Mach number"),
    ("track", "adsb_aircraft_track_deg", "True track over ground (degrees)"),
    ("track_rate", "adsb_aircraft_track_rate_deg_per_second", "Rate of change of track (degrees/second)"),
    ("roll", "adsb_aircraft_roll_deg", "Roll angle (degrees, negative is left roll)"),
    ("mag_heading", "adsb_aircraft_mag_heading_deg", "Heading relative to magnetic north (degrees)"),
    ("true_heading", "adsb_aircraft_true_heading_deg", "Heading relative to true north (degrees)"),
    ("baro_rate", "adsb_aircraft_baro_rate_fpm", "Rate of change of barometric altitude (feet/minute)"),
    ("geom_rate", "adsb_aircraft_geom_rate_fpm", "Rate of change of geometric altitude (feet/minute)"),
    ("nav_qnh", "adsb_aircraft_nav_qnh_hpa", "Altimeter setting (hPa)"),
    ("nav_altitude_mcp", "adsb_aircraft_nav_altitude_mcp_feet", "Selected altitude from the MCP/FCU (feet)"),
    ("nav_altitude_fms", "adsb_aircraft_nav_altitude_fms_feet", "Selected altitude from the FMS (feet)"),
    ("nav_heading", "adsb_aircraft_nav_heading_deg", "Selected heading (degrees)"),
    ("lat", "adsb_aircraft_lat", "Latitude (degrees)"),
    ("lon", "adsb_aircraft_lon", "Longitude (degrees)"),
    ("nic", "adsb_aircraft_nic", "Navigation Integrity Category"),
    ("rc", "adsb_aircraft_rc_meters", "Radius of Containment (meters)"),
    ("seen_pos", "adsb_aircraft_seen_pos_seconds", "Seconds since the position was last updated"),
    ("version", "adsb_aircraft_adsb_version", "ADS-B version number"),
    ("nic_baro", "adsb_aircraft_nic_baro", "Navigation Integrity Category for barometric altitude"),
    ("nac_p", "adsb_aircraft_nac_p", "Navigation Accuracy for Position"),
    ("nac_v", "adsb_aircraft_nac_v", "Navigation Accuracy for Velocity"),
    ("sil", "adsb_aircraft_sil", "Source Integrity Level"),
    ("gva", "adsb_aircraft_gva", "Geometric Vertical Accuracy"),
    ("sda", "adsb_aircraft_sda", "System Design Assurance"),
    ("seen", "adsb_aircraft_seen_seconds", "Seconds since a message was last received"),
    ("rssi", "adsb_aircraft_rssi_dbfs", "Recent average RSSI (dBFS)"),
)

# String fields exported as a presence series labeled with the value.
AIRCRAFT_CATEGORICALS: tuple[tuple[str, str, str], ...] = (
    ("squawk", "adsb_aircraft_squawk", "Mode A code (squawk) currently set"),
    ("emergency", "adsb_aircraft_emergency", "ADS-B emergency/priority status"),
    ("sil_type", "adsb_aircraft_sil_type", "Interpretation of the SIL value"),
)


def _build_families() -> tuple[MetricFamily, ...]:
    families: list[MetricFamily] = [
        STATS_MESSAGES,
        STATS_MESSAGES_BY_DF,
        STATS_TRACKS,
        STATS_ACCEPTED,
        STATS_ACCEPTED_TOTAL,
        STATS_ADAPTIVE_GAIN_SECONDS,
    ]
    families += [MetricFamily(name, doc, _ORIGIN) for _, name, doc in ORIGIN_COUNTERS + ORIGIN_READINGS]
    families += [MetricFamily(name, doc, _PERIOD) for _, name, doc in CPU_COUNTERS + CPR_COUNTERS + ADAPTIVE_READINGS]
    families += [AIRCRAFT_RECENT_OBSERVED, AIRCRAFT_RECENT_WITH_POSITION, AIRCRAFT_MESSAGES, AIRCRAFT_NAV_MODE]
    families += [MetricFamily(name, doc, _AIRCRAFT) for _, name, doc in AIRCRAFT_READINGS]
    families += [MetricFamily(name, doc, (*_AIRCRAFT, field)) for field, name, doc in AIRCRAFT_CATEGORICALS]
    return tuple(families)


FAMILIES: tuple[MetricFamily, ...] = _build_families()
"""Every gauge family the exporter publishes."""
