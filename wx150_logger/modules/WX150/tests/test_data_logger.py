"""Unit tests for the hourly rotating weather log writer."""

from pathlib import Path

import pytest

from wx150_logger.modules.WX150.wx150_core.constants import WX150_LOG_HEADER
from wx150_logger.modules.WX150.wx150_core.context import StationContext
from wx150_logger.modules.WX150.wx150_core.data_logger import WX150DataLogger
from wx150_logger.modules.WX150.wx150_core.parsers.observation_types import (
    Observation,
    WeatherReading,
)

HEADER_LINE = ";".join(WX150_LOG_HEADER)
READING = WeatherReading(
    pressure_inhg=30.0294,
    pressure_bar=1.0169,
    temperature_c=21.4,
    relative_humidity=42.8,
    dewpoint_c=7.9,
)


def read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="ascii").splitlines()


@pytest.fixture
def context():
    return StationContext()


@pytest.fixture
def data_logger(tmp_path, context):
    logger = WX150DataLogger(tmp_path, context, fsync_on_flush=False)
    yield logger
    logger.close()


def at(context: StationContext, hour: int, minute: int = 0, second: int = 0) -> Observation:
    obs = context.observation
    obs.year, obs.month, obs.day = 2015, 6, 15
    obs.hour, obs.minute, obs.second = hour, minute, second
    return obs


class TestFileNaming:
    """Test deterministic hourly filenames."""

    def test_filename_is_zero_padded(self, data_logger):
        obs = Observation(year=2015, month=6, day=5, hour=7)
        assert data_logger.filename_for(obs) == "wx150log-2015.06.05.07"

    def test_filename_for_unset_observation(self, data_logger):
        assert data_logger.filename_for(Observation()) == "wx150log-1900.00.00.00"

    def test_custom_prefix(self, tmp_path, context):
        logger = WX150DataLogger(tmp_path, context, file_prefix="station")
        assert logger.filename_for(Observation(year=2020, month=1, day=2, hour=3)) == "station-2020.01.02.03"


class TestWriting:
    """Test headers, records and rotation."""

    def test_first_record_writes_header_and_defaults(self, tmp_path, data_logger, context):
        assert data_logger.log_weather(READING, context.observation) is True
        data_logger.close()

        path = tmp_path / "wx150log-1900.00.00.00"
        assert read_lines(path) == [
            HEADER_LINE,
            "1900;0;0;0;0;0;21.4;42.8;1.0169;7.9;0.0;0.0;0.0;0.0;0",
        ]

    def test_record_columns_follow_observation(self, tmp_path, data_logger, context):
        obs = at(context, 12, 34, 56)
        obs.latitude = -33.271234
        obs.longitude = -138.565678
        obs.altitude_metres = 45.6
        obs.hdop = 1.2
        obs.gps_fixed = 1

        data_logger.log_weather(READING, obs)
        data_logger.close()

        lines = read_lines(tmp_path / "wx150log-2015.06.15.12")
        assert lines[1].split(";") == [
            "2015", "6", "15", "12", "34", "56",
            "21.4", "42.8", "1.0169", "7.9",
            "-33.271234", "-138.565678", "45.6", "1.2", "1",
        ]

    def test_header_written_once_per_file(self, tmp_path, data_logger, context):
        for second in range(3):
            data_logger.log_weather(READING, at(context, 10, 0, second))
        data_logger.close()

        lines = read_lines(tmp_path / "wx150log-2015.06.15.10")
        assert lines.count(HEADER_LINE) == 1
        assert len(lines) == 4

    def test_hour_change_rotates_to_new_file(self, tmp_path, data_logger, context):
        data_logger.log_weather(READING, at(context, 10, 59, 58))
        data_logger.log_weather(READING, at(context, 10, 59, 59))
        data_logger.log_weather(READING, at(context, 11, 0, 1))
        data_logger.close()

        first = read_lines(tmp_path / "wx150log-2015.06.15.10")
        second = read_lines(tmp_path / "wx150log-2015.06.15.11")
        assert first[0] == HEADER_LINE and second[0] == HEADER_LINE
        assert first.count(HEADER_LINE) == 1 and second.count(HEADER_LINE) == 1
        assert [line.split(";")[3] for line in first[1:]] == ["10", "10"]
        assert [line.split(";")[3] for line in second[1:]] == ["11"]

    def test_header_once_per_process(self, tmp_path, context):
        logger = WX150DataLogger(tmp_path, context, header_per_file=False, fsync_on_flush=False)
        logger.log_weather(READING, at(context, 10))
        logger.log_weather(READING, at(context, 11))
        logger.close()

        assert read_lines(tmp_path / "wx150log-2015.06.15.10")[0] == HEADER_LINE
        second = read_lines(tmp_path / "wx150log-2015.06.15.11")
        assert HEADER_LINE not in second
        assert len(second) == 1
        assert context.rotation.header_ever_written is True

    def test_rotation_truncates_existing_file(self, tmp_path, data_logger, context):
        path = tmp_path / "wx150log-2015.06.15.10"
        path.write_text("stale\n", encoding="ascii")

        data_logger.log_weather(READING, at(context, 10))
        data_logger.close()

        assert "stale" not in read_lines(path)

    def test_creates_output_directory(self, tmp_path, context):
        out = tmp_path / "nested" / "wx"
        logger = WX150DataLogger(out, context, fsync_on_flush=False)
        assert logger.log_weather(READING, context.observation) is True
        logger.close()
        assert (out / "wx150log-1900.00.00.00").exists()

    def test_records_written_counter(self, data_logger, context):
        data_logger.log_weather(READING, at(context, 1))
        data_logger.log_weather(READING, at(context, 2))
        assert data_logger.records_written == 2


class TestRotationState:
    """Test ensure_current_file idempotence and lifecycle."""

    def test_ensure_current_file_is_idempotent(self, data_logger, context):
        obs = at(context, 9)
        handle = data_logger.ensure_current_file(obs)
        data_logger.append_record(handle, READING, obs)
        assert data_logger.state.header_written is True

        again = data_logger.ensure_current_file(obs)
        assert again is handle
        assert not handle.closed
        assert data_logger.state.header_written is True

    def test_rotation_closes_previous_handle(self, data_logger, context):
        first = data_logger.ensure_current_file(at(context, 9))
        second = data_logger.ensure_current_file(at(context, 10))
        assert first.closed
        assert second is not first
        assert data_logger.state.file_key == (2015, 6, 15, 10)
        assert data_logger.state.header_written is False

    def test_date_change_within_same_hour_keeps_file(self, tmp_path, data_logger, context):
        obs = context.observation
        obs.hour = 12
        data_logger.log_weather(READING, obs)
        handle = data_logger.state.handle

        obs.year, obs.month, obs.day = 2015, 6, 15
        obs.second = 5
        data_logger.log_weather(READING, obs)

        assert data_logger.state.handle is handle
        assert not handle.closed
        data_logger.close()

        assert sorted(p.name for p in tmp_path.iterdir()) == ["wx150log-1900.00.00.12"]
        lines = read_lines(tmp_path / "wx150log-1900.00.00.12")
        assert lines.count(HEADER_LINE) == 1
        assert len(lines) == 3
        assert lines[2].startswith("2015;6;15;12;0;5;")

    def test_next_hour_after_date_uses_dated_name(self, tmp_path, data_logger, context):
        obs = context.observation
        obs.hour = 12
        data_logger.log_weather(READING, obs)
        obs.year, obs.month, obs.day = 2015, 6, 15
        data_logger.log_weather(READING, obs)
        obs.hour = 13
        data_logger.log_weather(READING, obs)
        data_logger.close()

        assert (tmp_path / "wx150log-2015.06.15.13").exists()

    def test_close_resets_handle(self, data_logger, context):
        handle = data_logger.ensure_current_file(context.observation)
        data_logger.close()
        assert handle.closed
        assert data_logger.state.handle is None
        data_logger.close()

    def test_filepath_tracks_current_file(self, tmp_path, data_logger, context):
        assert data_logger.filepath is None
        data_logger.ensure_current_file(at(context, 4))
        assert data_logger.filepath == tmp_path / "wx150log-2015.06.15.04"


class TestFlushPolicy:
    """Test minute-boundary flushing."""

    def test_fsync_only_when_minute_changes(self, tmp_path, context, monkeypatch):
        synced = []
        monkeypatch.setattr(
            "wx150_logger.modules.WX150.wx150_core.data_logger.os.fsync",
            lambda fd: synced.append(fd),
        )
        logger = WX150DataLogger(tmp_path, context)

        logger.log_weather(READING, at(context, 10, 0, 1))
        logger.log_weather(READING, at(context, 10, 0, 2))
        logger.log_weather(READING, at(context, 10, 0, 3))
        assert len(synced) == 1

        logger.log_weather(READING, at(context, 10, 1, 0))
        assert len(synced) == 2
        assert context.rotation.previous_minute == 1
        logger.close()

    def test_flushed_rows_visible_before_close(self, tmp_path, data_logger, context):
        data_logger.log_weather(READING, at(context, 10, 0, 1))
        lines = read_lines(tmp_path / "wx150log-2015.06.15.10")
        assert len(lines) == 2


class TestOpenFailures:
    """Test that unwritable output never raises."""

    def test_open_failure_skips_record(self, tmp_path, context):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="ascii")
        logger = WX150DataLogger(blocker, context, fsync_on_flush=False)

        assert logger.ensure_current_file(context.observation) is None
        assert logger.log_weather(READING, context.observation) is False
        assert context.rotation.open_failures == 2
        assert context.rotation.handle is None
        assert logger.records_written == 0

    def test_recovers_when_directory_becomes_writable(self, tmp_path, context):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="ascii")
        logger = WX150DataLogger(blocker, context, fsync_on_flush=False)
        assert logger.log_weather(READING, context.observation) is False

        logger.output_dir = tmp_path / "ok"
        assert logger.log_weather(READING, context.observation) is True
        assert context.rotation.open_failures == 0
        logger.close()
        assert read_lines(tmp_path / "ok" / "wx150log-1900.00.00.00")[0] == HEADER_LINE
