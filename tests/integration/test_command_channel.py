"""
Integration tests for the command channel.

Drive a full session through plain dict commands, as a host would, and
check the events that come back.
"""
import json

import pytest

from nanoreactor.application import CommandChannel
from nanoreactor.core import SimConfig
from nanoreactor.core.service import ReactorService

H2_ATOMS = [
    {"element": "H", "position": [-0.37, 0.0, 0.0], "id": 10},
    {"element": "H", "position": [0.37, 0.0, 0.0], "id": 11},
]

WATER_ATOMS = [
    {"element": "O", "position": [0.0, 0.0, 0.0]},
    {"element": "H", "position": [0.76, 0.59, 0.0]},
    {"element": "H", "position": [-0.76, 0.59, 0.0]},
]


@pytest.fixture
def channel() -> CommandChannel:
    """Channel over a seeded service."""
    return CommandChannel(ReactorService(seed=4))


@pytest.fixture
def ready_channel(channel: CommandChannel) -> CommandChannel:
    """Channel with an initialized H2 session."""
    channel.handle({"type": "INIT", "atoms": H2_ATOMS})
    return channel


def only_event(events, event_type: str) -> dict:
    assert len(events) == 1
    assert events[0]["type"] == event_type
    return events[0]


class TestInit:
    """Tests for session initialization."""

    def test_state_then_ready(self, channel: CommandChannel) -> None:
        """Test INIT emits STATE_UPDATE followed by READY."""
        events = channel.handle({"type": "INIT", "atoms": H2_ATOMS})
        assert [e["type"] for e in events] == ["STATE_UPDATE", "READY"]

        state = events[0]
        assert state["step"] == 0
        assert state["elements"] == ["H", "H"]
        assert state["bonds"] == [
            {"i": 0, "j": 1, "order": 1, "length": pytest.approx(0.74, abs=0.01)}
        ]
        assert state["species"] == [{"formula": "H2", "count": 1}]

    def test_camel_case_payload(self, channel: CommandChannel) -> None:
        """Test event keys use camelCase."""
        state = channel.handle({"type": "INIT", "atoms": WATER_ATOMS})[0]
        for key in ("kineticEnergy", "potentialEnergy", "totalEnergy", "stepsPerSecond"):
            assert key in state
        assert "kinetic_energy" not in state
        assert state["species"] == [{"formula": "H2O", "count": 1}]

    def test_events_are_plain_data(self, channel: CommandChannel) -> None:
        """Test that events serialize to JSON without engine objects."""
        events = channel.handle({"type": "INIT", "atoms": WATER_ATOMS})
        decoded = json.loads(json.dumps(events))
        assert decoded[0]["positions"][0] == pytest.approx(events[0]["positions"][0])

    def test_init_config(self, channel: CommandChannel) -> None:
        """Test camelCase config accepted at init."""
        channel.handle(
            {"type": "INIT", "atoms": H2_ATOMS, "config": {"targetTemp": 0, "stepsPerUpdate": 4}}
        )
        config = channel.service.config
        assert config.target_temperature == 0.0
        assert config.steps_per_update == 4

    def test_snake_case_config(self, channel: CommandChannel) -> None:
        """Test that field names work as well as aliases."""
        channel.handle({"type": "INIT", "atoms": H2_ATOMS, "config": {"confinement_radius": 7.5}})
        assert channel.service.config.confinement_radius == 7.5


class TestErrors:
    """Tests for error reporting."""

    @pytest.mark.parametrize("command", ["START", "STEP"])
    def test_not_initialized(self, channel: CommandChannel, command: str) -> None:
        """Test START/STEP before INIT."""
        event = only_event(channel.handle({"type": command}), "ERROR")
        assert event["message"] == "Engine not initialized"

    def test_unknown_command(self, channel: CommandChannel) -> None:
        """Test an unknown discriminator."""
        event = only_event(channel.handle({"type": "EXPLODE"}), "ERROR")
        assert event["message"]

    def test_missing_type(self, channel: CommandChannel) -> None:
        """Test a message without a type."""
        only_event(channel.handle({"atoms": H2_ATOMS}), "ERROR")

    def test_unsupported_element(self, channel: CommandChannel) -> None:
        """Test that unknown elements are rejected before the engine sees them."""
        atoms = [{"element": "Fe", "position": [0.0, 0.0, 0.0]}]
        event = only_event(channel.handle({"type": "INIT", "atoms": atoms}), "ERROR")
        assert "Fe" in event["message"]
        assert not channel.service.is_initialized

    def test_bad_position(self, channel: CommandChannel) -> None:
        """Test that positions must have three components."""
        atoms = [{"element": "H", "position": [0.0, 0.0]}]
        event = only_event(channel.handle({"type": "INIT", "atoms": atoms}), "ERROR")
        assert "position" in event["message"]

    def test_out_of_range_config(self, ready_channel: CommandChannel) -> None:
        """Test field constraints on config values."""
        event = only_event(
            ready_channel.handle({"type": "UPDATE_CONFIG", "config": {"dt": -1}}), "ERROR"
        )
        assert "dt" in event["message"]
        assert ready_channel.service.config.dt == 0.5

    def test_cross_field_config(self, ready_channel: CommandChannel) -> None:
        """Test that tau below dt is reported by the engine."""
        event = only_event(
            ready_channel.handle({"type": "UPDATE_CONFIG", "config": {"thermostatTau": 0.1}}),
            "ERROR",
        )
        assert "thermostat_tau" in event["message"]

    def test_unknown_config_key(self, ready_channel: CommandChannel) -> None:
        """Test that extra config keys are rejected."""
        only_event(
            ready_channel.handle({"type": "UPDATE_CONFIG", "config": {"warp": 9}}), "ERROR"
        )

    def test_session_survives_errors(self, ready_channel: CommandChannel) -> None:
        """Test that a rejected command leaves the session usable."""
        ready_channel.handle({"type": "EXPLODE"})
        state = only_event(ready_channel.handle({"type": "STEP"}), "STATE_UPDATE")
        assert state["step"] == 1


class TestRunLoop:
    """Tests for start/stop/step and ticks."""

    def test_step(self, ready_channel: CommandChannel) -> None:
        """Test single stepping."""
        state = only_event(ready_channel.handle({"type": "STEP"}), "STATE_UPDATE")
        assert state["step"] == 1
        assert state["time"] == pytest.approx(0.5)

    def test_tick_while_stopped(self, ready_channel: CommandChannel) -> None:
        """Test that ticks do nothing until START."""
        assert ready_channel.tick() == []

    def test_start_tick_stop(self, ready_channel: CommandChannel) -> None:
        """Test one batch per tick while running."""
        assert ready_channel.handle({"type": "START"}) == []
        assert ready_channel.is_running

        state = only_event(ready_channel.tick(), "STATE_UPDATE")
        assert state["step"] == SimConfig().steps_per_update

        assert ready_channel.handle({"type": "STOP"}) == []
        assert not ready_channel.is_running
        assert ready_channel.tick() == []

    def test_update_config_changes_batch(self, ready_channel: CommandChannel) -> None:
        """Test UPDATE_CONFIG applies to the next batch."""
        events = ready_channel.handle({"type": "UPDATE_CONFIG", "config": {"stepsPerUpdate": 3}})
        assert events == []
        ready_channel.handle({"type": "START"})
        assert ready_channel.tick()[0]["step"] == 3
        assert ready_channel.tick()[0]["step"] == 6

    def test_update_config_before_init(self, channel: CommandChannel) -> None:
        """Test that config sent before INIT is kept for the session."""
        assert channel.handle({"type": "UPDATE_CONFIG", "config": {"stepsPerUpdate": 2}}) == []
        channel.handle({"type": "INIT", "atoms": H2_ATOMS})
        channel.handle({"type": "START"})
        assert channel.tick()[0]["step"] == 2

    def test_reset(self, ready_channel: CommandChannel) -> None:
        """Test RESET stops the loop and reloads atoms."""
        ready_channel.handle({"type": "START"})
        ready_channel.tick()
        events = ready_channel.handle({"type": "RESET", "atoms": WATER_ATOMS})
        state = only_event(events, "STATE_UPDATE")
        assert state["step"] == 0
        assert state["elements"] == ["O", "H", "H"]
        assert not ready_channel.is_running
        assert ready_channel.tick() == []
