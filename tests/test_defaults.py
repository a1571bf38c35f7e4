# tests/test_defaults.py
import pytest
from rlcsim_core.topologies import (
    default_parameters,
    switch_waveform,
    WaveformKind,
    UnimplementedTopologyError,
)
from rlcsim_core.topologies.defaults import SINE_AMPLITUDE_DEFAULT


class TestDefaultParameters:

    def test_step_defaults(self):
        params = default_parameters("2-rlc-series")
        assert params == {"V": 10.0, "R": 50.0, "L": 0.01, "C": 1e-6, "tEnd": 0.01, "Freq": 1000.0}

    def test_sine_defaults_use_unit_amplitude(self):
        step = default_parameters("2-rlc-series", WaveformKind.STEP)
        sine = default_parameters("2-rlc-series", "Sine")
        assert sine["V"] == SINE_AMPLITUDE_DEFAULT
        assert {k: v for k, v in sine.items() if k != "V"} == {k: v for k, v in step.items() if k != "V"}

    def test_source_free_defaults_have_no_amplitude(self):
        params = default_parameters("1-rl-deenergize")
        assert "V" not in params
        assert params["I0"] == 1.0

    def test_returns_fresh_dictionary(self):
        first = default_parameters("1-rc-charge")
        first["R"] = 1.0
        assert default_parameters("1-rc-charge")["R"] == 1000.0

    def test_unsupported_waveform_raises(self):
        with pytest.raises(ValueError, match="does not accept a Sine input"):
            default_parameters("1-rc-discharge", WaveformKind.SINE)

    def test_unknown_topology_raises(self):
        with pytest.raises(UnimplementedTopologyError):
            default_parameters("9-unknown")


class TestSwitchWaveform:

    def test_untouched_amplitude_follows_new_default(self):
        held = default_parameters("2-rlc-series", "Step")
        switched = switch_waveform("2-rlc-series", held, "Step", "Sine")
        assert switched["V"] == SINE_AMPLITUDE_DEFAULT

    def test_and_back_again(self):
        held = default_parameters("2-rlc-series", "Sine")
        switched = switch_waveform("2-rlc-series", held, WaveformKind.SINE, WaveformKind.STEP)
        assert switched["V"] == 10.0

    def test_user_values_are_kept(self):
        held = default_parameters("2-rlc-series", "Step")
        held.update({"V": 5.0, "R": 75.0})
        switched = switch_waveform("2-rlc-series", held, "Step", "Ramp")
        assert switched["V"] == 5.0
        assert switched["R"] == 75.0
        assert switched["L"] == 0.01

    def test_unknown_names_are_dropped(self):
        held = {"V": 3.0, "X": 1.0}
        switched = switch_waveform("1-rc-charge", held, "Step", "Sine")
        assert "X" not in switched
        assert switched["V"] == 3.0
        assert switched["C"] == 1e-6

    def test_held_mapping_is_not_modified(self):
        held = default_parameters("1-rc-charge")
        snapshot = dict(held)
        switch_waveform("1-rc-charge", held, "Step", "Sine")
        assert held == snapshot
