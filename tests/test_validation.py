# tests/test_validation.py
import math

import pytest
from rlcsim_core.topologies import get_topology, WaveformKind
from rlcsim_core.validation import (
    ParameterValidator,
    ParameterValidationError,
    ParameterIssueCode,
    ValidationIssueLevel,
    validate_parameters,
)


@pytest.fixture
def series():
    return get_topology("2-rlc-series")


def _codes(issues):
    return [issue.code for issue in issues]


class TestParameterValidator:

    def test_valid_parameters_produce_no_errors(self, series, series_rlc_params):
        validator = ParameterValidator(series, WaveformKind.STEP)
        issues = validator.validate(series_rlc_params)
        assert not [i for i in issues if i.level == ValidationIssueLevel.ERROR]
        assert validator.clean == series_rlc_params

    def test_missing_parameter(self, series, series_rlc_params):
        del series_rlc_params["C"]
        with pytest.raises(ParameterValidationError) as excinfo:
            validate_parameters(series, series_rlc_params, WaveformKind.STEP)
        err = excinfo.value
        assert err.parameter == "C"
        assert err.topology_id == "2-rlc-series"
        assert _codes(err.issues) == [ParameterIssueCode.PARAM_MISSING.code]
        assert "Required parameter 'C' is missing" in str(err)

    def test_missing_frequency_for_sine(self, series, series_rlc_params):
        with pytest.raises(ParameterValidationError) as excinfo:
            validate_parameters(series, series_rlc_params, WaveformKind.SINE)
        assert excinfo.value.parameter == "Freq"

    @pytest.mark.parametrize("value, code", [
        (float("nan"), ParameterIssueCode.PARAM_NOT_FINITE),
        (float("inf"), ParameterIssueCode.PARAM_NOT_FINITE),
        ("abc", ParameterIssueCode.PARAM_NOT_NUMERIC),
        ("50", ParameterIssueCode.PARAM_NOT_NUMERIC),
        (None, ParameterIssueCode.PARAM_NOT_NUMERIC),
        (True, ParameterIssueCode.PARAM_NOT_NUMERIC),
    ])
    def test_unusable_values(self, series, series_rlc_params, value, code):
        series_rlc_params["R"] = value
        with pytest.raises(ParameterValidationError) as excinfo:
            validate_parameters(series, series_rlc_params, WaveformKind.STEP)
        assert excinfo.value.parameter == "R"
        assert _codes(excinfo.value.issues) == [code.code]

    def test_multiple_errors_are_all_reported(self, series):
        with pytest.raises(ParameterValidationError) as excinfo:
            validate_parameters(series, {"V": 1.0, "R": float("nan")}, WaveformKind.STEP)
        err = excinfo.value
        assert len(err.issues) == 4  # R non-finite; L, C, tEnd missing
        assert err.parameter == "R"
        assert "4 error(s)" in str(err)
        report = err.get_diagnostic_report()
        assert "Invalid Simulation Parameters" in report
        assert "2-rlc-series" in report

    def test_unsupported_waveform(self):
        discharge = get_topology("1-rc-discharge")
        with pytest.raises(ParameterValidationError) as excinfo:
            validate_parameters(discharge, {"V0": 1.0, "R": 1.0, "C": 1.0, "tEnd": 1.0}, WaveformKind.RAMP)
        err = excinfo.value
        assert err.parameter is None
        assert _codes(err.issues) == [ParameterIssueCode.INPUT_KIND_UNSUPPORTED.code]
        assert "does not accept a Ramp input" in str(err)

    def test_unknown_names_are_dropped_with_info(self, series, series_rlc_params):
        series_rlc_params["Rload"] = 10.0
        validator = ParameterValidator(series, WaveformKind.STEP)
        issues = validator.validate(series_rlc_params)
        assert _codes(issues) == [ParameterIssueCode.PARAM_INFO_UNUSED.code]
        assert issues[0].level == ValidationIssueLevel.INFO
        assert "Rload" not in validator.clean

    def test_optional_frequency_kept_when_usable(self, series, series_rlc_params):
        series_rlc_params["Freq"] = 50
        clean = validate_parameters(series, series_rlc_params, WaveformKind.STEP)
        assert clean["Freq"] == 50.0
        assert isinstance(clean["Freq"], float)

    def test_optional_frequency_dropped_when_unusable(self, series, series_rlc_params):
        series_rlc_params["Freq"] = float("nan")
        clean = validate_parameters(series, series_rlc_params, WaveformKind.STEP)
        assert "Freq" not in clean

    def test_integers_are_converted_to_float(self, series):
        clean = validate_parameters(series, {"V": 10, "R": 50, "L": 1, "C": 1, "tEnd": 2}, WaveformKind.STEP)
        assert all(isinstance(v, float) for v in clean.values())

    def test_validation_is_idempotent(self, series, series_rlc_params):
        series_rlc_params.update({"Freq": 100, "extra": "ignored"})
        clean = validate_parameters(series, series_rlc_params, WaveformKind.STEP)
        assert validate_parameters(series, clean, WaveformKind.STEP) == clean

    def test_input_mapping_is_not_modified(self, series, series_rlc_params):
        series_rlc_params["extra"] = 1
        snapshot = dict(series_rlc_params)
        validate_parameters(series, series_rlc_params, WaveformKind.STEP)
        assert series_rlc_params == snapshot

    def test_negative_values_pass_validation(self, series, series_rlc_params):
        # Range checks belong to the circuit model, not to input validation.
        series_rlc_params["C"] = -1e-6
        clean = validate_parameters(series, series_rlc_params, WaveformKind.STEP)
        assert math.copysign(1.0, clean["C"]) == -1.0


class TestIssueCodes:

    def test_format_message(self):
        message = ParameterIssueCode.PARAM_NOT_FINITE.format_message(parameter_name="R", value_repr="nan")
        assert message == "Parameter 'R' must be finite, got nan."

    def test_format_message_with_missing_key_does_not_raise(self):
        message = ParameterIssueCode.PARAM_NOT_FINITE.format_message(parameter_name="R")
        assert "Missing key" in message
