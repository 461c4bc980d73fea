import json

import numpy as np
import pytest

from windsim.wittig_sinha import WittigSinha, inverse_fft_real


class RecordingProfile:
    """Simple power-law profile that remembers how it was called."""

    def __init__(self):
        self.calls = []

    def __call__(self, exposure_category, heights, karman_constant, gust_speed):
        self.calls.append((exposure_category, list(heights), karman_constant, gust_speed))
        velocities = [gust_speed * (z / 10.0) ** 0.2 for z in heights]
        return 1.5, velocities


@pytest.fixture
def profile():
    return RecordingProfile()


@pytest.fixture
def floor_model(profile):
    return WittigSinha.from_floors("A", 30.0, 200.0, 20, 60.0, profile, seed=7)


def test_inverse_fft_real_matches_source_case():
    values = [
        complex(15.0, 0.0),
        complex(-2.5, 3.440954801177933),
        complex(-2.5, 0.812299240582266),
        complex(-2.5, -0.812299240582266),
        complex(-2.5, -3.440954801177933),
    ]
    assert np.allclose(inverse_fft_real(values), [1.0, 2.0, 3.0, 4.0, 5.0])


def test_floor_heights_and_frequencies(floor_model):
    assert np.allclose(floor_model.heights, np.arange(1, 21) * 10.0)
    assert floor_model.num_times == 600
    assert floor_model.num_freqs == 300
    assert floor_model.frequencies[0] == pytest.approx(5.0 / 300)
    assert floor_model.frequencies[-1] == pytest.approx(5.0)
    assert floor_model.time_step == pytest.approx(0.1)


@pytest.mark.parametrize("total_time, expected", [(1.0, 10), (0.45, 6)])
def test_number_of_time_steps_is_even(profile, total_time, expected):
    model = WittigSinha.from_floors("A", 30.0, 10.0, 1, total_time, profile)
    assert model.num_times == expected


def test_profile_receives_raw_gust_speed(floor_model, profile):
    category, heights, karman, gust = profile.calls[0]
    assert category == "A"
    assert karman == pytest.approx(0.4)
    assert gust == pytest.approx(30.0)
    assert len(heights) == 20
    assert floor_model.gust_speed == pytest.approx(30.0 * 0.44704)


def test_location_frequencies_start_at_zero(profile):
    model = WittigSinha.from_locations("D", 30.0, [10.0, 23.0, 50.0], [0.0], [0.0], 200.0, profile)
    assert model.frequencies[0] == 0.0
    assert model.frequencies[1] == pytest.approx(5.0 / 1000)
    assert len(model.frequencies) == 1000


def test_cross_spectral_density_invariants(floor_model):
    low = floor_model.cross_spectral_density(0.001666666666667)
    high = floor_model.cross_spectral_density(1.0)
    assert low.shape == (20, 20)
    assert np.allclose(low, low.T)
    assert np.all(np.diag(low) > 0)
    assert np.all(np.diag(high) < np.diag(low))
    bound = np.sqrt(np.outer(np.diag(low), np.diag(low)))
    off = ~np.eye(20, dtype=bool)
    assert np.all(low[off] < bound[off])
    assert np.all(np.linalg.eigvalsh(low) > 0)


def test_complex_random_numbers_shape_and_seed(floor_model):
    first = floor_model.complex_random_numbers()
    second = floor_model.complex_random_numbers()
    assert first.shape == (300, 20)
    assert np.array_equal(first, second)


def test_location_history_units(floor_model):
    numbers = floor_model.complex_random_numbers()
    metric = floor_model.location_history(numbers, 3, False)
    imperial = floor_model.location_history(numbers, 3, True)
    assert metric.shape == (600,)
    assert np.allclose(imperial, metric * 3.28084)


def test_generate_structure(floor_model):
    event = floor_model.generate("Test")
    assert event["numSteps"] == 600
    assert event["dT"] == pytest.approx(0.1)
    inner = event["Events"][0]
    assert inner["type"] == "Wind"
    assert inner["subtype"] == "WittigSinha"
    assert len(inner["timeSeries"]) == 20
    assert len(inner["pattern"]) == 20
    assert inner["pattern"][4]["floor"] == "5"
    assert inner["pattern"][4]["type"] == "WindFloorLoad"
    assert inner["pattern"][4]["dof"] == 1
    assert inner["pattern"][4]["profileVelocity"] == pytest.approx(floor_model.wind_velocities[4])
    assert inner["timeSeries"][0]["type"] == "Value"
    assert all(len(series["data"]) == 600 for series in inner["timeSeries"])


def test_seeded_runs_are_identical(profile):
    run1 = WittigSinha.from_floors("D", 30.0, 123.0, 8, 200.0, profile, seed=100)
    run2 = WittigSinha.from_floors("D", 30.0, 123.0, 8, 200.0, profile, seed=100)
    data1 = run1.generate("Run1")["Events"][0]["timeSeries"][7]["data"]
    data2 = run2.generate("Run2")["Events"][0]["timeSeries"][7]["data"]
    assert len(data1) == len(data2) == 2000
    assert np.allclose(data1, data2)


def test_multiple_locations_raise(profile):
    model = WittigSinha.from_locations("D", 30.0, [1.0, 2.0], [0.0], [10.0, 23.0, 50.0], 200.0, profile, seed=25)
    with pytest.raises(RuntimeError):
        model.generate("Test")


def test_single_location_has_one_series_per_height(profile):
    model = WittigSinha.from_locations("D", 30.0, [10.0, 23.0, 50.0], [0.0], [0.0], 200.0, profile)
    event = model.generate("NonVectorCase")
    assert len(event["Events"][0]["timeSeries"]) == 3


def test_write_produces_json(tmp_path, profile):
    model = WittigSinha.from_floors("D", 30.0, 30.0, 3, 10.0, profile, seed=3)
    target = tmp_path / "wind.json"
    assert model.write("Blah", target, False) is True
    loaded = json.loads(target.read_text(encoding="utf-8"))
    assert loaded == model.generate("Blah")


def test_wrong_frequency_count_raises(profile):
    with pytest.raises(ValueError):
        WittigSinha("A", 30.0, [10.0], [0.1, 0.2], 60.0, profile)


def test_profile_length_mismatch_raises():
    def short_profile(category, heights, karman, gust):
        return 1.0, [1.0]

    with pytest.raises(ValueError):
        WittigSinha.from_floors("A", 30.0, 20.0, 2, 1.0, short_profile)