# windsim

windsim generates stochastic wind velocity time histories along the height of
a building. It uses the discrete frequency method of Wittig & Sinha (1975).
The velocities at different heights are correlated through a cross-spectral
density matrix. That matrix is built from a Kaimal-type spectrum and an
exponential coherence function with a coefficient of 10.

## Installation

```
pip install .
```

The only runtime dependency is `numpy`. To install the test dependencies as
well, run `pip install .[test]`.

## Usage

Everything lives in the module `windsim.wittig_sinha`.

You supply the mean velocity profile as a function. It is called as:

```
velocity_profile(exposure_category, heights, karman_constant, gust_speed)
```

- `heights` is a list of floats.
- `karman_constant` is 0.4.
- `gust_speed` is the gust speed in mph, as it was given to the model.

The function must return `(friction_velocity, wind_velocities)`, with one
velocity for each height.

```python
from windsim.wittig_sinha import WittigSinha

def profile(category, heights, karman, gust_speed):
    ...
    return friction_velocity, velocities

model = WittigSinha.from_floors(
    "A", 30.0, 200.0, 20, 600.0, velocity_profile=profile, seed=100
)

event = model.generate("MyEvent")
model.write("MyEvent", "wind_event.json", units=False)
```

### Building a model

- `WittigSinha.from_floors(exposure_category, gust_speed, height, num_floors, total_time, velocity_profile, seed=None)`
  - Places one point at the top of each of `num_floors` equal floors.
  - The frequencies run from `5 / n` up to 5 Hz.
  - `num_floors` below 1 raises `ValueError`.
- `WittigSinha.from_locations(exposure_category, gust_speed, heights, x_locations, y_locations, total_time, velocity_profile, seed=None)`
  - Takes explicit heights and x and y locations.
  - The frequencies start at 0 Hz and go up in steps of `5 / n`.
- `WittigSinha(...)`
  - The constructor takes the heights and the frequencies directly.
  - It raises `ValueError` if the number of frequencies does not match the duration.
  - It also raises `ValueError` if the profile does not return one velocity per height.

In all three:

- The gust speed is given in mph and stored in m/s.
- The cutoff frequency is 5 Hz, so the time step is 0.1 s.
- The number of time steps is `total_time / 0.1` rounded up to an even number.
- There are half as many frequencies as time steps.

### Generating histories

`generate(event_name, units=False)` returns a dictionary with these entries:

- `dT` and `numSteps`.
- `Events`, a list holding one `"Wind"` event with subtype `"WittigSinha"`. The event has:
  - `timeSeries`: one `"Value"` series per height. Each series has `name`, `dT` and `data`.
  - `pattern`: one `"WindFloorLoad"` entry per height. Each entry has `name`, `timeSeries`, `floor`, `dof` (always 1) and `profileVelocity`.

When `units=True` the velocities are converted to ft/s. `event_name` does not
appear in the output.

Only one horizontal location is supported. If there is more than one x or y
location, `generate` raises `RuntimeError`.

`write(event_name, output_location, units=False)` generates an event and
writes it to a file. The file is JSON, indented by 4 spaces, with its keys
sorted. On success `write` returns `True`.

### Seeds

If you give a seed, the random numbers come from
`numpy.random.default_rng(seed + 10)`. Two models with the same seed and the
same inputs therefore give identical histories. Without a seed, every call
draws fresh random numbers.

### Lower-level pieces

- `cross_spectral_density(frequency)` returns the symmetric matrix between all heights.
- `complex_random_numbers()` returns the correlated complex amplitudes, with one row per frequency and one column per height.
  - It raises `ValueError` if the density matrix is not positive definite.
- `location_history(random_numbers, column_index, units=False)` builds the full two-sided spectrum for one height and returns its real inverse FFT.
- `inverse_fft_real(values)` returns the real part of `numpy.fft.ifft(values)`.

## What the package does not do

- It does not provide velocity profiles, such as the profiles for exposure categories. You always supply the profile function.
- It has no command-line program.
- It cannot produce histories for more than one horizontal location.