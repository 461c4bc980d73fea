"""Discrete-frequency wind speed time histories after Wittig & Sinha (1975)."""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Sequence
from itertools import accumulate
from os import PathLike
from typing import Any

import numpy as np

MPH_TO_MPS = 0.44704
MPS_TO_FPS = 3.28084
KARMAN_CONSTANT = 0.4
COHERENCE_COEFF = 10.0
FREQ_CUTOFF = 5.0

VelocityProfile = Callable[
    [str, Sequence[float], float, float], "tuple[float, Sequence[float]]"
]


def inverse_fft_real(values: Sequence[complex]) -> np.ndarray:
    """Return the real part of the normalised inverse FFT of ``values``."""
    return np.fft.ifft(np.asarray(values, dtype=complex)).real


def _num_times(total_time: float, time_step: float) -> int:
    steps = int(math.ceil(total_time / time_step))
    return steps if steps % 2 == 0 else steps + 1


class WittigSinha:
    """Stochastic wind model generating correlated velocity histories over height.

    ``velocity_profile`` is called as
    ``velocity_profile(exposure_category, heights, karman_constant, gust_speed)``
    with the gust speed in mph, and must return
    ``(friction_velocity, wind_velocities)`` with one velocity per height.
    """

    model_name = "WittigSinha"

    def __init__(
        self,
        exposure_category: str,
        gust_speed: float,
        heights: Sequence[float],
        frequencies: Sequence[float],
        total_time: float,
        velocity_profile: VelocityProfile,
        x_locations: Sequence[float] = (1.0,),
        y_locations: Sequence[float] = (1.0,),
        seed: int | None = None,
    ) -> None:
        self.exposure_category = exposure_category
        self.gust_speed = gust_speed * MPH_TO_MPS
        self.heights = np.asarray(heights, dtype=float)
        self.x_locations = list(x_locations)
        self.y_locations = list(y_locations)
        self.seed = seed
        self.freq_cutoff = FREQ_CUTOFF
        self.time_step = 1.0 / (2.0 * self.freq_cutoff)
        self.num_times = _num_times(total_time, self.time_step)
        self.num_freqs = self.num_times // 2
        self.frequencies = np.asarray(frequencies, dtype=float)
        if len(self.frequencies) != self.num_freqs:
            raise ValueError(
                f"expected {self.num_freqs} frequencies for a total time of "
                f"{total_time}, got {len(self.frequencies)}"
            )

        friction_velocity, velocities = velocity_profile(
            exposure_category, list(self.heights), KARMAN_CONSTANT, gust_speed
        )
        self.friction_velocity = float(friction_velocity)
        self.wind_velocities = np.asarray(velocities, dtype=float)
        if len(self.wind_velocities) != len(self.heights):
            raise ValueError(
                "velocity profile must return one velocity for each height"
            )

    @classmethod
    def from_floors(
        cls,
        exposure_category: str,
        gust_speed: float,
        height: float,
        num_floors: int,
        total_time: float,
        velocity_profile: VelocityProfile,
        seed: int | None = None,
    ) -> "WittigSinha":
        """Build a model with one point at the top of each of ``num_floors`` floors."""
        if num_floors < 1:
            raise ValueError("number of floors must be at least 1")
        floor_height = height / num_floors
        heights = list(accumulate([floor_height] * num_floors))
        num_freqs = _num_times(total_time, 1.0 / (2.0 * FREQ_CUTOFF)) // 2
        frequencies = [(i + 1) * FREQ_CUTOFF / num_freqs for i in range(num_freqs)]
        return cls(
            exposure_category,
            gust_speed,
            heights,
            frequencies,
            total_time,
            velocity_profile,
            seed=seed,
        )

    @classmethod
    def from_locations(
        cls,
        exposure_category: str,
        gust_speed: float,
        heights: Sequence[float],
        x_locations: Sequence[float],
        y_locations: Sequence[float],
        total_time: float,
        velocity_profile: VelocityProfile,
        seed: int | None = None,
    ) -> "WittigSinha":
        """Build a model on a grid of x, y locations and heights."""
        num_freqs = _num_times(total_time, 1.0 / (2.0 * FREQ_CUTOFF)) // 2
        frequencies = [i * FREQ_CUTOFF / num_freqs for i in range(num_freqs)]
        return cls(
            exposure_category,
            gust_speed,
            heights,
            frequencies,
            total_time,
            velocity_profile,
            x_locations=x_locations,
            y_locations=y_locations,
            seed=seed,
        )

    def cross_spectral_density(self, frequency: float) -> np.ndarray:
        """Cross-spectral density matrix between all heights at ``frequency``."""
        z = self.heights
        u = self.wind_velocities
        diag = (
            200.0
            * self.friction_velocity**2
            * z
            / (u * (1.0 + 50.0 * frequency * z / u) ** (5.0 / 3.0))
        )
        separation = np.abs(z[:, None] - z[None, :])
        mean_velocity = 0.5 * (u[:, None] + u[None, :])
        density = (
            np.sqrt(np.outer(diag, diag))
            * np.exp(-COHERENCE_COEFF * frequency * separation / mean_velocity)
            * 0.999
        )
        np.fill_diagonal(density, diag)
        return density

    def _rng(self) -> np.random.Generator:
        if self.seed is not None:
            return np.random.default_rng(self.seed + 10)
        return np.random.default_rng()

    def complex_random_numbers(self) -> np.ndarray:
        """Correlated complex amplitudes, one row per frequency, one column per height."""
        rng = self._rng()
        draws = rng.standard_normal((len(self.heights), self.num_freqs, 2))
        white_noise = (draws[..., 0] + 1j * draws[..., 1]) * math.sqrt(0.5)

        scale = self.num_freqs * math.sqrt(2.0 * self.freq_cutoff / self.num_freqs)
        rows = []
        for index, frequency in enumerate(self.frequencies):
            density = self.cross_spectral_density(frequency)
            try:
                lower = np.linalg.cholesky(density)
            except np.linalg.LinAlgError as exc:
                raise ValueError(
                    "cross-spectral density matrix is not positive definite"
                ) from exc
            # Equation 5(a) of Wittig & Sinha (1975)
            rows.append(scale * (lower @ white_noise[:, index]))
        return np.array(rows, dtype=complex).reshape(self.num_freqs, len(self.heights))

    def location_history(
        self, random_numbers: np.ndarray, column_index: int, units: bool = False
    ) -> np.ndarray:
        """Velocity time history for one height from complex amplitudes (Eqs. 7 and 8)."""
        nf = self.num_freqs
        column = np.asarray(random_numbers, dtype=complex)[:, column_index]
        full_range = np.zeros(2 * nf, dtype=complex)
        full_range[1 : nf + 1] = column[:nf]
        full_range[nf + 1 :] = np.conj(column[: nf - 1][::-1])
        full_range[nf] = abs(column[nf - 1])
        history = inverse_fft_real(full_range)
        if units:
            history = history * MPS_TO_FPS
        return history

    def generate(self, event_name: str, units: bool = False) -> dict[str, Any]:
        """Generate an event description with one wind time history per floor."""
        if len(self.x_locations) != 1 or len(self.y_locations) != 1:
            raise RuntimeError(
                "only time histories along the z-axis at a single location "
                "are supported"
            )
        random_numbers = self.complex_random_numbers()
        histories = [
            self.location_history(random_numbers, k, units)
            for k in range(len(self.heights))
        ]

        time_series = []
        patterns = []
        for number, (history, velocity) in enumerate(
            zip(histories, self.wind_velocities), start=1
        ):
            label = str(number)
            patterns.append(
                {
                    "name": label,
                    "timeSeries": label,
                    "type": "WindFloorLoad",
                    "floor": label,
                    "dof": 1,
                    "profileVelocity": float(velocity),
                }
            )
            time_series.append(
                {
                    "name": label,
                    "dT": self.time_step,
                    "type": "Value",
                    "data": history.tolist(),
                }
            )

        return {
            "dT": self.time_step,
            "numSteps": self.num_times,
            "Events": [
                {
                    "type": "Wind",
                    "subtype": self.model_name,
                    "timeSeries": time_series,
                    "pattern": patterns,
                }
            ],
        }

    def write(
        self,
        event_name: str,
        output_location: str | PathLike[str],
        units: bool = False,
    ) -> bool:
        """Generate an event and write it as JSON to ``output_location``."""
        event = self.generate(event_name, units)
        with open(output_location, "w", encoding="utf-8") as handle:
            json.dump(event, handle, indent=4, sort_keys=True)
        return True