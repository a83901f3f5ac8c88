from __future__ import annotations

import os
from typing import Any

import httpx

from poisonsim.config import SimulationConfig
from poisonsim.engine import Trajectory
from poisonsim.equilibrium import EquilibriumReport


API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


class ApiClient:
    def __init__(self, base_url: str | None = None, transport: httpx.BaseTransport | None = None) -> None:
        self.base_url = base_url or API_BASE_URL
        self._client = httpx.Client(base_url=self.base_url, timeout=60.0, transport=transport)

    def simulation(self, params: dict[str, Any]) -> dict[str, list[float]]:
        r = self._client.get("/simulation", params=params)
        r.raise_for_status()
        return r.json()

    def equilibrium(self, phi_0: float | None = None) -> dict[str, float]:
        params = {} if phi_0 is None else {"phi_0": phi_0}
        r = self._client.get("/equilibrium", params=params)
        r.raise_for_status()
        return r.json()

    def run(self, config: SimulationConfig) -> Trajectory:
        """Compute a segment remotely; usable as a TransientSession runner."""
        params = {
            "time": config.duration_days,
            "state": config.power_state,
            "lastTime": config.start_offset_days,
            "lastIodine": config.initial_iodine,
            "lastXenon": config.initial_xenon,
            "lastPromethium": config.initial_promethium,
            "lastSamarium": config.initial_samarium,
        }
        if config.flux_override is not None:
            params["phi_0"] = config.flux_override
        data = self.simulation(params)
        return Trajectory.from_dict(data)

    def report(self, phi_0: float | None = None) -> EquilibriumReport:
        return EquilibriumReport(**self.equilibrium(phi_0))

    def close(self) -> None:
        self._client.close()
