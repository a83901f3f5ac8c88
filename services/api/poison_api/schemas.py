from __future__ import annotations

from pydantic import BaseModel


class SimulationData(BaseModel):
    time: list[float]
    iodine: list[float]
    xenon: list[float]
    promethium: list[float]
    samarium: list[float]
    reactivity_xe: list[float]
    reactivity_sm: list[float]


class EquilibriumValues(BaseModel):
    iodine_infinity: float
    xenon_infinity: float
    promethium_infinity: float
    samarium_infinity: float
    xe_reactivity_infinity: float
    sm_reactivity_infinity: float
    max_xenon: float
    max_xe_reactivity: float
    max_xenon_time: float
    max_xe_reactivity_time: float


class Health(BaseModel):
    status: str = "ok"
