from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from poisonsim.config import SimulationConfig, flux_from_query
from poisonsim.engine import simulate
from poisonsim.equilibrium import solve_equilibrium

from . import schemas
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/simulation", response_model=schemas.SimulationData)
async def simulation_data(request: Request, settings: Settings = Depends(get_settings)):
    config = SimulationConfig.from_query(
        request.query_params, settings.reference_flux, strict=settings.strict_params
    )
    logger.info(
        "simulation %.4g d from %.4g d at state %.3g", config.duration_days, config.start_offset_days, config.power_state
    )
    trajectory = await run_in_threadpool(simulate, config)
    return trajectory.to_dict()


@router.get("/equilibrium", response_model=schemas.EquilibriumValues)
async def equilibrium_values(request: Request, settings: Settings = Depends(get_settings)):
    phi = flux_from_query(request.query_params, settings.reference_flux, strict=settings.strict_params)
    logger.info("equilibrium at phi %.4g", phi)
    report = await run_in_threadpool(solve_equilibrium, phi)
    return report.to_dict()


@router.get("/health", response_model=schemas.Health)
async def health():
    return schemas.Health()
