"""Logical chain clock.

GET  /v1/chain          current block height and time (public)
POST /v1/chain/blocks   mine blocks; dev/test only, hidden in prod
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field, model_validator

from credential_registry.api.dependencies import CallerDep, RegistryDep
from credential_registry.core.config import SETTINGS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/chain", tags=["chain"])


class BlockOut(BaseModel):
    block_height: int
    block_time: int


class MineIn(BaseModel):
    count: int = Field(default=1, ge=1)
    interval_seconds: int | None = Field(default=None, gt=0)
    # Jump straight to this block time with a single block.
    block_time: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _exclusive(self) -> MineIn:
        if self.block_time is not None and (
            self.count != 1 or self.interval_seconds is not None
        ):
            raise ValueError("block_time cannot be combined with count or interval_seconds")
        return self


@router.get("", response_model=BlockOut)
async def get_block_info(registry: RegistryDep) -> BlockOut:
    info = registry.clock.info()
    return BlockOut(block_height=info.block_height, block_time=info.block_time)


@router.post("/blocks", response_model=BlockOut)
async def mine_blocks(body: MineIn, caller: CallerDep, registry: RegistryDep) -> BlockOut:
    if SETTINGS.is_prod:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    try:
        if body.block_time is not None:
            info = registry.clock.advance_to(body.block_time)
        else:
            info = registry.clock.mine(body.count, interval=body.interval_seconds)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None

    logger.info(
        "Chain advanced height=%d time=%d",
        info.block_height,
        info.block_time,
        extra={"caller": caller.address},
    )
    return BlockOut(block_height=info.block_height, block_time=info.block_time)
