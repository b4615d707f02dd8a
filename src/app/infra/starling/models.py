"""Contratos de resposta da Starling API v2 (apenas campos usados)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CurrencyAndAmount(BaseModel):
    """Valor monetário no formato da API (`minorUnits` pode ser negativo)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    currency: str
    minor_units: int = Field(..., alias="minorUnits")


class BalanceResponse(BaseModel):
    """GET /accounts/{accountUid}/balance."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    effective_balance: CurrencyAndAmount = Field(..., alias="effectiveBalance")
    cleared_balance: CurrencyAndAmount | None = Field(default=None, alias="clearedBalance")


class TransferResponse(BaseModel):
    """PUT /account/{accountUid}/savings-goals/{goalUid}/add-money/{transferUid}."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    transfer_uid: str = Field(..., alias="transferUid")
    success: bool = True
