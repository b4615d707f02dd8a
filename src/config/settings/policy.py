"""Settings da política de movimentação (round-up e sweep).

Valores monetários sempre em unidades menores (ex.: pence).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class PolicySettings:
    """Configurações de round-up e sweep.

    Attributes:
        roundup_goal_uid: Savings goal que recebe os round-ups (opcional)
        sweep_goal_uid: Savings goal que recebe o sweep (opcional)
        sweep_threshold: Valor mínimo (exclusivo) de entrada que dispara o
            sweep, em unidades menores; <= 0 desativa o sweep
    """

    roundup_goal_uid: str = ""
    sweep_goal_uid: str = ""
    sweep_threshold: int = 0

    @property
    def roundup_enabled(self) -> bool:
        return bool(self.roundup_goal_uid)

    @property
    def sweep_enabled(self) -> bool:
        return bool(self.sweep_goal_uid) and self.sweep_threshold > 0

    def validate(self) -> list[str]:
        """Valida configurações de política.

        Sem nenhum goal configurado o serviço nunca transfere nada.
        """
        errors: list[str] = []

        if not self.roundup_goal_uid and not self.sweep_goal_uid:
            errors.append("Nenhum savings goal configurado (ROUNDUP_GOAL ou SWEEP_GOAL)")

        if self.sweep_goal_uid and self.sweep_threshold <= 0:
            errors.append("SWEEP_GOAL configurado mas SWEEP_THRESHOLD <= 0 (sweep desativado)")

        return errors


def _parse_threshold(raw: str) -> int:
    """Converte SWEEP_THRESHOLD (inteiro em unidades menores)."""
    raw = raw.strip()
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"SWEEP_THRESHOLD deve ser inteiro em unidades menores: {raw!r}"
        raise ValueError(msg) from exc


def _load_from_env() -> PolicySettings:
    """Carrega PolicySettings a partir de variáveis de ambiente."""
    return PolicySettings(
        roundup_goal_uid=os.getenv("ROUNDUP_GOAL", "").strip(),
        sweep_goal_uid=os.getenv("SWEEP_GOAL", "").strip(),
        sweep_threshold=_parse_threshold(os.getenv("SWEEP_THRESHOLD", "")),
    )


@lru_cache(maxsize=1)
def get_policy_settings() -> PolicySettings:
    """Retorna instância cacheada de PolicySettings."""
    return _load_from_env()
