"""Plans tarifaires: ensemble ferme de tiers avec limites par defaut."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PlanTier(str, Enum):
    FREE = "Free"
    PRO = "Pro"
    ENTERPRISE = "Enterprise"


# (message_limit, chatbot_limit) par tier
PLAN_DEFAULTS: dict[PlanTier, tuple[int, int]] = {
    PlanTier.FREE: (1_000, 1),
    PlanTier.PRO: (50_000, 10),
    PlanTier.ENTERPRISE: (1_000_000, 100),
}


@dataclass(frozen=True)
class Plan:
    """
    Plan d'un tenant.

    Free et Pro imposent leurs limites par defaut. Seul Enterprise
    accepte des limites personnalisees.
    """

    tier: PlanTier
    message_limit: int
    chatbot_limit: int

    def __post_init__(self):
        if self.message_limit < 0 or self.chatbot_limit < 0:
            raise ValueError("Plan limits must be non-negative.")

    @classmethod
    def free(cls) -> "Plan":
        return cls(PlanTier.FREE, *PLAN_DEFAULTS[PlanTier.FREE])

    @classmethod
    def pro(cls) -> "Plan":
        return cls(PlanTier.PRO, *PLAN_DEFAULTS[PlanTier.PRO])

    @classmethod
    def enterprise(
        cls,
        message_limit: Optional[int] = None,
        chatbot_limit: Optional[int] = None,
    ) -> "Plan":
        default_messages, default_bots = PLAN_DEFAULTS[PlanTier.ENTERPRISE]
        return cls(
            PlanTier.ENTERPRISE,
            default_messages if message_limit is None else message_limit,
            default_bots if chatbot_limit is None else chatbot_limit,
        )

    @classmethod
    def for_tier(
        cls,
        tier: PlanTier | str,
        message_limit: Optional[int] = None,
        chatbot_limit: Optional[int] = None,
    ) -> "Plan":
        """Construit le plan d'un tier; les limites ne comptent que pour Enterprise."""
        tier = PlanTier(tier)
        if tier is PlanTier.ENTERPRISE:
            return cls.enterprise(message_limit, chatbot_limit)
        if tier is PlanTier.PRO:
            return cls.pro()
        return cls.free()

    @property
    def name(self) -> str:
        return self.tier.value
