"""Battle AI policies.

Re-exports the base class and all concrete policies so consumers can do::

    from creature_battle.sim.ai_policies import AIPolicy, GreedyPolicy
"""

from .base import AIDecision, AIPolicy, legal_actions
from .greedy_policy import GreedyPolicy
from .random_policy import RandomPolicy

__all__ = ["AIDecision", "AIPolicy", "legal_actions", "GreedyPolicy", "RandomPolicy"]
