from randwheel.strategies.base import BaseStrategy, register_strategy, get_strategy, list_strategies  # noqa: F401

# Import built-in strategies to trigger registration
import randwheel.strategies.roulette  # noqa: F401
import randwheel.strategies.top_k  # noqa: F401
