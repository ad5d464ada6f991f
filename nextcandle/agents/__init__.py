"""AI agents for nextcandle.

- PatternAnalystAgent: single-candle reading and next-candle prediction
"""

from nextcandle.agents.base import (
    configure_api_key,
    create_agent,
    get_model,
    run_agent_sync,
)
from nextcandle.agents.pattern import (
    AnalysisError,
    PatternAnalystAgent,
    build_prompt,
    parse_analysis,
)

__all__ = [
    # Base utilities
    "configure_api_key",
    "create_agent",
    "get_model",
    "run_agent_sync",
    # Agents
    "PatternAnalystAgent",
    "AnalysisError",
    "build_prompt",
    "parse_analysis",
]
