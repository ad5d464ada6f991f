"""Base utilities for AI agents.

This module provides common utilities for creating and running AI agents
using the OpenAI Agents SDK.
"""

import logging
import os
from typing import Optional

# Disable tracing to avoid noisy 503 errors from telemetry
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, Runner, set_default_openai_key

logger = logging.getLogger(__name__)

# Default model to use for agents
DEFAULT_MODEL = "gpt-5.2"


def get_model(override: Optional[str] = None) -> str:
    """Get the model to use for agents.

    Uses the explicit override if given, then the OPENAI_MODEL environment
    variable, then the default.

    Args:
        override: Optional model name (from CLI flag or config).

    Returns:
        Model name string.
    """
    return override or os.environ.get("OPENAI_MODEL", DEFAULT_MODEL)


def configure_api_key(api_key: Optional[str]) -> None:
    """Register an API key with the Agents SDK.

    Does nothing when no key is given, leaving the SDK to read
    OPENAI_API_KEY itself.
    """
    if api_key:
        set_default_openai_key(api_key)


def create_agent(
    name: str,
    instructions: str,
    model: Optional[str] = None,
) -> Agent:
    """Create an AI agent with the specified configuration.

    Args:
        name: Name of the agent.
        instructions: System instructions for the agent.
        model: Optional model override. Uses default if not specified.

    Returns:
        Configured Agent instance.
    """
    return Agent(
        name=name,
        instructions=instructions,
        tools=[],
        model=get_model(model),
    )


def run_agent_sync(agent: Agent, message: str) -> str:
    """Run an agent synchronously and return the response.

    Args:
        agent: The agent to run.
        message: User message to send to the agent.

    Returns:
        Agent's final output as a string.
    """
    logger.info("Running agent %s with model %s", agent.name, agent.model)
    result = Runner.run_sync(agent, message)
    return str(result.final_output)
