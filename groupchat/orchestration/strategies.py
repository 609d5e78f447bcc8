"""Prompt-driven selection and termination strategies for the group chat."""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ..agents.base import ChatAgent, CompletionProvider
from ..utils.config import DEFAULT_MAX_ITERATIONS, DEFAULT_SYSTEM_PROMPT
from .conversation import ConversationHistory

logger = logging.getLogger(__name__)

SELECTION_PROMPT_TEMPLATE = """Your job is to determine which participant takes the next turn in a conversation according to the action of the most recent participant.
State only the name of the participant to take the next turn.

Choose only from these participants:
{participants}

Always follow these rules when selecting the next participant:
{rules}

History:
{history}"""

TERMINATION_PROMPT_TEMPLATE = """Determine if the copy has been approved.  If so, respond with a single word: yes

History:
{history}"""

APPROVAL_TOKEN = "yes"


@dataclass(frozen=True)
class SelectionPolicy:
    """
    Turn-taking policy handed to the selection prompt.

    Attributes:
        participants: Names the model may choose from
        rules: Hand-off rules, one sentence each
        default_agent: Name used when the model's answer matches no participant
    """
    participants: Tuple[str, ...]
    rules: Tuple[str, ...]
    default_agent: str

    @classmethod
    def for_agents(cls, generator: str, critic: str) -> "SelectionPolicy":
        """Build the generator/critic ping-pong policy."""
        return cls(
            participants=(critic, generator),
            rules=(
                f"After user input, it is {generator}'s turn.",
                f"After {generator} replies, it is {critic}'s turn.",
                f"After {critic} provides feedback, it is {generator}'s turn.",
            ),
            default_agent=generator,
        )


def render_selection_prompt(policy: SelectionPolicy, transcript: str) -> str:
    return SELECTION_PROMPT_TEMPLATE.format(
        participants="\n".join(f"- {name}" for name in policy.participants),
        rules="\n".join(f"- {rule}" for rule in policy.rules),
        history=transcript,
    )


def render_termination_prompt(transcript: str) -> str:
    return TERMINATION_PROMPT_TEMPLATE.format(history=transcript)


def parse_agent_name(raw: str, agents: Sequence[ChatAgent], default_name: str) -> ChatAgent:
    """
    Resolve the model's answer to a roster member.

    The answer must equal an agent name once surrounding whitespace is
    removed. Anything else resolves to the default agent, or to the first
    roster member when the default is not on the roster.

    Args:
        raw: Raw provider answer
        agents: Roster to choose from
        default_name: Agent name to fall back to

    Returns:
        The selected agent
    """
    if not agents:
        raise ValueError("Cannot select from an empty roster")

    by_name = {agent.name: agent for agent in agents}
    answer = (raw or "").strip()

    if answer in by_name:
        return by_name[answer]

    fallback = by_name.get(default_name, agents[0])
    logger.warning(f"Selection answer {answer[:50]!r} matches no participant; defaulting to {fallback.name}")
    return fallback


def parse_approval(raw: str) -> bool:
    """True when the answer contains "yes" anywhere, in any case."""
    return APPROVAL_TOKEN in (raw or "").lower()


class PromptSelectionStrategy:
    """
    Asks the model which participant speaks next.

    The hand-off rules live in a SelectionPolicy so they can be swapped or
    tested without a model; the answer is resolved with parse_agent_name.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        policy: SelectionPolicy,
        instructions: str = DEFAULT_SYSTEM_PROMPT,
    ):
        self.provider = provider
        self.policy = policy
        self.instructions = instructions
        logger.info(f"Initialized PromptSelectionStrategy with participants={list(policy.participants)}")

    async def next(self, history: ConversationHistory, agents: Sequence[ChatAgent]) -> ChatAgent:
        """
        Select the next agent to speak.

        Args:
            history: Conversation so far
            agents: Roster to choose from

        Returns:
            A member of agents
        """
        prompt = render_selection_prompt(self.policy, history.render())
        raw = await self.provider.complete(self.instructions, prompt)
        agent = parse_agent_name(raw, agents, self.policy.default_agent)
        logger.info(f"Selected next speaker: {agent.name}")
        return agent


class ApprovalTerminationStrategy:
    """
    Asks the model whether the observed agent's latest turn approves the work.

    Only turns from the observed agents are evaluated. maximum_iterations is
    the hard ceiling the orchestrator enforces regardless of the decision.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        agents: Iterable[ChatAgent],
        maximum_iterations: int = DEFAULT_MAX_ITERATIONS,
        instructions: str = DEFAULT_SYSTEM_PROMPT,
    ):
        if maximum_iterations < 1:
            raise ValueError(f"maximum_iterations must be at least 1, got {maximum_iterations}")

        self.provider = provider
        self.observed: List[str] = [agent.name for agent in agents]
        self.maximum_iterations = maximum_iterations
        self.instructions = instructions
        logger.info(
            f"Initialized ApprovalTerminationStrategy observing={self.observed}, "
            f"maximum_iterations={maximum_iterations}"
        )

    def applies_to(self, agent: ChatAgent) -> bool:
        return agent.name in self.observed

    async def should_terminate(self, agent: ChatAgent, history: ConversationHistory) -> bool:
        """
        Decide whether the chat is done after agent's turn.

        Args:
            agent: Agent that produced the latest turn
            history: Conversation including that turn

        Returns:
            True when the model reports approval
        """
        if not self.applies_to(agent):
            return False

        prompt = render_termination_prompt(history.render())
        raw = await self.provider.complete(self.instructions, prompt)
        approved = parse_approval(raw)
        logger.info(f"Termination check after {agent.name}: approved={approved}")
        return approved
