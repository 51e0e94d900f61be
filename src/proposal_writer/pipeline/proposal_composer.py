"""Proposal Composer - writes the final proposal text for a job post."""

from __future__ import annotations

import logging

from proposal_writer.clients.llm_client import LLMClient
from proposal_writer.models.assets import AssetBundle
from proposal_writer.models.job import JobAnalysis
from proposal_writer.models.request import GenerationRequest
from proposal_writer.models.technology import TechnologyCategory
from proposal_writer.utils.links import extract_link

logger = logging.getLogger(__name__)

PROPOSAL_MODEL = "claude-sonnet-4-5-20250929"

SYSTEM_PROMPT = """\
You write short Upwork proposals for freelance developers. The proposal must
read like a busy developer typed it themselves.

Style rules:
1. write mostly in lowercase. urls stay exactly as given
2. do not use commas anywhere in the proposal
3. a few small grammar or punctuation slips are fine. do not polish
4. plain conversational english. no headings no bullet points no emojis
5. never use stock phrases like: {banned}
6. only mention experience that is given to you. never invent clients or numbers

Output only the proposal text."""

# Phrases that make a proposal read as generated; also checked after generation.
BANNED_PHRASES = [
    "leverage",
    "utilize",
    "seamless",
    "robust",
    "cutting-edge",
    "synergy",
    "streamline",
    "delve",
    "look no further",
    "i would love to",
    "don't hesitate",
    "i'm the perfect fit",
    "i am confident",
    "proven track record",
    "best practices",
    "tailored solution",
    "i came across your posting",
    "i look forward to hearing",
]

WORD_LIMIT = 220

PORTFOLIO_LINE = "you can check more of my work here {link}"
CLOSING_BLOCK = "let me know when we can connect to discuss the project\n\nbest regards\n{name}"


def greeting_for(client_name: str | None) -> str:
    """``hey {client}`` when a client name is known, otherwise ``hey there``."""
    name = (client_name or "").strip()
    return f"hey {name}" if name else "hey there"


def format_tech_stack(stack: list[str]) -> str:
    # Commas are banned in the output, so the list is slash-separated
    return " / ".join(dict.fromkeys(stack))


def check_quality_gates(text: str) -> list[str]:
    """Return style problems found in a generated proposal. Never blocks."""
    problems = []
    word_count = len(text.split())
    if word_count > WORD_LIMIT:
        problems.append(f"{word_count} words (limit {WORD_LIMIT})")
    found = [p for p in BANNED_PHRASES if p in text.lower()]
    if found:
        problems.append(f"banned phrases: {found}")
    if "," in text:
        problems.append(f"{text.count(',')} commas")
    for problem in problems:
        logger.warning("  QUALITY GATE: %s", problem)
    return problems


class ProposalComposer:
    def __init__(
        self,
        llm: LLMClient,
        model: str = PROPOSAL_MODEL,
        *,
        temperature: float = 0.8,
        max_tokens: int = 600,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def system_prompt(self) -> str:
        return SYSTEM_PROMPT.format(banned=" / ".join(BANNED_PHRASES))

    def compose(
        self,
        request: GenerationRequest,
        technology: TechnologyCategory,
        analysis: JobAnalysis,
        assets: AssetBundle,
    ) -> str:
        """Build the fully resolved proposal prompt."""
        name = request.person_name
        stack = format_tech_stack(analysis.tech_stack) or technology.value
        portfolio_link = extract_link(assets.portfolio_text)

        return f"""Write an Upwork proposal for the job post below.

## Job post
{request.job_description}

## What the client needs
{analysis.summary}

## Writer
name: {name}
focus: {technology.value} developer
tools to mention where they fit: {stack}
tone: {request.tone}

## Structure (keep this order)
1. greeting. start with exactly: {greeting_for(request.client_name)}
2. one or two lines introducing {name} as a {technology.value} developer and \
naming the skills from the job post that {name} has
3. a recent work paragraph about a similar project. mention this link as is: \
{assets.reference_link}
   explain how that work maps to the problem in the job post
4. optionally a short paragraph based on this portfolio note. skip it if it \
says no portfolio is available:
   {assets.portfolio_text}
5. this line word for word: {PORTFOLIO_LINE.format(link=portfolio_link)}
6. this closing word for word:
{CLOSING_BLOCK.format(name=name)}

Keep it under 180 words."""

    async def write(
        self,
        request: GenerationRequest,
        technology: TechnologyCategory,
        analysis: JobAnalysis,
        assets: AssetBundle,
    ) -> str:
        """Generate the proposal and return the model's text unchanged."""
        prompt = self.compose(request, technology, analysis, assets)
        response = await self.llm.generate(
            prompt=prompt,
            system=self.system_prompt,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        check_quality_gates(response.text)
        return response.text
