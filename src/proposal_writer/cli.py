"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from proposal_writer.catalog.asset_catalog import load_catalog
from proposal_writer.clients.llm_client import LLMClient
from proposal_writer.config import load_config
from proposal_writer.models.request import GenerationRequest
from proposal_writer.models.technology import TechnologyCategory
from proposal_writer.parsers.inputs import (
    clean_job_description,
    load_job_description,
    normalize_name,
)
from proposal_writer.pipeline.job_analyzer import JobAnalyzer
from proposal_writer.pipeline.orchestrator import ProposalPipeline
from proposal_writer.usage.cost_calculator import calculate_cost
from proposal_writer.utils.links import extract_link

app = typer.Typer(
    name="proposal-writer",
    help="Upwork proposal generator",
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # The HTTP stack is noisy at DEBUG
    for name in ("anthropic", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def _read_job_post(jd: Path | None, text: str | None) -> str:
    if jd is not None:
        if not jd.exists():
            console.print(f"[red]Job post file not found: {jd}[/red]")
            raise typer.Exit(1)
        return load_job_description(jd)
    if text:
        return clean_job_description(text)
    console.print("[red]Provide the job post with --jd or --text[/red]")
    raise typer.Exit(1)


@app.command()
def generate(
    name: str = typer.Argument(help="Persona writing the proposal"),
    tone: str = typer.Argument(help="Tone, e.g. friendly or confident"),
    technology: str = typer.Option(None, "--technology", "-t", help="Technology focus (inferred from the job post if omitted)"),
    client: str = typer.Option(None, "--client", "-c", help="Client name for the greeting"),
    jd: Path = typer.Option(None, "--jd", help="Job post text file"),
    text: str = typer.Option(None, "--text", help="Job post text"),
    output: Path = typer.Option(None, "--output", "-o", help="Save the proposal to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Generate a proposal for a job post."""
    _configure_logging(verbose)
    config = load_config()
    job_post = _read_job_post(jd, text)

    try:
        request = GenerationRequest.from_raw(
            name, tone, job_post, technology=technology, client_name=client
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        console.print(f"[red]Missing required fields: {fields}[/red]")
        raise typer.Exit(1)

    if verbose:
        console.print(f"[dim]Persona: {request.person_name}[/dim]")
        console.print(f"[dim]Technology: {request.requested_technology or 'auto'}[/dim]")
        console.print(f"[dim]Job post: {len(job_post)} chars[/dim]")

    llm = LLMClient(timeout=config.llm.timeout)
    pipeline = ProposalPipeline.from_config(llm, config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Generating proposal...", total=None)

        def on_phase(phase: str, detail: str) -> None:
            progress.update(task, description=detail)

        try:
            result = asyncio.run(
                asyncio.wait_for(
                    pipeline.run(request, on_phase=on_phase),
                    timeout=config.pipeline.timeout_seconds,
                )
            )
        except Exception:
            logger.exception("Proposal generation failed")
            console.print("[red]Something went wrong while generating the proposal.[/red]")
            raise typer.Exit(1)

    console.print(Panel(
        result.proposal,
        title=f"{result.technology.value} proposal ({result.resolution_tier.value})",
        border_style="green",
    ))
    if result.degraded_analysis:
        console.print("[yellow]Job analysis was not valid JSON; technology was guessed from keywords.[/yellow]")

    if output:
        output.write_text(result.proposal, encoding="utf-8")
        console.print(f"[green]Saved proposal: {output}[/green]")

    if verbose:
        usage = llm.get_token_summary()
        console.print(
            f"[dim]Tokens: {usage['input']} in / {usage['output']} out, "
            f"~${calculate_cost(usage['calls']):.4f}, {result.elapsed_seconds:.1f}s[/dim]"
        )


@app.command()
def analyze(
    jd: Path = typer.Option(None, "--jd", help="Job post text file"),
    text: str = typer.Option(None, "--text", help="Job post text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Run only the job analysis step."""
    _configure_logging(verbose)
    config = load_config()
    job_post = _read_job_post(jd, text)

    analyzer = JobAnalyzer(
        LLMClient(timeout=config.llm.timeout),
        model=config.llm.analysis_model,
        temperature=config.analysis.temperature,
        max_tokens=config.analysis.max_tokens,
    )
    outcome = asyncio.run(analyzer.analyze_detailed(job_post))
    analysis = outcome.analysis

    detected = analysis.detected_technology.value if analysis.detected_technology else "none"
    body = f"{analysis.summary}\n\n[bold]Technology:[/bold] {detected}"
    if analysis.tech_stack:
        body += f"\n[bold]Stack:[/bold] {', '.join(analysis.tech_stack)}"
    console.print(Panel(body, title="Job analysis", border_style="yellow" if outcome.degraded else "blue"))


@app.command()
def assets(
    technology: str = typer.Argument(help="Technology category"),
    name: str = typer.Argument(help="Persona name"),
) -> None:
    """Show the portfolio assets for a technology and persona."""
    category = TechnologyCategory.from_label(technology)
    if category is None:
        console.print(f"[red]Unknown technology: {technology}[/red]")
        console.print(f"[dim]Known: {', '.join(TechnologyCategory.labels())}[/dim]")
        raise typer.Exit(1)

    config = load_config()
    catalog = load_catalog(config.catalog.resolved_path)
    bundle = catalog.lookup(category, normalize_name(name))

    console.print(Panel(
        f"[bold]Reference link:[/bold] {bundle.reference_link}\n"
        f"[bold]Portfolio link:[/bold] {extract_link(bundle.portfolio_text)}\n\n"
        f"{bundle.portfolio_text}",
        title=f"{category.value} / {name}",
    ))


@app.command()
def technologies() -> None:
    """List technology categories and the personas in the catalog."""
    config = load_config()
    catalog = load_catalog(config.catalog.resolved_path)

    table = Table(title="Technologies")
    table.add_column("Category", style="bold")
    table.add_column("Personas")
    for category in TechnologyCategory:
        table.add_row(category.value, ", ".join(catalog.people(category)) or "-")
    console.print(table)


if __name__ == "__main__":
    app()
