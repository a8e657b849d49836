"""CLI entrypoints for BlogWeaver."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.tree import Tree

from blogweaver.config import Settings, load_settings
from blogweaver.export import write_markdown
from blogweaver.generation.service import GenerationService
from blogweaver.logging import configure_logging, get_logger
from blogweaver.models.outline import OutlineNode
from blogweaver.orchestrator.wizard import WizardSession

app = typer.Typer(add_completion=False, help="BlogWeaver blog-writing assistant CLI")
logger = get_logger(__name__)
console = Console()


def _outline_tree(title: str, nodes: list[OutlineNode]) -> Tree:
    """Build a rich tree from the flat, leveled outline."""

    root = Tree(f"[bold]{title}[/bold]")
    # stack of (level, branch); the root acts as level 0
    stack: list[tuple[int, Tree]] = [(0, root)]
    for node in nodes:
        while stack[-1][0] >= node.level:
            stack.pop()
        branch = stack[-1][1].add(node.title)
        stack.append((node.level, branch))
    return root


async def _write_article(theme: str, title_index: int, settings: Settings) -> WizardSession:
    service = GenerationService.from_settings(settings)
    session = WizardSession(service, default_node_title=settings.default_node_title)

    titles = await session.submit_theme(theme)
    if not 0 <= title_index < len(titles):
        raise typer.BadParameter(f"--title-index must be between 0 and {len(titles) - 1}")
    await session.select_title(titles[title_index])
    await session.approve_outline()
    return session


@app.command()
def generate(
    theme: str = typer.Argument(..., help="Article theme."),
    title_index: int = typer.Option(0, "--title-index", "-t", help="Which generated title to use (0-based)."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output markdown file"),
) -> None:
    """Run the whole wizard non-interactively and write the article as markdown."""

    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("CLI generate requested")

    session = asyncio.run(_write_article(theme, title_index, settings))
    if session.warning:
        console.print(f"[yellow]warning:[/yellow] {session.warning}")
    console.print(_outline_tree(session.selected_title or theme, list(session.outline.nodes)))

    path = write_markdown(output or settings.output_path, session.content)
    typer.echo(str(path))


@app.command()
def outline(
    theme: str = typer.Argument(..., help="Article theme."),
    title: str = typer.Argument(..., help="Article title."),
) -> None:
    """Generate and print an outline for a theme and title."""

    settings = load_settings()
    configure_logging(settings.log_level)
    service = GenerationService.from_settings(settings)

    result = asyncio.run(service.generate_outline(theme, title))
    if result.fallback:
        console.print(f"[yellow]warning:[/yellow] {result.warning}")
    console.print(_outline_tree(title, result.value))


if __name__ == "__main__":
    app()
