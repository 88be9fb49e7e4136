"""Rich rendering of an analysis result for the terminal."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from regref.analysis.analyzer import AnalysisResult
from regref.references.models import ResolvedReference

CONTEXT_PREVIEW_CHARS = 200
EXTERNAL_ADVISORY = "Check the relevant regulatory website"


def _or_na(value: object) -> str:
    return "N/A" if value in (None, "") else str(value)


def _context_preview(context: str) -> str:
    if not context:
        return "N/A"
    if len(context) <= CONTEXT_PREVIEW_CHARS:
        return context
    return context[:CONTEXT_PREVIEW_CHARS] + "..."


def _reference_type_label(reference_type: str) -> str:
    return reference_type.replace("_", " ").capitalize()


def _local_entry(number: int, ref: ResolvedReference) -> Text:
    candidate = ref.candidate
    local = ref.local_file
    text = Text()
    text.append(f"{number}. ", style="bold green")
    text.append(f"[{candidate.confidence.value.upper()}] ", style="bold")
    text.append(f"{candidate.exact_text}\n")
    text.append(f"   Page: {_or_na(candidate.page_number)}\n")
    text.append(f"   Links to: {_or_na(local.filename if local else None)}\n")
    text.append(f"   Subject: {_or_na(local.subject if local else None)}\n")
    if local and local.circular_number:
        text.append(f"   Number: {local.circular_number}\n")
    text.append(f"   Reasoning: {_or_na(candidate.reasoning)}\n", style="dim")
    text.append(f"   Context: {_context_preview(candidate.context)}\n", style="dim")
    text.append(f"   File: {_or_na(local.file_path if local else None)}\n")
    return text


def _external_entry(number: int, ref: ResolvedReference) -> Text:
    candidate = ref.candidate
    text = Text()
    text.append(f"{number}. ", style="bold red")
    text.append(f"[{candidate.confidence.value.upper()}] ", style="bold")
    text.append(f"{candidate.exact_text}\n")
    text.append(f"   Page: {_or_na(candidate.page_number)}\n")
    text.append(f"   Type: {_reference_type_label(candidate.reference_type)}\n")
    text.append(f"   Title: {_or_na(candidate.title)}\n")
    if candidate.circular_number:
        text.append(f"   Number: {candidate.circular_number}\n")
    text.append(f"   Reasoning: {_or_na(candidate.reasoning)}\n", style="dim")
    text.append(f"   Context: {_context_preview(candidate.context)}\n", style="dim")
    text.append(f"   Source info: {EXTERNAL_ADVISORY}\n")
    return text


def _entries_panel(title: str, entries: list[Text], style: str) -> Panel:
    body = Text("\n").join(entries)
    return Panel(body, title=f"[bold {style}]{title}[/bold {style}]", border_style=style)


def render_analysis(result: AnalysisResult, console: Console) -> None:
    """Print the analysis result."""
    aggregate = result.aggregate
    summary = aggregate.summary

    console.print(Rule("[bold blue]Reference Analysis Results[/bold blue]"))
    console.print(f"[blue]Source:[/blue] {escape(result.source_file)}")
    console.print(f"[blue]Analyzed:[/blue] {result.analyzed_at:%Y-%m-%d %H:%M:%S}")
    console.print(f"[blue]Total references found:[/blue] {summary.total}")

    if summary.total == 0:
        console.print("[red]No references found.[/red]")
        if result.candidate_error:
            console.print(
                f"  [dim]Reference extraction failed ({result.candidate_error}); "
                "see the log for details.[/dim]"
            )
        return

    console.print(
        f"[blue]Summary:[/blue] {summary.available_locally} local | "
        f"{summary.external} external"
    )

    if aggregate.local:
        entries = [_local_entry(i, ref) for i, ref in enumerate(aggregate.local, 1)]
        console.print(
            _entries_panel(
                f"Local references ({summary.available_locally}) - in your collection",
                entries,
                "green",
            )
        )

    if aggregate.external:
        entries = [_external_entry(i, ref) for i, ref in enumerate(aggregate.external, 1)]
        console.print(
            _entries_panel(
                f"External references ({summary.external}) - need to obtain",
                entries,
                "red",
            )
        )

    console.print("\n[bold blue]Compliance summary[/bold blue]")
    console.print(f"  Local documents ready for review: {summary.available_locally}")
    console.print(f"  External documents needed: {summary.external}")
    if summary.external:
        console.print(
            "  [dim]Obtain the external references for a complete compliance review[/dim]"
        )
